"""Core engine package.

This package contains the occlusion model, board generation, match finding,
board mutation, simulation and game session logic.
"""
from .occlusion import (
    is_blocked_above,
    is_blocked_left,
    is_blocked_right,
    is_free_tile,
    is_position_available,
)
from .matcher import find_all_matches, get_free_tiles, check_win, check_stuck, get_hint
from .generator import BoardGenerator, generate_board, get_generator
from .mutator import remove_tile_pair, shuffle_board
from .simulator import BoardSimulator, SimulationStrategy, get_simulator, verify_solution
from .session import GameSession, SelectionOutcome

__all__ = [
    "is_blocked_above",
    "is_blocked_left",
    "is_blocked_right",
    "is_free_tile",
    "is_position_available",
    "find_all_matches",
    "get_free_tiles",
    "check_win",
    "check_stuck",
    "get_hint",
    "BoardGenerator",
    "generate_board",
    "get_generator",
    "remove_tile_pair",
    "shuffle_board",
    "BoardSimulator",
    "SimulationStrategy",
    "get_simulator",
    "verify_solution",
    "GameSession",
    "SelectionOutcome",
]
