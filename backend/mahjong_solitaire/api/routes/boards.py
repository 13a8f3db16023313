"""Board generation and play API routes."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ...core.generator import BoardGenerator
from ...core.matcher import check_stuck, check_win, find_all_matches, get_free_tiles
from ...core.mutator import remove_tile_pair, shuffle_board
from ...core.occlusion import is_free_tile
from ...core.simulator import BoardSimulator, SimulationStrategy, verify_solution
from ...models.board import TILE_ID_PREFIX, Board, TileInstance
from ...models.layout import Layout
from ...models.layouts import get_layout
from ...models.schemas import (
    BoardResponse,
    BoardStateResponse,
    ErrorResponse,
    GenerateBoardRequest,
    RemovePairRequest,
    RemovePairResponse,
    ShuffleRequest,
    SimulateRequest,
    SimulateResponse,
    TileSchema,
    TilesRequest,
)
from ..deps import get_board_generator, get_board_simulator

router = APIRouter(prefix="/api/boards", tags=["boards"])


def _resolve_layout(layout_id: str) -> Layout:
    try:
        return get_layout(layout_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Layout not found: {layout_id}")


def _highest_tile_number(tiles: List[TileInstance]) -> int:
    """Largest n among ids shaped like "tile-<n>"."""
    highest = 0
    prefix = f"{TILE_ID_PREFIX}-"
    for tile in tiles:
        if tile.id.startswith(prefix) and tile.id[len(prefix):].isdigit():
            highest = max(highest, int(tile.id[len(prefix):]))
    return highest


def _board_response(board: Board) -> BoardResponse:
    return BoardResponse.from_board(board, [t.id for t in get_free_tiles(board.tiles)])


@router.post(
    "/generate",
    response_model=BoardResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def generate_board(
    request: GenerateBoardRequest,
    generator: BoardGenerator = Depends(get_board_generator),
) -> BoardResponse:
    """
    Generate a solvable board.

    Args:
        request: GenerateBoardRequest with a layout id or explicit positions.
        generator: BoardGenerator dependency.

    Returns:
        BoardResponse with the tiles and the solution order.
    """
    if request.layout_id:
        layout = _resolve_layout(request.layout_id)
    elif request.positions is not None:
        positions = tuple(p.to_position() for p in request.positions)
        if len(set(positions)) != len(positions):
            raise HTTPException(status_code=400, detail="Positions must be unique")
        layout = Layout(id="custom", name="Custom", positions=positions)
    else:
        raise HTTPException(status_code=400, detail="Either layout_id or positions is required")

    try:
        board = generator.generate(layout, seed=request.seed)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Generation failed: {str(e)}")

    return _board_response(board)


@router.post("/state", response_model=BoardStateResponse)
async def get_board_state(
    request: TilesRequest,
    generator: BoardGenerator = Depends(get_board_generator),
) -> BoardStateResponse:
    """Free tiles, available matches, hint and game-over flags for a board."""
    tiles = request.to_tiles()
    matches = find_all_matches(tiles, generator.catalog)
    is_won = check_win(tiles)

    return BoardStateResponse(
        free_tile_ids=[t.id for t in get_free_tiles(tiles)],
        matches=[(a.id, b.id) for a, b in matches],
        hint=(matches[0][0].id, matches[0][1].id) if matches else None,
        tiles_remaining=sum(1 for t in tiles if not t.is_removed),
        is_won=is_won,
        is_stuck=not is_won and not matches,
    )


@router.post(
    "/remove",
    response_model=RemovePairResponse,
    responses={400: {"model": ErrorResponse}},
)
async def remove_pair(
    request: RemovePairRequest,
    generator: BoardGenerator = Depends(get_board_generator),
) -> RemovePairResponse:
    """
    Remove a matched pair.

    The mutator trusts its input, so the pair is checked here: both tiles
    must exist, be distinct, be free and match.
    """
    tiles = request.to_tiles()
    by_id = {t.id: t for t in tiles}
    tile1_id, tile2_id = request.tile_ids

    if tile1_id == tile2_id:
        raise HTTPException(status_code=400, detail="A tile cannot be matched with itself")

    for tile_id in (tile1_id, tile2_id):
        tile = by_id.get(tile_id)
        if tile is None:
            raise HTTPException(status_code=400, detail=f"Unknown tile: {tile_id}")
        if not is_free_tile(tile, tiles):
            raise HTTPException(status_code=400, detail=f"Tile is not free: {tile_id}")

    if not generator.catalog.ids_match(by_id[tile1_id].type_id, by_id[tile2_id].type_id):
        raise HTTPException(status_code=400, detail="Tiles do not match")

    new_tiles = remove_tile_pair(tiles, tile1_id, tile2_id)
    is_won = check_win(new_tiles)

    return RemovePairResponse(
        tiles=[TileSchema.from_tile(t) for t in new_tiles],
        tiles_remaining=sum(1 for t in new_tiles if not t.is_removed),
        is_won=is_won,
        is_stuck=not is_won and check_stuck(new_tiles, generator.catalog),
    )


@router.post(
    "/shuffle",
    response_model=BoardResponse,
    responses={404: {"model": ErrorResponse}},
)
async def shuffle(
    request: ShuffleRequest,
    generator: BoardGenerator = Depends(get_board_generator),
) -> BoardResponse:
    """Redeal the active tiles of a board."""
    layout = _resolve_layout(request.layout_id)
    tiles = request.to_tiles()
    board = Board(
        layout=layout,
        tiles=tiles,
        next_tile_id=max(request.next_tile_id, _highest_tile_number(tiles)),
    )

    return _board_response(shuffle_board(board, generator, seed=request.seed))


@router.post(
    "/simulate",
    response_model=SimulateResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def simulate(
    request: SimulateRequest,
    generator: BoardGenerator = Depends(get_board_generator),
    simulator: BoardSimulator = Depends(get_board_simulator),
) -> SimulateResponse:
    """Generate a board and play it repeatedly."""
    valid_strategies = [s.value for s in SimulationStrategy]
    if request.strategy not in valid_strategies:
        raise HTTPException(
            status_code=400,
            detail=f"Invalid strategy. Must be one of: {valid_strategies}",
        )

    layout = _resolve_layout(request.layout_id)
    board = generator.generate(layout, seed=request.seed)
    result = simulator.simulate(
        board,
        iterations=request.iterations,
        strategy=request.strategy,
        seed=request.seed,
    )

    return SimulateResponse(
        **result.to_dict(),
        solvable=board.solvable,
        solution_verified=verify_solution(board, generator.catalog),
    )
