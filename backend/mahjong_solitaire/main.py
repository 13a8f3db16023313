"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import get_settings
from .api.routes import boards, layouts

# Get settings
settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else settings.log_level.upper(),
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%H:%M:%S'
)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="Solvable Mahjong Solitaire board generation and play engine",
    docs_url="/docs",
    redoc_url="/redoc",
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(layouts.router)
app.include_router(boards.router)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Mahjong Solitaire Engine API",
        "endpoints": {
            "layouts": "/api/layouts",
            "tiles": "/api/tiles",
            "tile": "/api/tiles/{type_id}",
            "generate": "/api/boards/generate",
            "state": "/api/boards/state",
            "remove": "/api/boards/remove",
            "shuffle": "/api/boards/shuffle",
            "simulate": "/api/boards/simulate",
            "docs": "/docs",
        },
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mahjong_solitaire.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
