"""Layout and tile catalog API routes."""
from fastapi import APIRouter, Depends, HTTPException

from ...models.layouts import get_layout, list_layouts
from ...models.schemas import (
    ErrorResponse,
    LayoutDetail,
    LayoutListResponse,
    TileCatalogResponse,
    TileTypeSchema,
    layout_detail,
    layout_summary,
)
from ...models.tiles import TileCatalog
from ..deps import get_tile_catalog

router = APIRouter(prefix="/api", tags=["layouts"])


@router.get("/layouts", response_model=LayoutListResponse)
async def get_layouts() -> LayoutListResponse:
    """List registered layouts."""
    return LayoutListResponse(layouts=[layout_summary(l) for l in list_layouts()])


@router.get(
    "/layouts/{layout_id}",
    response_model=LayoutDetail,
    responses={404: {"model": ErrorResponse}},
)
async def get_layout_detail(layout_id: str) -> LayoutDetail:
    """Get a layout with its positions."""
    try:
        layout = get_layout(layout_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Layout not found: {layout_id}")
    return layout_detail(layout)


@router.get("/tiles", response_model=TileCatalogResponse)
async def get_tile_types(
    catalog: TileCatalog = Depends(get_tile_catalog),
) -> TileCatalogResponse:
    """List the tile catalog."""
    return TileCatalogResponse(
        tile_types=[TileTypeSchema(**t.to_dict()) for t in catalog.all_types],
        full_set_size=catalog.full_set_size,
    )


@router.get(
    "/tiles/{type_id}",
    response_model=TileTypeSchema,
    responses={404: {"model": ErrorResponse}},
)
async def get_tile_type(
    type_id: str,
    catalog: TileCatalog = Depends(get_tile_catalog),
) -> TileTypeSchema:
    """Get a single tile type."""
    try:
        tile_type = catalog.get(type_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Tile type not found: {type_id}")
    return TileTypeSchema(**tile_type.to_dict())
