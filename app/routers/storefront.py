# app/routers/storefront.py
"""
Storefront screen + navigation, search, incremental reveal and selection.
GET /screen always returns exactly one of: catalog, detail, cart, admin.
"""

from fastapi import APIRouter, Depends, HTTPException

from app.schemas.catalog import ScrollEvent, SearchUpdate
from app.services.catalog_client import CatalogStoreClient, get_client
from app.services.catalog_state import CatalogState, get_state, load_catalog
from app.services.screen_service import build_screen
from app.services.view_router import NAVIGABLE, View, navigate

router = APIRouter()


@router.get("/screen", summary="Current screen")
def current_screen(state: CatalogState = Depends(get_state)):
    return build_screen(state)


@router.post("/navigation/{target}", summary="Menu navigation (catalog | cart | admin)")
def navigate_to(target: str, state: CatalogState = Depends(get_state)):
    try:
        view = View(target)
    except ValueError:
        view = None
    if view not in NAVIGABLE:
        raise HTTPException(status_code=404, detail=f"Unknown navigation target '{target}'")
    navigate(state, view)
    return build_screen(state)


@router.put("/catalog/search", summary="Set search text (resets the reveal count)")
def set_search(body: SearchUpdate, state: CatalogState = Depends(get_state)):
    state.set_search(body.text)
    return {"search_text": state.search_text, "visible_count": state.visible_count}


@router.post("/catalog/scroll", summary="Scroll listener — reveal more near the bottom")
def on_scroll(body: ScrollEvent, state: CatalogState = Depends(get_state)):
    revealed = state.on_scroll(body.viewport_height, body.scroll_y, body.content_height)
    return {"revealed": revealed, "visible_count": state.visible_count, "has_more": state.has_more}


@router.post("/catalog/reload", summary="Re-run the bulk catalog load")
async def reload_catalog(state: CatalogState = Depends(get_state),
                         client: CatalogStoreClient = Depends(get_client)):
    loaded = await load_catalog(state, client)
    return {"status": "ok", "loaded": loaded, "total": len(state.vehicles)}


@router.put("/catalog/selection/{vehicle_id}", summary="Open a vehicle's detail screen")
def select_vehicle(vehicle_id: int, state: CatalogState = Depends(get_state)):
    if state.get_vehicle(vehicle_id) is None:
        raise HTTPException(status_code=404, detail="Vehicle not found")
    state.select(vehicle_id)
    return build_screen(state)


@router.delete("/catalog/selection", summary="Back to the catalog")
def clear_selection(state: CatalogState = Depends(get_state)):
    state.clear_selection()
    return build_screen(state)
