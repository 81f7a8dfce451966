"""
Locations API Endpoint

Receives map events from the browser, lists the saved locations and
exports them as a downloadable file.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from pinboard.schemas.geo import Coordinates
from pinboard.schemas.geocoding import SearchResult
from pinboard.schemas.location import LocationRecord
from pinboard.schemas.map import MapEventResult
from pinboard.services.export_service import EmptyExportError, export_locations
from pinboard.services.map_session import MapSession, get_map_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/search-selections", response_model=MapEventResult)
async def record_search_selection(
    selection: SearchResult,
    session: MapSession = Depends(get_map_session),
):
    """
    Mark and save a place the user picked from the search control.

    Returns the saved record and the annotations to draw: view fit, circle
    and marker, in that order.
    """
    return session.pipeline.handle_search_selection(selection)


@router.post("/clicks", response_model=MapEventResult)
async def record_map_click(
    coordinates: Coordinates,
    session: MapSession = Depends(get_map_session),
):
    """
    Mark and save a clicked point, named by reverse geocoding.

    Always succeeds for valid coordinates; geocoding failures fall back to a
    placeholder name.
    """
    return await session.pipeline.handle_click(coordinates)


@router.get("", response_model=List[LocationRecord])
async def list_locations(session: MapSession = Depends(get_map_session)):
    """
    List every saved location in the order it was saved.
    """
    return session.store.snapshot()


@router.get("/export")
async def export_saved_locations(session: MapSession = Depends(get_map_session)):
    """
    Download the saved locations as a JSON file.

    Raises:
        HTTPException: 404 when there is nothing to export
    """
    try:
        export_file = export_locations(session.store)
    except EmptyExportError as e:
        logger.info("Export requested with no saved locations")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e

    return Response(
        content=export_file.content,
        media_type=export_file.media_type,
        headers={"Content-Disposition": f'attachment; filename="{export_file.filename}"'},
    )
