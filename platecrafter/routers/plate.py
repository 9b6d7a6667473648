"""Plate editing API."""
from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Dict, List, Optional

from platecrafter.config import settings
from platecrafter.dependencies import get_render_service, get_session_service
from platecrafter.engine import SelectionMode
from platecrafter.errors import PlateError
from platecrafter.models import (
    ConcentrationUnit, PlateRender, PlateState, PlateView, Theme, WellUpdate
)
from platecrafter.routers.errors import plate_http_error
from platecrafter.services import RenderService, SessionService

router = APIRouter()


class WellsUpdateRequest(BaseModel):
    """Same data for several wells."""
    ids: List[str]
    data: WellUpdate
    unit: ConcentrationUnit = ConcentrationUnit.MOLAR


class BatchUpdateRequest(BaseModel):
    """Per-well data."""
    updates: Dict[str, WellUpdate]
    unit: ConcentrationUnit = ConcentrationUnit.MOLAR


class SelectRequest(BaseModel):
    """Well click."""
    well_id: str
    mode: SelectionMode = SelectionMode.REPLACE


class DirectionRequest(BaseModel):
    """Order of the selected pair."""
    start_id: str
    end_id: str


@router.get("", response_model=PlateState)
async def get_plate(session: SessionService = Depends(get_session_service)):
    """Current plate, selection and undo/redo state."""
    return session.state()


@router.put("/wells/batch", response_model=PlateState)
async def batch_update_wells(
    request: BatchUpdateRequest,
    session: SessionService = Depends(get_session_service)
):
    """Apply per-well updates as one undo step."""
    try:
        session.batch_update(request.updates, request.unit)
    except PlateError as e:
        raise plate_http_error(e)
    return session.state()


@router.put("/wells", response_model=PlateState)
async def update_wells(
    request: WellsUpdateRequest,
    session: SessionService = Depends(get_session_service)
):
    """Apply the same update to several wells as one undo step."""
    try:
        session.update_wells(request.ids, request.data, request.unit)
    except PlateError as e:
        raise plate_http_error(e)
    return session.state()


@router.put("/wells/{well_id}", response_model=PlateState)
async def update_well(
    well_id: str,
    data: WellUpdate,
    unit: ConcentrationUnit = ConcentrationUnit.MOLAR,
    session: SessionService = Depends(get_session_service)
):
    """Update one well."""
    try:
        session.update_well(well_id, data, unit)
    except PlateError as e:
        raise plate_http_error(e)
    return session.state()


@router.post("/undo", response_model=PlateState)
async def undo(session: SessionService = Depends(get_session_service)):
    session.undo()
    return session.state()


@router.post("/redo", response_model=PlateState)
async def redo(session: SessionService = Depends(get_session_service)):
    session.redo()
    return session.state()


@router.post("/reset", response_model=PlateState)
async def reset(session: SessionService = Depends(get_session_service)):
    """Empty plate, fresh history."""
    session.reset()
    return session.state()


@router.post("/selection", response_model=PlateState)
async def select_well(
    request: SelectRequest,
    session: SessionService = Depends(get_session_service)
):
    try:
        session.select(request.well_id, request.mode)
    except PlateError as e:
        raise plate_http_error(e)
    return session.state()


@router.put("/selection/direction", response_model=PlateState)
async def set_direction(
    request: DirectionRequest,
    session: SessionService = Depends(get_session_service)
):
    """Swap the dilution direction of the selected pair."""
    try:
        session.set_direction(request.start_id, request.end_id)
    except PlateError as e:
        raise plate_http_error(e)
    return session.state()


@router.delete("/selection", response_model=PlateState)
async def clear_selection(session: SessionService = Depends(get_session_service)):
    session.clear_selection()
    return session.state()


@router.get("/render", response_model=PlateRender)
async def render_plate(
    view: PlateView = PlateView.CONCENTRATION,
    theme: Optional[Theme] = None,
    unit: ConcentrationUnit = ConcentrationUnit.MOLAR,
    session: SessionService = Depends(get_session_service),
    renderer: RenderService = Depends(get_render_service)
):
    """
    Labels, colors and tooltips for every well.
    """
    return renderer.render(
        session.grid,
        view=view,
        theme=theme or settings.default_theme,
        unit=unit,
        selection=session.selection,
        checkerboard=session.checkerboard,
    )
