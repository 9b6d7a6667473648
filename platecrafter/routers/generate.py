"""Layout generation API."""
from fastapi import APIRouter, Depends
from typing import Any, List

from platecrafter.dependencies import get_layout_service, get_session_service
from platecrafter.errors import PlateError
from platecrafter.models import (
    CheckerboardRequest, CheckerboardResult, DilutionRequest, PlateState
)
from platecrafter.routers.errors import plate_http_error
from platecrafter.services import LayoutService, SessionService

router = APIRouter()


@router.post("/dilution", response_model=PlateState)
async def generate_dilution(
    request: DilutionRequest,
    session: SessionService = Depends(get_session_service)
):
    """
    Fill a row or column with a serial dilution.

    Start and end default to the two selected wells.
    """
    try:
        session.apply_dilution(request)
    except PlateError as e:
        raise plate_http_error(e)
    return session.state()


@router.post("/checkerboard", response_model=CheckerboardResult)
async def generate_checkerboard(
    request: CheckerboardRequest,
    session: SessionService = Depends(get_session_service)
):
    """
    Replace the plate with a two-drug checkerboard and return its protocol.
    """
    try:
        config, protocol = session.apply_checkerboard(request)
    except PlateError as e:
        raise plate_http_error(e)
    return CheckerboardResult(state=session.state(), config=config, protocol=protocol)


@router.post("/validate")
async def validate_layout(
    wells: List[Any],
    layout_service: LayoutService = Depends(get_layout_service)
):
    """
    Validate a well array without loading it.
    """
    issues = layout_service.validate_layout(wells)
    return {
        "valid": len([i for i in issues if i["type"] == "error"]) == 0,
        "issues": issues
    }


@router.post("/layout", response_model=PlateState)
async def load_layout(
    wells: List[Any],
    session: SessionService = Depends(get_session_service),
    layout_service: LayoutService = Depends(get_layout_service)
):
    """
    Replace the plate with a well array (e.g. a saved JSON layout).
    """
    try:
        grid = layout_service.parse_layout(wells)
    except PlateError as e:
        raise plate_http_error(e)
    session.set_plate_data(grid)
    return session.state()
