"""Layout file import and export API."""
from fastapi import APIRouter, Depends, UploadFile, File, HTTPException
from fastapi.responses import PlainTextResponse

from platecrafter.config import settings
from platecrafter.dependencies import get_file_service, get_session_service
from platecrafter.errors import PlateError
from platecrafter.models import ConcentrationUnit, PlateState
from platecrafter.routers.errors import plate_http_error
from platecrafter.services import FileService, SessionService

router = APIRouter()

ALLOWED_EXTENSIONS = ['.json', '.csv', '.xlsx']


@router.get("/export/json")
async def export_json(
    session: SessionService = Depends(get_session_service),
    file_service: FileService = Depends(get_file_service)
):
    """
    Export the current layout as JSON (reloadable).
    """
    return PlainTextResponse(
        content=file_service.export_json(session.grid),
        media_type="application/json",
        headers={"Content-Disposition": "attachment; filename=platecrafter_layout.json"}
    )


@router.get("/export/csv")
async def export_csv(
    unit: ConcentrationUnit = ConcentrationUnit.MOLAR,
    session: SessionService = Depends(get_session_service),
    file_service: FileService = Depends(get_file_service)
):
    """
    Export the current layout as a CSV data table.
    """
    return PlainTextResponse(
        content=file_service.export_csv(session.grid, unit),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=platecrafter_layout.csv"}
    )


@router.post("/import", response_model=PlateState)
async def import_layout(
    file: UploadFile = File(...),
    session: SessionService = Depends(get_session_service),
    file_service: FileService = Depends(get_file_service)
):
    """
    Load a layout file (JSON, CSV or Excel) as one undo step.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename must not be empty")

    if not any(file.filename.lower().endswith(ext) for ext in ALLOWED_EXTENSIONS):
        raise HTTPException(
            status_code=400,
            detail="Unsupported file format, upload a JSON, CSV or Excel (.xlsx) file"
        )

    # Check file size
    content = await file.read()
    if len(content) > settings.max_file_size_mb * 1024 * 1024:
        raise HTTPException(
            status_code=400,
            detail=f"File too large, upload a file under {settings.max_file_size_mb}MB"
        )

    try:
        grid = file_service.parse_file(content, file.filename)
    except PlateError as e:
        raise plate_http_error(e)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))

    session.set_plate_data(grid)
    return session.state()
