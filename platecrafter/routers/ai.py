"""Natural-language layout generation API."""
import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from platecrafter.config import settings
from platecrafter.dependencies import (
    get_agent_service, get_layout_service, get_session_service
)
from platecrafter.errors import PlateError
from platecrafter.models import PlateState
from platecrafter.routers.errors import plate_http_error
from platecrafter.services import (
    AgentService, GenerationError, GenerationUnavailableError,
    LayoutService, SessionService
)

logger = logging.getLogger(__name__)

router = APIRouter()


class GenerateRequest(BaseModel):
    """Layout generation request."""
    prompt: str


@router.post("/generate", response_model=PlateState)
async def generate_layout(
    request: GenerateRequest,
    agent_service: AgentService = Depends(get_agent_service),
    layout_service: LayoutService = Depends(get_layout_service),
    session: SessionService = Depends(get_session_service)
):
    """
    Generate a plate layout from a description.

    The generated wells are validated like any other layout; on failure the
    current plate is left unchanged.
    """
    if not request.prompt.strip():
        raise HTTPException(status_code=400, detail="Prompt must not be empty")

    try:
        wells = await asyncio.wait_for(
            agent_service.generate_layout(request.prompt, session.plate_format),
            timeout=settings.generation_timeout_seconds
        )
    except asyncio.TimeoutError:
        raise HTTPException(status_code=504, detail="Layout generation timed out")
    except GenerationUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except GenerationError as e:
        raise HTTPException(status_code=502, detail=str(e))

    try:
        grid = layout_service.parse_layout(wells)
    except PlateError as e:
        logger.warning("Generated layout rejected: %s", e)
        raise plate_http_error(e)

    session.set_plate_data(grid)
    return session.state()
