"""Shared service instances for the API routers."""
from fastapi import Depends

from platecrafter.config import settings
from platecrafter.models import get_plate_format
from platecrafter.services import (
    AgentService, FileService, LayoutService, RenderService, SessionService
)

# Lazy initialization to avoid Bedrock client creation at import time
_session_service = None
_agent_service = None


def get_session_service() -> SessionService:
    global _session_service
    if _session_service is None:
        _session_service = SessionService(get_plate_format(settings.plate_type))
    return _session_service


def get_layout_service(
    session: SessionService = Depends(get_session_service)
) -> LayoutService:
    return LayoutService(session.plate_format)


def get_file_service(
    layout_service: LayoutService = Depends(get_layout_service)
) -> FileService:
    return FileService(layout_service)


def get_render_service() -> RenderService:
    return RenderService()


def get_agent_service() -> AgentService:
    global _agent_service
    if _agent_service is None:
        _agent_service = AgentService()
    return _agent_service
