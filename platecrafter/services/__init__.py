"""Business services."""
from platecrafter.services.layout_service import LayoutService
from platecrafter.services.file_service import FileService
from platecrafter.services.session_service import SessionService
from platecrafter.services.render_service import RenderService
from platecrafter.services.agent_service import (
    AgentService, GenerationError, GenerationUnavailableError
)

__all__ = [
    "LayoutService", "FileService", "SessionService", "RenderService",
    "AgentService", "GenerationError", "GenerationUnavailableError",
]
