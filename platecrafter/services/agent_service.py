"""AI layout generation using Amazon Bedrock."""
import asyncio
import json
import logging
import re
from typing import List

import boto3

from platecrafter.config import settings
from platecrafter.models import ControlType, PlateFormat

logger = logging.getLogger(__name__)


class GenerationError(Exception):
    """The layout generation service failed or returned unusable output."""


class GenerationUnavailableError(GenerationError):
    """No Bedrock client is configured."""


class AgentService:
    """Natural-language plate layout generation."""

    SYSTEM_PROMPT = (
        "You are an expert lab assistant specializing in high-throughput screening. "
        "Your task is to design {size}-well plate layouts based on user requests. "
        "You must return a valid JSON array of {size} well objects, matching the provided "
        "schema exactly. Do not add any extra commentary or markdown formatting."
    )

    def __init__(self, client=None):
        self.client = client
        if self.client is None:
            self._init_client()

    def _init_client(self):
        """Initialize Bedrock client."""
        try:
            self.client = boto3.client(
                'bedrock-runtime',
                region_name=settings.aws_region
            )
        except Exception as e:
            logger.warning("Could not initialize Bedrock client: %s", e)
            self.client = None

    @staticmethod
    def layout_schema() -> dict:
        """JSON schema of the well array the model must return."""
        return {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "id": {"type": "string", "description": "Well ID, e.g., 'A1', 'H12'"},
                    "compound": {"type": "string", "description": "Name of the chemical compound."},
                    "concentration": {"type": "number", "description": "Concentration in micromolar (µM)."},
                    "mw": {
                        "type": "number",
                        "description": "Molecular Weight of the compound in g/mol. Set to 0 if not applicable."
                    },
                    "strain": {"type": "string", "description": "Biological strain used."},
                    "controlType": {
                        "type": "string",
                        "enum": [c.value for c in ControlType],
                        "description": "Type of control."
                    },
                    "replicateGroup": {
                        "type": "integer",
                        "description": "Identifier for replicate group (0 for none)."
                    },
                },
                "required": ["id", "compound", "concentration", "mw", "strain", "controlType", "replicateGroup"],
            },
        }

    def build_prompt(self, prompt: str, plate_format: PlateFormat) -> str:
        """Build the user message for a layout request."""
        ids = plate_format.well_ids()
        return (
            f"Based on the following request, generate a {plate_format.size}-well plate layout. "
            f"Ensure all {plate_format.size} wells ({ids[0]} to {ids[-1]}) are included in the final "
            "JSON array. If a well is not explicitly mentioned, treat it as a blank or empty well "
            "(concentration 0, empty strings). For compounds, please provide their molecular weight "
            "(MW) in g/mol if it's a known chemical.\n\n"
            f"Schema:\n{json.dumps(self.layout_schema())}\n\n"
            f'Request: "{prompt}"'
        )

    async def generate_layout(self, prompt: str, plate_format: PlateFormat) -> List[dict]:
        """
        Ask the model for a plate layout.

        Args:
            prompt: Free-text description of the plate
            plate_format: Plate format to fill

        Returns:
            Candidate well array. Not validated here: callers validate it like
            any other layout before committing.

        Raises:
            GenerationUnavailableError: no client configured
            GenerationError: the call failed or returned no JSON array
        """
        if not self.client:
            raise GenerationUnavailableError("Layout generation is not configured (no Bedrock client)")

        body = json.dumps({
            "anthropic_version": "bedrock-2023-05-31",
            "max_tokens": settings.generation_max_tokens,
            "system": self.SYSTEM_PROMPT.format(size=plate_format.size),
            "messages": [{"role": "user", "content": self.build_prompt(prompt, plate_format)}]
        })

        try:
            response = await asyncio.to_thread(
                self.client.invoke_model,
                modelId=settings.bedrock_model_id,
                body=body
            )
            result = json.loads(response['body'].read())
        except Exception as e:
            logger.error("Layout generation call failed: %s", e)
            raise GenerationError(f"Layout generation failed: {e}") from e

        blocks = result.get('content') or []
        if not blocks:
            raise GenerationError("Layout generation returned an empty reply")
        content = blocks[0].get('text', '')
        layout = self._extract_array(content)
        logger.info("Generated layout with %d wells", len(layout))
        return layout

    def _extract_array(self, content: str) -> List[dict]:
        """Extract the JSON array (possibly wrapped in ```json ```)."""
        json_match = re.search(r'\[[\s\S]*\]', content)
        if not json_match:
            raise GenerationError("Layout generation returned no JSON array")
        try:
            layout = json.loads(json_match.group())
        except json.JSONDecodeError as e:
            raise GenerationError(f"Layout generation returned invalid JSON: {e}") from e
        return layout
