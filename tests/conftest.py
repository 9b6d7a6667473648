"""Shared fixtures."""
import io
import json

import pytest

from platecrafter.engine import PlateGrid
from platecrafter.models import PLATE_96_WELL, CheckerboardRequest
from platecrafter.services import AgentService, SessionService


class StubBedrockClient:
    """Stands in for the bedrock-runtime client."""

    def __init__(self, text="[]", error=None, content=None):
        self.text = text
        self.error = error
        self.content = content
        self.calls = []

    def invoke_model(self, modelId, body):
        self.calls.append({"modelId": modelId, "body": json.loads(body)})
        if self.error:
            raise self.error
        content = self.content
        if content is None:
            content = [{"type": "text", "text": self.text}]
        payload = {"content": content}
        return {"body": io.BytesIO(json.dumps(payload).encode("utf-8"))}


@pytest.fixture
def plate_format():
    return PLATE_96_WELL


@pytest.fixture
def empty_grid(plate_format):
    return PlateGrid.empty(plate_format)


@pytest.fixture
def session(plate_format):
    return SessionService(plate_format)


@pytest.fixture
def checkerboard_request():
    """Drug A 100 µM, drug B 50 µM, 1:2 dilutions."""
    return CheckerboardRequest(drug_a="Ampicillin", conc_a=100, drug_b="Colistin", conc_b=50, factor=2)


@pytest.fixture
def layout_records(plate_format):
    """A complete layout with a few assigned wells."""
    records = [
        {
            "id": well_id,
            "compound": "",
            "concentration": 0,
            "mw": 0,
            "strain": "",
            "controlType": "None",
            "replicateGroup": 0,
        }
        for well_id in plate_format.well_ids()
    ]
    records[0].update(compound="Aspirin", concentration=12.5, mw=180.157, strain="E. coli", replicateGroup=1)
    records[1].update(compound="Aspirin", concentration=6.25, mw=180.157, strain="E. coli", replicateGroup=1)
    records[95].update(compound="DMSO", controlType="Negative")
    return records


@pytest.fixture
def bedrock_stub():
    """Factory for stub Bedrock clients."""
    return StubBedrockClient


@pytest.fixture
def stub_client(bedrock_stub):
    return bedrock_stub()


@pytest.fixture
def agent_service(stub_client):
    return AgentService(client=stub_client)


@pytest.fixture
def client(session, agent_service):
    """API client bound to a fresh session and a stub Bedrock client."""
    from fastapi.testclient import TestClient

    from platecrafter.dependencies import get_agent_service, get_session_service
    from platecrafter.main import app

    app.dependency_overrides[get_session_service] = lambda: session
    app.dependency_overrides[get_agent_service] = lambda: agent_service
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
