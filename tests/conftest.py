"""Shared fixtures: a fake Gemini model and a TestClient wired to it."""

import json

import httpx
import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from biowhatif.analysis import MutationAnalyzer
from biowhatif.chat import ChatService
from biowhatif.config import Settings, get_settings
from biowhatif.main import app, get_analyzer, get_chat_service, get_structure_proxy
from biowhatif.structure import StructureProxy

SICKLE_CELL_ANALYSIS = {
    "chainOfThought": [
        "GAG -> GTG at codon 6 of HBB",
        "Glutamate is replaced by valine",
        "Valine creates a hydrophobic patch on deoxy-HbS",
    ],
    "impactMap": [
        {"level": "molecular", "title": "Molecular", "insight": "Glu6Val substitution"},
        {"level": "clinical", "title": "Clinical", "insight": "Vaso-occlusive crises"},
    ],
    "severityScores": [
        {"name": "Protein folding", "score": 3, "description": "Fold preserved"},
        {"name": "Clinical severity", "score": 9, "description": "Severe"},
    ],
    "mutationSummary": "HbS polymerizes when deoxygenated.",
    "pdbId": "2HBS",
    "affectedResidue": "Beta-globin position 6: Glu -> Val",
    "confidence": {"score": 98, "classification": "known", "dataBacked": True},
}

PDB_TEXT = "HEADER    OXYGEN TRANSPORT\nATOM      1  N   VAL B   1\nEND\n"


class FakeLLM:
    """Stands in for ChatGoogleGenerativeAI; records every prompt it receives."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []
        self.factory_kwargs = []

    def factory(self, settings, **kwargs):
        self.factory_kwargs.append(kwargs)
        return self

    async def ainvoke(self, prompt):
        self.calls.append(prompt)
        if self.error:
            raise self.error
        return AIMessage(content=self.reply)


@pytest.fixture
def settings():
    return Settings(api_key="test-key")


@pytest.fixture
def fake_llm():
    return FakeLLM(reply=json.dumps(SICKLE_CELL_ANALYSIS))


def rcsb_handler(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/view/2HBS.pdb":
        return httpx.Response(200, text=PDB_TEXT)
    return httpx.Response(404, text="Not Found")


@pytest.fixture
def client(settings, fake_llm):
    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_analyzer] = lambda: MutationAnalyzer(settings, fake_llm.factory)
    app.dependency_overrides[get_chat_service] = lambda: ChatService(settings, fake_llm.factory)
    app.dependency_overrides[get_structure_proxy] = lambda: StructureProxy(
        settings, transport=httpx.MockTransport(rcsb_handler)
    )
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client():
    """Client whose settings carry no API key and whose services use the real Gemini factory."""
    app.dependency_overrides[get_settings] = lambda: Settings(api_key="")
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
