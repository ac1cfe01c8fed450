"""
Shared test fixtures for the Vatika backend test suite.

Provides:
- Sample plant records and a fake catalog source
- A JSON state store rooted in ``tmp_path``
- Scripted LLM backends for resolver / answer-service tests
- A Flask app + test client whose container uses the doubles above

Usage:
    def test_example(client, plant_store):
        plant_store.initialize()
        response = client.get("/api/plants")
        assert response.status_code == 200
"""

from __future__ import annotations

import logging
import random
from datetime import date
from typing import Any
from unittest.mock import MagicMock

import pytest

from app.domain.exceptions import ProviderConfigurationError, ProviderError
from app.domain.plant import Plant
from app.services.ai.answer_service import PlantAnswerService
from app.services.ai.fallback_resolver import FallbackResolver
from app.services.ai.llm_backends import LLMBackend
from app.services.application.catalog_client import CatalogResponse
from app.services.application.plant_store import STORAGE_NAME, PlantStore
from app.utils.persistent_store import JsonStateStore

# ---------------------------------------------------------------------------
# Logging: keep test output clean
# ---------------------------------------------------------------------------
logging.getLogger("app").setLevel(logging.WARNING)

TODAY = date(2024, 3, 15)


# ========================== Plant data =====================================


SAMPLE_RECORDS: list[dict[str, Any]] = [
    {
        "id": "neem",
        "name": "Neem",
        "scientificName": "Azadirachta indica",
        "description": "Evergreen tree of the mahogany family.",
        "uses": ["Skin care", "Dental hygiene", "Pest control"],
        "regions": ["India", "Nepal"],
        "conditions": ["Acne", "Gingivitis"],
        "category": ["tree", "medicinal"],
    },
    {
        "id": "tulsi",
        "name": "Holy Basil",
        "scientificName": "Ocimum tenuiflorum",
        "description": "Aromatic perennial sacred in Hindu tradition.",
        "uses": ["Stress relief", "Respiratory support"],
        "regions": ["India"],
        "conditions": ["Common cold", "Anxiety"],
        "category": ["herb", "medicinal"],
    },
    {
        "id": "ashwagandha",
        "name": "Ashwagandha",
        "scientificName": "Withania somnifera",
        "description": "Adaptogenic shrub of the nightshade family.",
        "uses": ["Sleep aid", "Stress relief"],
        "regions": ["India", "Middle East"],
        "conditions": ["Insomnia", "Fatigue"],
        "category": ["shrub"],
    },
]


@pytest.fixture()
def plant_records() -> list[dict[str, Any]]:
    """Fresh copies of the sample catalog records."""
    return [dict(record) for record in SAMPLE_RECORDS]


@pytest.fixture()
def plants(plant_records) -> list[Plant]:
    return [Plant.from_dict(record) for record in plant_records]


# ========================== Catalog & store ================================


def catalog_returning(payload: Any, *, ok: bool = True, status_code: int = 200, reason: str = "OK") -> MagicMock:
    """Catalog source double whose ``fetch()`` returns one canned response."""
    catalog = MagicMock()
    catalog.fetch.return_value = CatalogResponse(ok=ok, status_code=status_code, reason=reason, payload=payload)
    return catalog


@pytest.fixture()
def catalog(plant_records) -> MagicMock:
    return catalog_returning(plant_records)


@pytest.fixture()
def state_store(tmp_path) -> JsonStateStore:
    return JsonStateStore(STORAGE_NAME, directory=str(tmp_path / "state"))


class Clock:
    """Mutable ``today`` callable."""

    def __init__(self, today: date = TODAY):
        self.today = today

    def __call__(self) -> date:
        return self.today


@pytest.fixture()
def clock() -> Clock:
    return Clock()


@pytest.fixture()
def plant_store(catalog, state_store, clock) -> PlantStore:
    return PlantStore(catalog, state_store, today=clock, rng=random.Random(7))


# ========================== LLM doubles ====================================


class ScriptedBackend(LLMBackend):
    """Backend that returns (or raises) a scripted outcome without any I/O."""

    def __init__(self, name: str, outcome: Any = "answer"):
        super().__init__(api_key="test-key", model="test-model")
        self._name = name
        self.outcome = outcome
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return self._name

    def generate(self, prompt: str) -> str:
        self.calls.append(prompt)
        if isinstance(self.outcome, BaseException):
            raise self.outcome
        return self.outcome

    def _connect(self) -> Any:
        return object()

    def _complete(self, prompt: str) -> str:
        return self.outcome


@pytest.fixture()
def make_backend():
    return ScriptedBackend


@pytest.fixture()
def failing_backends() -> list[ScriptedBackend]:
    return [
        ScriptedBackend(
            "openai",
            ProviderConfigurationError("Invalid openai API key configuration", provider="openai"),
        ),
        ScriptedBackend("gemini", ProviderError("gemini request failed: 500", provider="gemini")),
    ]


# ========================== Flask app ======================================


@pytest.fixture()
def app(tmp_path, monkeypatch, plant_store):
    monkeypatch.setenv("VATIKA_LOG_FILE", "")
    monkeypatch.setenv("VATIKA_STATE_DIR", str(tmp_path / "app-state"))
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("VATIKA_SECONDARY_PROVIDER", raising=False)

    from app import create_app

    app = create_app({"environment": "production"})
    app.config["TESTING"] = True

    container = app.config["CONTAINER"]
    container.plant_store = plant_store
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


def install_answer_service(app, backends, *, development: bool = False) -> PlantAnswerService:
    """Swap the app's answer service for one driven by *backends*."""
    service = PlantAnswerService(FallbackResolver(backends), development=development)
    app.config["CONTAINER"].answer_service = service
    return service


@pytest.fixture()
def make_catalog():
    return catalog_returning


@pytest.fixture()
def use_backends(app):
    """Call with a backend list (and ``development=``) to rewire the app."""

    def _install(backends, *, development: bool = False) -> PlantAnswerService:
        return install_answer_service(app, backends, development=development)

    return _install
