from __future__ import annotations

import pytest

from app import create_app
from app.domain.exceptions import CatalogError
from app.services.application.catalog_client import HttpCatalogClient

NEEM_QUESTION = {
    "plantName": "Neem",
    "scientificName": "Azadirachta indica",
    "question": "Is neem safe to chew?",
}


@pytest.fixture()
def bare_env(tmp_path, monkeypatch):
    monkeypatch.setenv("VATIKA_LOG_FILE", "")
    monkeypatch.setenv("VATIKA_STATE_DIR", str(tmp_path / "state"))
    for name in (
        "VATIKA_ENV",
        "VATIKA_SECONDARY_PROVIDER",
        "OPENAI_API_KEY",
        "GEMINI_API_KEY",
        "ANTHROPIC_API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture()
def catalog_down(bare_env):
    def _refuse(self):
        raise CatalogError("Failed to fetch plants: Connection refused")

    bare_env.setattr(HttpCatalogClient, "fetch", _refuse)


def test_server_starts_when_catalog_is_down(catalog_down):
    app = create_app(bootstrap_runtime=True)
    client = app.test_client()

    assert app.config["CONTAINER"].plant_store.plants == []
    assert client.get("/api/plants").get_json() == {"data": []}

    # Q&A stays reachable without the catalog
    response = client.post("/api/plant-qa", json=NEEM_QUESTION)
    assert response.status_code == 503


def test_catalog_can_be_loaded_after_failed_startup(catalog_down, plant_records, make_catalog):
    app = create_app(bootstrap_runtime=True)
    store = app.config["CONTAINER"].plant_store
    store._catalog = make_catalog(plant_records)

    response = app.test_client().post("/api/plants/initialize")

    assert response.status_code == 200
    assert response.get_json() == {"data": {"count": 3}}


def test_unset_environment_does_not_serve_sample_answers(bare_env):
    app = create_app()

    assert app.config["CONTAINER"].answer_service.development is False

    response = app.test_client().post("/api/plant-qa", json=NEEM_QUESTION)

    assert response.status_code == 503
    assert response.get_json() == {
        "error": "AI service unavailable",
        "details": "Failed to generate response from AI providers",
    }


def test_explicit_development_serves_sample_answers(bare_env):
    bare_env.setenv("VATIKA_ENV", "development")
    app = create_app()

    response = app.test_client().post("/api/plant-qa", json=NEEM_QUESTION)

    assert response.status_code == 200
    assert 'Regarding your question: "Is neem safe to chew?"' in response.get_json()["data"]
