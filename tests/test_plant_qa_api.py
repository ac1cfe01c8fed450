from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from app.domain.exceptions import ProviderError
from app.services.ai.answer_service import PlantAnswerService

NEEM_QUESTION = {
    "plantName": "Neem",
    "scientificName": "Azadirachta indica",
    "question": "Can neem oil be used on pets?",
}


def test_answer_from_primary(client, use_backends, make_backend):
    primary = make_backend("openai", "Only diluted, and never for cats.")
    secondary = make_backend("gemini", "unused")
    use_backends([primary, secondary])

    response = client.post("/api/plant-qa", json=NEEM_QUESTION)

    assert response.status_code == 200
    assert response.get_json() == {"data": "Only diluted, and never for cats."}
    assert secondary.calls == []


def test_answer_from_secondary_when_primary_fails(client, use_backends, make_backend):
    use_backends(
        [
            make_backend("openai", ProviderError("quota exceeded", provider="openai")),
            make_backend("gemini", "Gemini answer"),
        ]
    )

    response = client.post("/api/plant-qa", json=NEEM_QUESTION)

    assert response.status_code == 200
    assert response.get_json() == {"data": "Gemini answer"}


def test_insights_without_question(client, use_backends, make_backend):
    backend = make_backend("openai", "Neem insights")
    use_backends([backend])

    response = client.post(
        "/api/plant-qa",
        json={"plantName": "Neem", "scientificName": "Azadirachta indica", "type": "insights"},
    )

    assert response.status_code == 200
    assert response.get_json() == {"data": "Neem insights"}
    assert "Provide detailed insights about Neem (Azadirachta indica)" in backend.calls[0]


def test_production_without_credentials_is_unavailable(client):
    # Real backends with no API keys configured fail before any network call
    response = client.post("/api/plant-qa", json=NEEM_QUESTION)

    assert response.status_code == 503
    assert response.get_json() == {
        "error": "AI service unavailable",
        "details": "Failed to generate response from AI providers",
    }


def test_development_serves_sample(client, use_backends, failing_backends):
    use_backends(failing_backends, development=True)

    response = client.post("/api/plant-qa", json=NEEM_QUESTION)

    assert response.status_code == 200
    text = response.get_json()["data"]
    assert "Neem (Azadirachta indica)" in text
    assert 'Regarding your question: "Can neem oil be used on pets?"' in text


def test_processing_error(app, client):
    resolver = MagicMock()
    resolver.resolve.side_effect = RuntimeError("boom")
    app.config["CONTAINER"].answer_service = PlantAnswerService(resolver)

    response = client.post("/api/plant-qa", json=NEEM_QUESTION)

    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to process request", "details": "boom"}


@pytest.mark.parametrize(
    "body, message",
    [
        ({"scientificName": "Azadirachta indica", "question": "q"}, "plant identity required"),
        ({"plantName": "Neem", "scientificName": "  ", "question": "q"}, "plant identity required"),
        ({"plantName": "Neem", "scientificName": "Azadirachta indica"}, "question required"),
        ({"plantName": "Neem", "scientificName": "Azadirachta indica", "question": ""}, "question required"),
    ],
)
def test_validation_errors(client, use_backends, make_backend, body, message):
    backend = make_backend("openai", "never")
    use_backends([backend])

    response = client.post("/api/plant-qa", json=body)

    assert response.status_code == 400
    assert response.get_json() == {"error": message}
    assert backend.calls == []


def test_unknown_type_is_rejected(client):
    response = client.post("/api/plant-qa", json={**NEEM_QUESTION, "type": "summary"})

    assert response.status_code == 400
    assert response.get_json()["error"].startswith("type:")


def test_non_json_body_is_rejected(client):
    response = client.post("/api/plant-qa", data="plantName=Neem", content_type="text/plain")

    assert response.status_code == 400
    assert response.get_json() == {"error": "Request body must be a JSON object"}
