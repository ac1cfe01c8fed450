from unittest.mock import MagicMock

import pytest
import requests

from app.domain.exceptions import CatalogError
from app.services.application.catalog_client import HttpCatalogClient


def _session(*, ok=True, status=200, reason="OK", payload=None, json_error=None):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status
    resp.reason = reason
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    session = MagicMock()
    session.get.return_value = resp
    return session


def test_fetch_returns_payload(plant_records):
    session = _session(payload=plant_records)
    client = HttpCatalogClient("http://catalog/api/plants", timeout=4, session=session)

    response = client.fetch()

    assert response.ok and response.status_code == 200
    assert response.payload == plant_records
    session.get.assert_called_once_with(
        "http://catalog/api/plants", timeout=4, headers={"Accept": "application/json"}
    )


def test_error_status_with_non_json_body():
    session = _session(ok=False, status=503, reason="Service Unavailable", json_error=ValueError("no json"))

    response = HttpCatalogClient("http://catalog", session=session).fetch()

    assert not response.ok
    assert response.status_code == 503
    assert response.reason == "Service Unavailable"
    assert response.payload is None


def test_ok_status_with_non_json_body_raises():
    session = _session(json_error=ValueError("no json"))

    with pytest.raises(CatalogError, match="not valid JSON"):
        HttpCatalogClient("http://catalog", session=session).fetch()


def test_transport_failure_raises_catalog_error():
    session = MagicMock()
    session.get.side_effect = requests.ConnectionError("refused")

    with pytest.raises(CatalogError, match="refused"):
        HttpCatalogClient("http://catalog", session=session).fetch()
