"""
Plant Catalog Client
====================
Fetches the full plant catalog from the remote catalog service.

The client only reports what came back; deciding whether the payload is a
usable catalog is the :class:`PlantStore`'s job.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import requests

from app.domain.exceptions import CatalogError

logger = logging.getLogger(__name__)


@dataclass
class CatalogResponse:
    """Raw result of one catalog fetch."""

    ok: bool
    status_code: int
    reason: str = ""
    payload: Any = None


class HttpCatalogClient:
    """
    GET the catalog as JSON from *url*.

    Parameters
    ----------
    url:
        Catalog endpoint returning an array of plant records, or an
        ``{"error": ..., "details": ...}`` object.
    timeout:
        Request timeout in seconds.
    session:
        Optional ``requests.Session`` (tests inject a mock here).
    """

    def __init__(self, url: str, timeout: int = 10, session: requests.Session | None = None):
        self.url = url
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self) -> CatalogResponse:
        """
        Fetch the catalog once. No retries.

        Raises:
            CatalogError: transport failure or a body that is not JSON.
        """
        try:
            resp = self._session.get(self.url, timeout=self.timeout, headers={"Accept": "application/json"})
        except requests.RequestException as exc:
            raise CatalogError(f"Failed to fetch plants: {exc}", detail={"url": self.url}) from exc

        try:
            payload = resp.json()
        except ValueError as exc:
            if not resp.ok:
                payload = None
            else:
                raise CatalogError("Catalog response is not valid JSON", detail={"url": self.url}) from exc

        logger.debug("Catalog fetch %s -> %s", self.url, resp.status_code)
        return CatalogResponse(
            ok=resp.ok,
            status_code=resp.status_code,
            reason=resp.reason or "",
            payload=payload,
        )
