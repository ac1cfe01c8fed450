"""
Plant AI Client
===============
Caller-side helper for the ``/api/plant-qa`` endpoint.

Tracks ``loading`` and the last ``error`` so a UI layer can show a spinner
and an inline message without handling exceptions itself.

Usage
-----
::

    client = PlantAIClient("http://localhost:8000")
    answer = client.ask_about_plant(plant, "How do I grow it indoors?")
    if client.error:
        print("AI unavailable:", client.error)
"""

from __future__ import annotations

import logging

import requests

from app.domain.plant import Plant

logger = logging.getLogger(__name__)


class PlantAIClient:
    """
    Parameters
    ----------
    base_url:
        Root URL of the Vatika server.
    session:
        Optional ``requests.Session`` (tests inject a mock here).
    timeout:
        Request timeout in seconds; provider fallback can take a while.
    """

    def __init__(self, base_url: str, session: requests.Session | None = None, timeout: int = 60):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.loading = False
        self.error: str | None = None
        self._session = session or requests.Session()

    def ask_about_plant(self, plant: Plant, query: str) -> str:
        """Return the answer text, or ``""`` with :attr:`error` set on failure."""
        self.loading = True
        self.error = None
        try:
            resp = self._session.post(
                f"{self.base_url}/api/plant-qa",
                json={
                    "plantName": plant.name,
                    "scientificName": plant.scientific_name,
                    "question": query,
                },
                timeout=self.timeout,
            )
            if not resp.ok:
                raise RuntimeError("Failed to get AI response")
            return resp.json().get("data") or ""
        except (requests.RequestException, RuntimeError, ValueError) as exc:
            self.error = str(exc) or "An error occurred"
            logger.warning("Plant AI request failed for %s: %s", plant.scientific_name, self.error)
            return ""
        finally:
            self.loading = False
