"""
Plant Store
===========
In-memory plant catalog with bookmarks and a rotating "plant of the day".

State lives in one immutable :class:`PlantStoreState` snapshot. Every command
builds a new snapshot and publishes it with a single assignment, so readers
never observe a half-applied mutation; two concurrent commands resolve as
last-writer-wins.

Only ``bookmarkedPlants``, ``lastRotated`` and ``dailyPlant`` are written to
the :class:`JsonStateStore`. The catalog itself is always re-fetched through
:meth:`PlantStore.initialize`.

Daily plant selection uses two policies:

* :meth:`PlantStore.initialize` picks a uniformly random plant when the
  stored pick is from another day (or missing).
* :meth:`PlantStore.rotate_daily_plant` advances to the catalog successor of
  the current pick, at most once per calendar day.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from datetime import date
from typing import Any, Callable, Protocol

from app.domain.exceptions import CatalogError
from app.domain.plant import Plant
from app.utils.persistent_store import JsonStateStore
from app.utils.time import day_string

logger = logging.getLogger(__name__)

STORAGE_NAME = "vatika-plants-storage"
STORAGE_VERSION = 0


class CatalogSource(Protocol):
    def fetch(self) -> Any:
        """Return an object with ``ok``, ``status_code``, ``reason`` and ``payload``."""


@dataclass(frozen=True)
class PlantStoreState:
    plants: tuple[Plant, ...] = ()
    bookmarked_plants: tuple[str, ...] = ()
    daily_plant: Plant | None = None
    last_rotated: str = ""

    def persisted(self) -> dict[str, Any]:
        """Subset that survives restarts, in wire (camelCase) form."""
        return {
            "bookmarkedPlants": list(self.bookmarked_plants),
            "lastRotated": self.last_rotated,
            "dailyPlant": self.daily_plant.to_dict() if self.daily_plant else None,
        }


class PlantStore:
    """
    Catalog queries and bookmark / daily-plant commands.

    Parameters
    ----------
    catalog:
        Catalog source with a ``fetch()`` method (see
        :class:`~app.services.application.catalog_client.HttpCatalogClient`).
    state_store:
        Where the persisted subset is read from and written to. ``None``
        keeps everything in memory.
    today:
        Zero-argument callable returning the current local date.
    rng:
        Random source for the initial daily pick.
    """

    def __init__(
        self,
        catalog: CatalogSource,
        state_store: JsonStateStore | None = None,
        *,
        today: Callable[[], date] | None = None,
        rng: random.Random | None = None,
    ):
        self._catalog = catalog
        self._state_store = state_store
        self._today = today or date.today
        self._rng = rng or random.Random()
        self._state = self._hydrate(PlantStoreState(last_rotated=self._today_string()))

    # -- accessors ----------------------------------------------------------

    @property
    def state(self) -> PlantStoreState:
        return self._state

    @property
    def plants(self) -> list[Plant]:
        return list(self._state.plants)

    @property
    def bookmarked_plants(self) -> list[str]:
        return list(self._state.bookmarked_plants)

    @property
    def daily_plant(self) -> Plant | None:
        return self._state.daily_plant

    @property
    def last_rotated(self) -> str:
        return self._state.last_rotated

    def get_plant(self, plant_id: str) -> Plant | None:
        return next((p for p in self._state.plants if p.id == plant_id), None)

    def is_bookmarked(self, plant_id: str) -> bool:
        return plant_id in self._state.bookmarked_plants

    # -- queries ------------------------------------------------------------

    def search_plants(self, query: str) -> list[Plant]:
        """Case-insensitive match on names, conditions and uses. Blank query → ``[]``."""
        term = (query or "").strip().lower()
        if not term:
            return []

        def matches(plant: Plant) -> bool:
            return (
                term in plant.name.lower()
                or term in plant.scientific_name.lower()
                or any(term in c.lower() for c in plant.conditions)
                or any(term in u.lower() for u in plant.uses)
            )

        return [plant for plant in self._state.plants if matches(plant)]

    def filter_by_category(self, category: str) -> list[Plant]:
        return [plant for plant in self._state.plants if plant.in_category(category)]

    # -- commands -----------------------------------------------------------

    def add_bookmark(self, plant_id: str) -> None:
        # Duplicates are kept; callers check is_bookmarked() first
        self._commit(bookmarked_plants=self._state.bookmarked_plants + (plant_id,))

    def remove_bookmark(self, plant_id: str) -> None:
        self._commit(bookmarked_plants=tuple(b for b in self._state.bookmarked_plants if b != plant_id))

    def set_daily_plant(self, plant: Plant) -> None:
        self._commit(daily_plant=plant)

    def rotate_daily_plant(self) -> Plant | None:
        """Advance to the next plant in catalog order, at most once per day."""
        state = self._state
        today = self._today_string()

        if state.last_rotated == today or not state.plants:
            logger.debug("Daily plant rotation skipped (last_rotated=%s)", state.last_rotated)
            return state.daily_plant

        current_index = -1
        if state.daily_plant is not None:
            current_index = next(
                (i for i, p in enumerate(state.plants) if p.id == state.daily_plant.id),
                -1,
            )
        next_plant = state.plants[(current_index + 1) % len(state.plants)]
        self._commit(daily_plant=next_plant, last_rotated=today)
        logger.info("Rotated daily plant to %s", next_plant.name)
        return next_plant

    def initialize(self) -> int:
        """
        Load the full catalog, replacing the current one.

        Returns:
            Number of plants loaded.

        Raises:
            CatalogError: fetch failed, the payload carries an ``error``
                field, or it is not a non-empty list of valid plant records.
                The current catalog is left untouched.
        """
        logger.info("Initializing plants store...")
        try:
            plants = self._load_catalog()
        except CatalogError as exc:
            logger.error("Failed to initialize plants: %s", exc)
            raise

        self._commit(plants=plants, persist=False)
        logger.info("Loaded %d plants from catalog", len(plants))

        state = self._state
        today = self._today_string()
        if state.last_rotated != today or state.daily_plant is None:
            pick = plants[self._rng.randrange(len(plants))]
            logger.info("Setting new daily plant: %s", pick.name)
            self._commit(daily_plant=pick, last_rotated=today)

        return len(plants)

    def initialize_plants(self) -> int:
        """Alias of :meth:`initialize`."""
        return self.initialize()

    # -- internal -----------------------------------------------------------

    def _today_string(self) -> str:
        return day_string(self._today)

    def _load_catalog(self) -> tuple[Plant, ...]:
        response = self._catalog.fetch()
        if not response.ok:
            raise CatalogError(f"Failed to fetch plants: {response.status_code} {response.reason}".strip())

        data = response.payload
        if isinstance(data, dict) and data.get("error"):
            details = data.get("details") or ""
            raise CatalogError(f"API Error: {data['error']} - {details}".rstrip(" -"))

        if not isinstance(data, list) or not data:
            raise CatalogError(
                "No plants found in the database. Please ensure the database is populated with plant data."
            )

        try:
            return tuple(Plant.from_dict(record) for record in data)
        except ValueError as exc:
            raise CatalogError(f"Malformed plant record: {exc}") from exc

    def _commit(self, *, persist: bool = True, **changes: Any) -> None:
        self._state = replace(self._state, **changes)
        if persist and self._state_store is not None:
            self._state_store.save({"state": self._state.persisted(), "version": STORAGE_VERSION})

    def _hydrate(self, defaults: PlantStoreState) -> PlantStoreState:
        if self._state_store is None:
            return defaults

        blob = self._state_store.load()
        saved = blob.get("state") if isinstance(blob, dict) else None
        if not saved:
            return defaults

        try:
            bookmarks = saved.get("bookmarkedPlants", list(defaults.bookmarked_plants))
            if not isinstance(bookmarks, list) or not all(isinstance(b, str) for b in bookmarks):
                raise ValueError("bookmarkedPlants must be a list of ids")

            last_rotated = saved.get("lastRotated", defaults.last_rotated)
            if not isinstance(last_rotated, str):
                raise ValueError("lastRotated must be a string")

            raw_daily = saved.get("dailyPlant")
            daily = Plant.from_dict(raw_daily) if raw_daily else None
        except (AttributeError, ValueError) as exc:
            logger.warning("Ignoring persisted plant state: %s", exc)
            return defaults

        return replace(
            defaults,
            bookmarked_plants=tuple(bookmarks),
            last_rotated=last_rotated,
            daily_plant=daily,
        )
