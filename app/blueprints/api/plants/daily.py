"""
Plant of the Day Endpoints
==========================
"""

from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import (
    get_plant_store as _store,
    parse_body,
    success as _success,
)
from app.domain.exceptions import NotFoundError
from app.schemas import SetDailyPlantRequest
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.daily")


def _daily_payload():
    plant = _store().daily_plant
    return plant.to_dict() if plant else None


@plants_api.get("/daily")
@safe_route("Failed to get plant of the day")
def get_daily_plant() -> Response:
    return _success(_daily_payload())


@plants_api.put("/daily")
@safe_route("Failed to set plant of the day")
def set_daily_plant() -> Response:
    body = parse_body(SetDailyPlantRequest)
    store = _store()
    plant = store.get_plant(body.plant_id)
    if plant is None:
        raise NotFoundError(f"Plant {body.plant_id} not found")
    store.set_daily_plant(plant)
    logger.info("Plant of the day set to %s", plant.name)
    return _success(plant.to_dict())


@plants_api.post("/daily/rotate")
@safe_route("Failed to rotate plant of the day")
def rotate_daily_plant() -> Response:
    _store().rotate_daily_plant()
    return _success(_daily_payload())
