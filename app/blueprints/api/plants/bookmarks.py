"""
Bookmark Endpoints
==================
"""

from __future__ import annotations

import logging

from flask import Response

from app.blueprints.api._common import (
    get_plant_store as _store,
    parse_body,
    success as _success,
)
from app.schemas import BookmarkRequest
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.bookmarks")


@plants_api.get("/bookmarks")
@safe_route("Failed to list bookmarks")
def list_bookmarks() -> Response:
    return _success(_store().bookmarked_plants)


@plants_api.post("/bookmarks")
@safe_route("Failed to add bookmark")
def add_bookmark() -> Response:
    body = parse_body(BookmarkRequest)
    store = _store()
    store.add_bookmark(body.plant_id)
    logger.info("Bookmarked plant %s", body.plant_id)
    return _success(store.bookmarked_plants, 201)


@plants_api.delete("/bookmarks/<string:plant_id>")
@safe_route("Failed to remove bookmark")
def remove_bookmark(plant_id: str) -> Response:
    store = _store()
    store.remove_bookmark(plant_id)
    logger.info("Removed bookmark %s", plant_id)
    return _success(store.bookmarked_plants)
