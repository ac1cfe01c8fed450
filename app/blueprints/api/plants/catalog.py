"""
Plant Catalog Endpoints
=======================

Load the catalog into the store and query it.
"""

from __future__ import annotations

import logging

from flask import Response, request

from app.blueprints.api._common import (
    get_plant_store as _store,
    success as _success,
)
from app.utils.http import safe_route

from . import plants_api

logger = logging.getLogger("plants_api.catalog")


@plants_api.post("/initialize")
@safe_route("Failed to load plant catalog")
def initialize_catalog() -> Response:
    """Fetch the full catalog; 502 when the catalog service fails."""
    count = _store().initialize()
    return _success({"count": count})


@plants_api.get("")
@safe_route("Failed to list plants")
def list_plants() -> Response:
    return _success([plant.to_dict() for plant in _store().plants])


@plants_api.get("/search")
@safe_route("Failed to search plants")
def search_plants() -> Response:
    """Search by name, scientific name, condition or use. ``?q=`` blank → []."""
    query = request.args.get("q", "")
    results = _store().search_plants(query)
    logger.debug("Search %r matched %d plants", query, len(results))
    return _success([plant.to_dict() for plant in results])


@plants_api.get("/category/<string:category>")
@safe_route("Failed to filter plants")
def filter_by_category(category: str) -> Response:
    return _success([plant.to_dict() for plant in _store().filter_by_category(category)])
