"""
Blueprint Common Utilities
==========================

Shared helper functions for all API blueprints.
Import these instead of duplicating helper code in each blueprint.

Usage:
    from app.blueprints.api._common import (
        get_plant_store, parse_body, success,
    )
"""
from __future__ import annotations

import logging
from typing import Any, TypeVar

import pydantic
from flask import current_app, request

from app.domain.exceptions import ValidationError
from app.utils.http import success_response

logger = logging.getLogger("api._common")

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)

# ============================================================================
# CONTAINER ACCESS
# ============================================================================


def get_container():
    """
    Get the service container from Flask app config.

    Returns:
        ServiceContainer: The application service container

    Raises:
        RuntimeError: If container is not configured
    """
    container = current_app.config.get("CONTAINER")
    if not container:
        raise RuntimeError("ServiceContainer not found in app config")
    return container


def get_answer_service():
    return get_container().answer_service


def get_plant_store():
    return get_container().plant_store


# ============================================================================
# REQUEST HELPERS
# ============================================================================


def parse_body(model: type[ModelT]) -> ModelT:
    """
    Validate the JSON body against *model*.

    Raises:
        ValidationError: body is not a JSON object or fails validation
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(body)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        field = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid request")
        logger.debug("Rejected %s body: %s", model.__name__, exc)
        raise ValidationError(f"{field}: {message}" if field else message) from exc


# ============================================================================
# RESPONSE HELPERS
# ============================================================================


def success(data: Any = None, status: int = 200):
    """
    Standard success response wrapper.

    Returns:
        Flask Response with format: {"data": ...}
    """
    return success_response(data, status)
