"""
Plant Q&A API
=============
Answer natural-language questions about a plant.

POST /api/plant-qa
    {"plantName": "...", "scientificName": "...", "question": "...", "type": "qa" | "insights"}

    200 {"data": "<answer>"}
    400 {"error": "..."}                          invalid input
    503 {"error": "...", "details": "..."}        every provider failed (production)
    500 {"error": "...", "details": "..."}        unexpected fault
"""

from __future__ import annotations

import logging

from flask import Blueprint, Response, jsonify

from app.blueprints.api._common import get_answer_service, parse_body
from app.schemas import PlantQARequest
from app.utils.http import safe_route

logger = logging.getLogger(__name__)

plant_qa_api = Blueprint("plant_qa_api", __name__)


@plant_qa_api.post("")
@safe_route("Failed to process request")
def ask_about_plant() -> Response:
    body = parse_body(PlantQARequest)
    envelope = get_answer_service().answer(body.to_answer_request())

    if not envelope.ok:
        logger.info("Plant Q&A failed [%s]: %s", envelope.failure.value, envelope.error)

    response = jsonify(envelope.to_dict())
    response.status_code = envelope.http_status
    return response
