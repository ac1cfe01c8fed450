"""
Schemas Module
==============

This module provides Pydantic models for request validation.
"""

from app.schemas.plants import BookmarkRequest, PlantQARequest, SetDailyPlantRequest

__all__ = [
    "BookmarkRequest",
    "PlantQARequest",
    "SetDailyPlantRequest",
]
