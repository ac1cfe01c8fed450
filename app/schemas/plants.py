"""
Plant Schemas
=============

Request schemas for the plant Q&A and plant store endpoints.
Wire field names are camelCase; Python attributes are snake_case.
"""

from pydantic import BaseModel, ConfigDict, Field

from app.services.ai.answer_service import AnswerKind, AnswerRequest


class PlantQARequest(BaseModel):
    """Request schema for asking about a plant.

    Identity and question presence are checked by the answer service so
    the error messages stay the same for every caller.
    """

    model_config = ConfigDict(populate_by_name=True)

    plant_name: str | None = Field(default=None, alias="plantName", description="Common plant name")
    scientific_name: str | None = Field(
        default=None, alias="scientificName", description="Scientific (binomial) name"
    )
    question: str | None = Field(default=None, description="Question text; omitted for insights")
    type: AnswerKind = Field(default=AnswerKind.QA, description="qa or insights")

    def to_answer_request(self) -> AnswerRequest:
        return AnswerRequest(
            plant_name=self.plant_name,
            scientific_name=self.scientific_name,
            question=self.question,
            kind=self.type,
        )


class BookmarkRequest(BaseModel):
    """Request schema for bookmarking a plant."""

    model_config = ConfigDict(populate_by_name=True)

    plant_id: str = Field(..., alias="plantId", min_length=1, description="Plant ID to bookmark")


class SetDailyPlantRequest(BaseModel):
    """Request schema for choosing the plant of the day explicitly."""

    model_config = ConfigDict(populate_by_name=True)

    plant_id: str = Field(..., alias="plantId", min_length=1, description="Catalog plant ID")
