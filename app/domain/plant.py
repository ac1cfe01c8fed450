"""
Plant Domain Model
==================
Immutable plant record shared by the catalog store and the AI pipeline.
List-valued fields are held as tuples so a plant is hashable and cannot be
changed through a shared store snapshot; ``to_dict`` renders them as lists.

Wire records (catalog responses, persisted state) use camelCase keys
(``scientificName``); the dataclass uses snake_case attributes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


def _string_list(record: dict[str, Any], key: str, *, required: bool = True) -> tuple[str, ...] | None:
    value = record.get(key)
    if value is None:
        if required:
            return ()
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"Plant field '{key}' must be a list of strings")
    return tuple(value)


@dataclass(frozen=True)
class Plant:
    """Identity and descriptive record for a single plant."""

    id: str
    name: str
    scientific_name: str
    description: str = ""
    uses: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    conditions: tuple[str, ...] = ()
    category: tuple[str, ...] | None = None

    def __post_init__(self) -> None:
        # Frozen: normalise sequence fields through object.__setattr__
        for attr in ("uses", "regions", "conditions"):
            object.__setattr__(self, attr, tuple(getattr(self, attr) or ()))
        if self.category is not None:
            object.__setattr__(self, "category", tuple(self.category))

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> "Plant":
        """Build a plant from a camelCase catalog record.

        Raises:
            ValueError: if identity fields are missing or list fields are
                not lists of strings.
        """
        if not isinstance(record, dict):
            raise ValueError("Plant record must be an object")

        plant_id = record.get("id")
        name = record.get("name")
        scientific_name = record.get("scientificName")
        for key, value in (("id", plant_id), ("name", name), ("scientificName", scientific_name)):
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"Plant field '{key}' is required")

        description = record.get("description") or ""
        if not isinstance(description, str):
            raise ValueError("Plant field 'description' must be a string")

        return cls(
            id=plant_id,
            name=name,
            scientific_name=scientific_name,
            description=description,
            uses=_string_list(record, "uses"),
            regions=_string_list(record, "regions"),
            conditions=_string_list(record, "conditions"),
            category=_string_list(record, "category", required=False),
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "scientificName": self.scientific_name,
            "description": self.description,
            "uses": list(self.uses),
            "regions": list(self.regions),
            "conditions": list(self.conditions),
        }
        if self.category is not None:
            data["category"] = list(self.category)
        return data

    def top_uses(self, limit: int = 3) -> list[str]:
        """First *limit* uses, in display order."""
        return list(self.uses[:limit])

    def in_category(self, category: str) -> bool:
        return self.category is not None and category in self.category
