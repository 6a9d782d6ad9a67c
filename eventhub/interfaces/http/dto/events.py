# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from eventhub.domain.entities import ImageBlob
from eventhub.domain.events.entities import EventChanges, NewEvent

Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Location = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]
Description = Annotated[str, StringConstraints(strip_whitespace=True, max_length=5000)]


def _drop_blank(data: Any, *fields: str) -> Any:
    if isinstance(data, dict):
        return {k: v for k, v in data.items() if not (k in fields and v == "")}
    return data


class CreateEventRequestDTO(BaseModel):
    title: Title
    description: Description | None = None
    date: datetime
    location: Location

    def to_domain(self, creator_id: int, image: ImageBlob | None) -> NewEvent:
        return NewEvent(
            creator_id=creator_id,
            title=self.title,
            description=self.description,
            date=self.date,
            location=self.location,
            image=image,
        )


class UpdateEventRequestDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Title | None = None
    description: Description | None = None
    date: datetime | None = None
    location: Location | None = None
    delete_image: bool = Field(False, alias="deleteImage")

    @model_validator(mode="before")
    @classmethod
    def _empty_optional_fields(cls, data: Any) -> Any:
        return _drop_blank(data, "date", "deleteImage")

    def to_domain(self, image: ImageBlob | None) -> EventChanges:
        return EventChanges(
            title=self.title,
            description=self.description,
            date=self.date,
            location=self.location,
            image=image,
            delete_image=self.delete_image,
        )
