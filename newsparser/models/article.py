from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..utils.dates import to_naive_utc


class Article(BaseModel):
    id: Optional[str] = None
    headline: str = Field(min_length=1)
    description: Optional[str] = None
    publication_time: datetime = Field(alias='publicationTime')

    model_config = ConfigDict(
        populate_by_name=True,
        extra='ignore',
        json_schema_extra={
            "example": {
                "id": "665f1c2e9b1e8a3d4c2b1a00",
                "headline": "Example News Article",
                "description": "Brief summary of the article",
                "publicationTime": "2025-06-11T10:00:00"
            }
        }
    )

    @field_validator('publication_time')
    @classmethod
    def _naive_utc(cls, value: datetime) -> datetime:
        return to_naive_utc(value)

    def to_document(self) -> dict:
        """Mongo document body, without ``_id``."""
        return {
            "headline": self.headline,
            "description": self.description,
            "publication_time": self.publication_time,
        }

    @classmethod
    def from_document(cls, document: dict) -> "Article":
        return cls(
            id=str(document['_id']),
            headline=document['headline'],
            description=document.get('description'),
            publication_time=document['publication_time'],
        )

    def to_json(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)
