"""Schema of the NewsAPI.org top-headlines response.

Only the fields the ingestion pipeline reads are declared; anything else the
API sends is ignored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FeedArticle(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    published_at: Optional[str] = Field(default=None, alias='publishedAt')
    model_config = ConfigDict(extra='ignore', populate_by_name=True)


class FeedResult(BaseModel):
    status: str
    total_results: int = Field(default=0, alias='totalResults')
    articles: Optional[list[FeedArticle]] = None
    model_config = ConfigDict(extra='ignore', populate_by_name=True)
