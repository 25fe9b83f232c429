from __future__ import annotations

from datetime import date as date_type, datetime

from pydantic import BaseModel, ConfigDict, Field


class Post(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    title: str
    content: str = ""
    # Free-text category name; matched against Category.name
    category: str = ""
    created_at: datetime
    views: int = 0
    image_url: str = ""


class Category(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    created_at: datetime | None = None


class Comment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    post_id: int
    author: str
    content: str
    created_at: datetime
    admin_reply: str | None = None


class PostView(BaseModel):
    """One pre-aggregated daily view counter."""

    model_config = ConfigDict(extra="ignore")

    date: date_type
    views: int = Field(default=0, ge=0)

    def label(self, fmt: str = "%a") -> str:
        return self.date.strftime(fmt)


class CategorySummary(BaseModel):
    """A category as shown on the dashboard.

    ``id`` is None for names that only exist because posts reference them.
    """

    name: str
    post_count: int = 0
    id: int | None = None

    @property
    def is_stored(self) -> bool:
        return self.id is not None
