from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class PostCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    content: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=80)
    image_url: str = Field(min_length=1, max_length=2048)

    @field_validator("title", "content", "category", "image_url", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("image_url")
    @classmethod
    def http_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("image_url must be an http(s) URL")
        return v

    def to_row(self) -> dict:
        return self.model_dump()


class PostUpdate(PostCreate):
    # Echoed back as held; the console never changes the counter itself
    views: int = Field(default=0, ge=0)
