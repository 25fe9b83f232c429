from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class CommentReply(BaseModel):
    admin_reply: str = Field(min_length=1, max_length=5000)

    @field_validator("admin_reply")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("reply must not be blank")
        return v
