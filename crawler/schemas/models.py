"""
Pydantic models for the JSON payloads served by the listing endpoint.
Links are carried as plain text; they are not validated as real URLs.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, field_validator


class Article(BaseModel):
    title: str = ""
    link: str = ""
    published: str = ""
    summary: str = ""
    source: str = ""
    image: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _trim_title(cls, value: str) -> str:
        return (value or "").strip()


class FeedResponse(BaseModel):
    source: str
    fetched_at: str
    articles: List[Article] = []


class ErrorResponse(BaseModel):
    error: str
    detail: str
    fetched_at: str
    status: int = 500
