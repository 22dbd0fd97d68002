from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ComplaintCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(..., min_length=1, max_length=5000)
    reference_url: str = Field(default="", max_length=2000)
