# src/gateway/request_models.py

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator


class QueryHTTPRequest(BaseModel):
    # Missing or null contents parses as "" so the gateway can report it
    # separately from malformed JSON. Unknown fields are ignored.
    contents: str = Field("", examples=["What was revenue last quarter?"])
    # Accepted for forward compatibility; generation does not use it yet.
    parameters: Optional[Dict[str, Any]] = Field(None, examples=[{"temperature": 0.5}])

    @field_validator("contents", mode="before")
    @classmethod
    def null_contents_as_empty(cls, value):
        return "" if value is None else value
