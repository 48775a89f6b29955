"""
Snapshot Models

Pydantic models describing the persisted snapshot: a JSON array of
objects with the keys short_url and original_url.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class URLPair(BaseModel):
    """
    One mapping between a short key and the original URL it stands for.

    Fields:
    - short_url: The generated short key (without the base URL prefix)
    - original_url: The long URL supplied by the client
    """
    model_config = ConfigDict(frozen=True)

    short_url: str = Field(..., min_length=1, description="The generated short key")
    original_url: str = Field(..., min_length=1, description="The original long URL")


# Validates and serializes the whole snapshot in one call
URLPairList = TypeAdapter(list[URLPair])
