"""
API Request and Response Schemas

This module defines the Pydantic models for the JSON API.
The plain-text endpoints read and write raw bodies and need no schema.
"""

from pydantic import BaseModel, ConfigDict, Field


class ShortenRequest(BaseModel):
    """Request model for the JSON shortening endpoint."""
    model_config = ConfigDict(str_strip_whitespace=True)

    url: str = Field(..., min_length=1, description="The long URL to shorten")


class ShortenResponse(BaseModel):
    """Response model for the JSON shortening endpoint."""
    result: str = Field(..., description="The complete short URL")
