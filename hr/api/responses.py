"""
Pydantic models for API responses.
These define the contract between the API and external clients.

Most endpoints return domain models directly. This file contains only
response models that are specific to API concerns.
"""

from pydantic import BaseModel


class HealthCheckResponse(BaseModel):
    status: str
    version: str


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    status: str
    message: str
    error: str
