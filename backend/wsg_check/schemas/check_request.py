"""
Pydantic schemas for check API requests and responses.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from wsg_check.schemas.check_result import RunResult, WSGCategory


class CheckRequest(BaseModel):
    """Request to start a sustainability check."""
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "url": "https://example.com",
                "categories": ["web-dev", "hosting"],
            }
        }
    )

    url: HttpUrl = Field(..., description="URL to check")
    categories: Optional[list[WSGCategory]] = Field(None, description="Categories to check (default: all)")
    guidelines: Optional[list[str]] = Field(None, description="Guideline ids to check (default: all)")


class CheckJobResponse(BaseModel):
    """Response after a check job is accepted."""
    job_id: str
    status: str
    url: str


class CheckStatusResponse(BaseModel):
    """Status of a check job, with the result once completed."""
    job_id: str
    status: str  # pending | running | completed | failed
    url: str
    result: Optional[RunResult] = None
    error: Optional[str] = None
