"""
Job document upload / processing Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class ProcessJobDocumentRequest(BaseModel):
    # Optional so a missing field is reported by the function itself
    filePath: Optional[str] = None


class ProcessedJobDocument(BaseModel):
    title: str = ""
    description: str = Field(min_length=1)
    good_candidate_attributes: Optional[str] = None
    bad_candidate_attributes: Optional[str] = None
    essential_attributes: List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _title_default(cls, v):
        return v or ""

    @field_validator("good_candidate_attributes", "bad_candidate_attributes", mode="before")
    @classmethod
    def _join_attribute_list(cls, v):
        # Models sometimes answer with a bullet list instead of prose
        if isinstance(v, list):
            return "\n".join(str(item) for item in v if item)
        return v

    @field_validator("essential_attributes", mode="before")
    @classmethod
    def _essential_default(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v] if v.strip() else []
        return v


class Notification(BaseModel):
    """User-visible status message (success or error toast)."""
    title: str
    description: str
    variant: str = "default"


__all__ = [
    "ProcessJobDocumentRequest",
    "ProcessedJobDocument",
    "Notification",
]
