"""
Video introduction analysis Pydantic schemas.
"""

from typing import List, Optional

from pydantic import BaseModel


class AnalyzeVideoRequest(BaseModel):
    # Both optional at the schema level; the handler reports missing values itself
    applicationId: Optional[str] = None
    videoPath: Optional[str] = None


class VideoAnalysisResult(BaseModel):
    transcript: str
    analysis: Optional[str] = None


class VideoAnalysis(BaseModel):
    """Shape the LLM is asked to return for a video introduction."""
    motivation: str
    experience_summary: str
    communication_score: float
    key_strengths: List[str]


__all__ = ["AnalyzeVideoRequest", "VideoAnalysisResult", "VideoAnalysis"]
