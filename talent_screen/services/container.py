from typing import Optional

from supabase import Client

from talent_screen.config import get_config
from talent_screen.db.supabase import get_supabase
from talent_screen.services.job_document_service import JobDocumentService
from talent_screen.services.video_analysis_service import VideoAnalysisService

config = get_config()

# Services are created on first request so importing the app never opens clients
_video_analysis_service: Optional[VideoAnalysisService] = None
_job_document_service: Optional[JobDocumentService] = None


def get_supabase_client() -> Client:
    return get_supabase(config)


def get_video_analysis_service() -> VideoAnalysisService:
    global _video_analysis_service
    if _video_analysis_service is None:
        _video_analysis_service = VideoAnalysisService(config)
    return _video_analysis_service


def get_job_document_service() -> JobDocumentService:
    global _job_document_service
    if _job_document_service is None:
        _job_document_service = JobDocumentService(config)
    return _job_document_service
