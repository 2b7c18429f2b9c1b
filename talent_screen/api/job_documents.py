from pathlib import Path
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from supabase import Client

from talent_screen.config import get_config
from talent_screen.schemas.job_documents import Notification, ProcessedJobDocument
from talent_screen.services.container import get_supabase_client
from talent_screen.services.job_document_uploader import ACCEPTED_EXTENSIONS, JobDocumentUploader
from talent_screen.utils.limiter import limiter
from talent_screen.utils.logger import get_logger

logger = get_logger(__name__)
config = get_config()

# Job description upload endpoints
router = APIRouter(tags=["Job Documents"])


@router.post("/api/job-documents/upload", response_model=ProcessedJobDocument)
@limiter.limit("10/minute")
async def upload_job_document(
    request: Request,
    file: UploadFile = File(...),
    client: Client = Depends(get_supabase_client),
):
    """
    Upload a job description document and return the extracted fields.

    Stores the file in the job documents bucket, then runs the
    process-job-document function on it.
    """
    if not file or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file provided")

    if Path(file.filename).suffix.lower() not in ACCEPTED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File type not supported. Allowed: {', '.join(ACCEPTED_EXTENSIONS)}",
        )

    file_content = await file.read()
    if not file_content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Uploaded file is empty")

    logger.info(f"[API] Received job document upload: {file.filename} ({file.content_type})")

    processed: List[ProcessedJobDocument] = []
    notifications: List[Notification] = []
    uploader = JobDocumentUploader(
        config,
        on_processed=processed.append,
        notify=notifications.append,
        client=client,
    )
    await uploader.handle_file(file.filename, file_content, file.content_type)

    if processed:
        return processed[0]

    detail = notifications[-1].description if notifications else "Failed to process job document"
    logger.error(f"[API] Job document upload failed: {detail}")
    raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)
