"""
Job Document Uploader

Client-side upload flow for job descriptions: store the file, invoke the
document processing function and hand the extracted fields to a callback.
"""

import asyncio
import re
import time
from pathlib import Path
from typing import Any, Callable, Optional

from talent_screen.config import Config
from talent_screen.db.supabase import get_supabase
from talent_screen.schemas.job_documents import Notification, ProcessedJobDocument
from talent_screen.utils.exceptions import ServiceError, error_message
from talent_screen.utils.logger import get_logger

logger = get_logger(__name__)

ACCEPTED_EXTENSIONS = ('.pdf', '.doc', '.docx', '.html', '.htm')

_NON_ASCII = re.compile(r'[^\x00-\x7F]')


def sanitize_filename(filename: str) -> str:
    """Strip every non-ASCII character from a filename."""
    return _NON_ASCII.sub('', filename)


def build_storage_key(filename: str, timestamp_ms: Optional[int] = None) -> str:
    """Storage key `job-documents/<epoch ms>_<sanitized name>`."""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"job-documents/{timestamp_ms}_{sanitize_filename(filename)}"


def _log_notification(notification: Notification) -> None:
    if notification.variant == "destructive":
        logger.error(f"[JobDocumentUploader] {notification.title}: {notification.description}")
    else:
        logger.info(f"[JobDocumentUploader] {notification.title}: {notification.description}")


class JobDocumentUploader:
    """
    Upload control for a single job document at a time.

    ``uploading`` is the busy flag: while a file is in flight further calls
    to :meth:`handle_file` are ignored. It is always reset when the call
    finishes, whether it succeeded or failed.
    """

    def __init__(
        self,
        config: Config,
        on_processed: Callable[[ProcessedJobDocument], None],
        notify: Optional[Callable[[Notification], None]] = None,
        client: Any = None,
    ):
        self.config = config
        self.on_processed = on_processed
        self.notify = notify or _log_notification
        self.client = client if client is not None else get_supabase(config)
        self.uploading = False

    @property
    def button_label(self) -> str:
        return "Processing..." if self.uploading else "Upload JD"

    async def handle_file(self, filename: Optional[str], content: bytes, content_type: Optional[str] = None) -> None:
        if not filename:
            return
        if self.uploading:
            logger.debug("[JobDocumentUploader] Upload already in progress, ignoring file")
            return

        try:
            self.uploading = True

            self._check_extension(filename)
            file_path = build_storage_key(filename)

            await asyncio.to_thread(self._upload, file_path, content, content_type)
            data = await asyncio.to_thread(self._invoke_processing, file_path)

            if not isinstance(data, dict) or not data.get("description"):
                raise ServiceError("No content extracted from document", "JobDocumentUploader")

            self.on_processed(ProcessedJobDocument(
                title=data.get("title") or "",
                description=data["description"],
                good_candidate_attributes=data.get("good_candidate_attributes"),
                bad_candidate_attributes=data.get("bad_candidate_attributes"),
                essential_attributes=data.get("essential_attributes") or [],
            ))

            self.notify(Notification(
                title="Success",
                description="Job description processed successfully",
            ))
        except Exception as e:
            self.notify(Notification(
                title="Error",
                description=error_message(e),
                variant="destructive",
            ))
        finally:
            self.uploading = False

    def _check_extension(self, filename: str) -> None:
        if Path(filename).suffix.lower() not in ACCEPTED_EXTENSIONS:
            raise ServiceError(
                f"File type not supported. Allowed: {', '.join(ACCEPTED_EXTENSIONS)}",
                "JobDocumentUploader",
            )

    def _upload(self, file_path: str, content: bytes, content_type: Optional[str]) -> None:
        file_options = {"content-type": content_type} if content_type else None
        self.client.storage.from_(self.config.supabase.job_documents_bucket).upload(
            path=file_path,
            file=content,
            file_options=file_options,
        )
        logger.info(f"[JobDocumentUploader] Uploaded {len(content)} bytes to {file_path}")

    def _invoke_processing(self, file_path: str) -> Optional[dict]:
        data = self.client.functions.invoke(
            self.config.supabase.process_document_function,
            invoke_options={"body": {"filePath": file_path}, "responseType": "json"},
        )
        if isinstance(data, dict) and data.get("error"):
            raise ServiceError(str(data["error"]), "JobDocumentUploader")
        return data
