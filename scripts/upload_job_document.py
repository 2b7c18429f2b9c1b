#!/usr/bin/env python3
"""
Upload a job description document and print the extracted fields.

Runs the same flow as the "Upload JD" button: store the file in the
job-documents bucket, invoke process-job-document, print the result.

Run from project root:
  python3 scripts/upload_job_document.py path/to/job.pdf
"""

import asyncio
import mimetypes
import os
import sys
from pathlib import Path

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from talent_screen.config import get_config
from talent_screen.schemas.job_documents import Notification, ProcessedJobDocument
from talent_screen.services.job_document_uploader import JobDocumentUploader
from talent_screen.utils.logger import setup_logging


def on_processed(document: ProcessedJobDocument) -> None:
    print(f"Title: {document.title}")
    print(f"Description: {document.description[:300]}")
    if document.good_candidate_attributes:
        print(f"Good candidate: {document.good_candidate_attributes}")
    if document.bad_candidate_attributes:
        print(f"Bad candidate: {document.bad_candidate_attributes}")
    for attribute in document.essential_attributes:
        print(f"  - {attribute}")


def notify(notification: Notification) -> None:
    icon = "❌" if notification.variant == "destructive" else "✅"
    print(f"{icon} {notification.title}: {notification.description}")


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 scripts/upload_job_document.py <file>")
        sys.exit(1)

    path = Path(sys.argv[1])
    if not path.is_file():
        print(f"❌ File not found: {path}")
        sys.exit(1)

    config = get_config()
    setup_logging(config)
    uploader = JobDocumentUploader(config, on_processed=on_processed, notify=notify)
    content_type, _ = mimetypes.guess_type(path.name)
    asyncio.run(uploader.handle_file(path.name, path.read_bytes(), content_type))


if __name__ == "__main__":
    main()
