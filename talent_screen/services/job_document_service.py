"""
Job Document Processing Service

Downloads an uploaded job document, extracts its text and asks the LLM for
the structured job description fields.
"""

import asyncio
import html
import re
from io import BytesIO
from pathlib import Path
from typing import Any, Optional, Tuple

from docx import Document
from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError
from PyPDF2 import PdfReader

from talent_screen.config import Config
from talent_screen.db.supabase import get_supabase
from talent_screen.schemas.job_documents import ProcessedJobDocument
from talent_screen.utils.exceptions import ServiceError, error_message
from talent_screen.utils.json_utils import extract_json_object
from talent_screen.utils.logger import get_logger

logger = get_logger(__name__)

EXTRACTION_SYSTEM_PROMPT = (
    "You extract structured information from job description documents. "
    "Always respond with valid JSON only."
)

EXTRACTION_PROMPT = """Read the following job document and return a JSON object with this structure:
{{
    "title": "<job title>",
    "description": "<full job description, responsibilities and requirements>",
    "good_candidate_attributes": "<traits and experience that make a strong candidate>",
    "bad_candidate_attributes": "<traits and red flags that make a weak candidate>",
    "essential_attributes": ["<must-have attribute 1>", "<must-have attribute 2>"]
}}

Job document:
{text}"""


class JobDocumentService:
    """Service for processing uploaded job description documents"""

    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    ALLOWED_EXTENSIONS = {'.pdf', '.doc', '.docx', '.html', '.htm'}
    COMPONENT = "process-job-document"

    def __init__(self, config: Config, client: Any = None, openai_client: Optional[AsyncOpenAI] = None):
        self.config = config
        self.client = client if client is not None else get_supabase(config)
        self.openai_client = openai_client or AsyncOpenAI(
            api_key=config.openai.api_key,
            base_url=config.openai.base_url,
            timeout=config.openai.timeout,
        )

    async def process(self, file_path: str) -> ProcessedJobDocument:
        """
        Process one uploaded document.

        Args:
            file_path: Storage path inside the job documents bucket

        Returns:
            Extracted job description fields

        Raises:
            ServiceError: If download, extraction or LLM parsing fails
        """
        file_content = await asyncio.to_thread(self.download_document, file_path)

        is_valid, error_msg = self.validate_file(file_content, file_path)
        if not is_valid:
            raise ServiceError(error_msg, self.COMPONENT)

        text, extraction_error = self.extract_text(file_content, file_path)
        if not text:
            raise ServiceError(extraction_error or "No text content found in document", self.COMPONENT)

        return await self.extract_fields(text)

    def download_document(self, file_path: str) -> bytes:
        try:
            data = self.client.storage.from_(self.config.supabase.job_documents_bucket).download(file_path)
        except Exception as e:
            logger.error(f"[JobDocumentService] Error downloading document: {e}")
            raise ServiceError(f"Failed to download document: {error_message(e)}", self.COMPONENT)
        if not data:
            raise ServiceError("No document data received from storage", self.COMPONENT)
        logger.info(f"[JobDocumentService] Downloaded {file_path} ({len(data)} bytes)")
        return data

    def validate_file(self, file_content: bytes, filename: str) -> Tuple[bool, Optional[str]]:
        """
        Validate job document.

        Returns:
            Tuple of (is_valid, error_message)
        """
        if len(file_content) > self.MAX_FILE_SIZE:
            return False, f"File size exceeds maximum of {self.MAX_FILE_SIZE / 1024 / 1024}MB"

        file_ext = Path(filename).suffix.lower()
        if file_ext not in self.ALLOWED_EXTENSIONS:
            return False, f"File type not supported. Allowed: {', '.join(sorted(self.ALLOWED_EXTENSIONS))}"

        return True, None

    def extract_text(self, file_content: bytes, filename: str) -> Tuple[str, Optional[str]]:
        """
        Extract text from a job document.

        Returns:
            Tuple of (extracted_text, error_message)
        """
        file_ext = Path(filename).suffix.lower()

        try:
            if file_ext == '.pdf':
                return self._extract_pdf_text(file_content)
            elif file_ext in ['.doc', '.docx']:
                return self._extract_docx_text(file_content)
            elif file_ext in ['.html', '.htm']:
                return self._extract_html_text(file_content)
            else:
                return "", f"Unsupported file type: {file_ext}"
        except Exception as e:
            error_msg = f"Failed to extract text: {str(e)}"
            logger.error(f"[JobDocumentService] {error_msg}", exc_info=True)
            return "", error_msg

    def _extract_pdf_text(self, file_content: bytes) -> Tuple[str, Optional[str]]:
        """Extract text from PDF file"""
        reader = PdfReader(BytesIO(file_content))

        text_parts = []
        for page in reader.pages:
            text = page.extract_text()
            if text:
                text_parts.append(text)

        full_text = '\n'.join(text_parts)
        if not full_text.strip():
            return "", "PDF appears to be image-based (scanned) - no text content found"

        cleaned_text = self._clean_text(full_text)
        logger.info(
            f"[JobDocumentService] PDF extraction complete: {len(cleaned_text)} characters "
            f"from {len(reader.pages)} page(s)"
        )
        return cleaned_text, None

    def _extract_docx_text(self, file_content: bytes) -> Tuple[str, Optional[str]]:
        """Extract text from DOC/DOCX file"""
        doc = Document(BytesIO(file_content))

        text_parts = [p.text for p in doc.paragraphs if p.text.strip()]
        # Job ads often keep requirements in tables
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    text_parts.append(" | ".join(cells))

        full_text = '\n'.join(text_parts)
        if not full_text.strip():
            return "", "Document appears to be empty"

        cleaned_text = self._clean_text(full_text)
        logger.info(f"[JobDocumentService] DOCX extraction complete: {len(cleaned_text)} characters")
        return cleaned_text, None

    def _extract_html_text(self, file_content: bytes) -> Tuple[str, Optional[str]]:
        """Extract visible text from an HTML page"""
        markup = file_content.decode("utf-8", errors="ignore")
        markup = re.sub(r'(?is)<(script|style|head)[^>]*>.*?</\1>', ' ', markup)
        markup = re.sub(r'(?i)<br\s*/?>|</(p|div|li|h[1-6]|tr)>', '\n', markup)
        text = html.unescape(re.sub(r'<[^>]+>', ' ', markup))

        if not text.strip():
            return "", "HTML document has no text content"

        cleaned_text = self._clean_text(text)
        logger.info(f"[JobDocumentService] HTML extraction complete: {len(cleaned_text)} characters")
        return cleaned_text, None

    async def extract_fields(self, text: str) -> ProcessedJobDocument:
        """Ask the LLM for title / description / candidate-fit fields."""
        prompt = EXTRACTION_PROMPT.format(text=text[: self.config.MAX_DOCUMENT_CHARS])
        try:
            response = await self.openai_client.chat.completions.create(
                model=self.config.openai.llm_model,
                messages=[
                    {"role": "system", "content": EXTRACTION_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.2,
            )
        except OpenAIError as e:
            logger.error(f"[JobDocumentService] Chat completion failed: {e}")
            raise ServiceError(f"OpenAI chat completion error: {e}", self.COMPONENT)

        content = response.choices[0].message.content
        parsed = extract_json_object(content)
        if parsed is None:
            logger.warning(f"[JobDocumentService] Unparseable model output: {(content or '')[:500]}")
            raise ServiceError("Model did not return valid JSON", self.COMPONENT)

        try:
            document = ProcessedJobDocument.model_validate(parsed)
        except ValidationError as e:
            raise ServiceError(f"Model returned incomplete job description: {e.error_count()} invalid field(s)", self.COMPONENT)

        logger.info(f"[JobDocumentService] Extracted job description '{document.title}'")
        return document

    def _clean_text(self, text: str) -> str:
        """Clean and normalize extracted text"""
        # Collapse runs of spaces/tabs, keep line structure
        text = re.sub(r'[ \t\r\f\v]+', ' ', text)
        text = re.sub(r'\n\s*\n+', '\n', text)
        return text.strip()
