"""
Video Analysis Service

Transcribes a candidate's video introduction with OpenAI Whisper, asks the
chat model for a structured assessment and stores both on the application.
"""

import asyncio
from typing import Any, Optional

import httpx
from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from talent_screen.config import Config
from talent_screen.db.supabase import get_supabase
from talent_screen.schemas.video_analysis import VideoAnalysis, VideoAnalysisResult
from talent_screen.utils.exceptions import ServiceError, error_message
from talent_screen.utils.json_utils import extract_json_object
from talent_screen.utils.logger import get_logger

logger = get_logger(__name__)

VIDEO_FILENAME = "video.webm"
VIDEO_MEDIA_TYPE = "video/webm"
ANALYZED_STATUS = "video_analyzed"

ANALYSIS_SYSTEM_PROMPT = (
    "Analyze the candidate's video introduction transcript and extract key information about "
    "their motivation, experience, and communication style. Return a JSON object with the "
    'following structure: {"motivation": string, "experience_summary": string, '
    '"communication_score": number, "key_strengths": string[]}'
)


def _preview(text: Optional[str], limit: int = 100) -> str:
    return f"{(text or '')[:limit]}..."


class VideoAnalysisService:
    """Download -> transcribe -> analyze -> store, one linear chain per call."""

    COMPONENT = "analyze-video"

    def __init__(
        self,
        config: Config,
        client: Any = None,
        openai_client: Optional[AsyncOpenAI] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.config = config
        self.client = client if client is not None else get_supabase(config)
        self.openai_client = openai_client or AsyncOpenAI(
            api_key=config.openai.api_key,
            base_url=config.openai.base_url,
            timeout=config.openai.timeout,
        )
        # Overridable for tests (httpx.MockTransport)
        self.transport = transport

    async def analyze(self, application_id: str, video_path: str) -> VideoAnalysisResult:
        """
        Run the full analysis for one application.

        Raises:
            ServiceError: on the first failing step; later steps are skipped
        """
        video_data = await asyncio.to_thread(self.download_video, video_path)
        transcript = await self.transcribe(video_data)
        analysis = await self.analyze_transcript(transcript)
        await asyncio.to_thread(self.save_results, application_id, transcript, analysis)
        return VideoAnalysisResult(transcript=transcript, analysis=analysis)

    def download_video(self, video_path: str) -> bytes:
        logger.info("[VideoAnalysisService] Downloading video from storage...")
        try:
            video_data = self.client.storage.from_(self.config.supabase.applications_bucket).download(video_path)
        except Exception as e:
            logger.error(f"[VideoAnalysisService] Error downloading video: {e}")
            raise ServiceError(f"Failed to download video: {error_message(e)}", self.COMPONENT)

        if not video_data:
            raise ServiceError("No video data received from storage", self.COMPONENT)
        return video_data

    async def transcribe(self, video_data: bytes) -> str:
        """Send the video to the Whisper transcription endpoint and return its text."""
        logger.info("[VideoAnalysisService] Preparing video data for transcription...")
        files = {"file": (VIDEO_FILENAME, video_data, VIDEO_MEDIA_TYPE)}
        data = {"model": self.config.openai.transcription_model}

        logger.info("[VideoAnalysisService] Sending to OpenAI for transcription...")
        try:
            async with httpx.AsyncClient(timeout=self.config.openai.timeout, transport=self.transport) as http:
                response = await http.post(
                    f"{self.config.openai.base_url}/audio/transcriptions",
                    headers={"Authorization": f"Bearer {self.config.openai.api_key}"},
                    files=files,
                    data=data,
                )
        except httpx.HTTPError as e:
            logger.error(f"[VideoAnalysisService] Transcription request failed: {e}")
            raise ServiceError(f"OpenAI Whisper API request failed: {e}", self.COMPONENT)

        if not response.is_success:
            error_text = response.text
            logger.error(f"[VideoAnalysisService] OpenAI Whisper API error: {error_text}")
            raise ServiceError(f"OpenAI Whisper API error: {error_text}", self.COMPONENT)

        try:
            payload = response.json()
        except ValueError:
            payload = None
        transcript = payload.get("text") if isinstance(payload, dict) else None
        if not transcript:
            raise ServiceError("No transcript received from OpenAI", self.COMPONENT)

        logger.info(f"[VideoAnalysisService] Transcription received: {_preview(transcript)}")
        return transcript

    async def analyze_transcript(self, transcript: str) -> Optional[str]:
        logger.info("[VideoAnalysisService] Analyzing transcript...")
        try:
            response = await self.openai_client.chat.completions.create(
                model=self.config.openai.llm_model,
                messages=[
                    {"role": "system", "content": ANALYSIS_SYSTEM_PROMPT},
                    {"role": "user", "content": transcript},
                ],
            )
        except OpenAIError as e:
            logger.error(f"[VideoAnalysisService] Chat completion failed: {e}")
            raise ServiceError(f"OpenAI chat completion error: {e}", self.COMPONENT)
        analysis = response.choices[0].message.content
        logger.info(f"[VideoAnalysisService] Analysis completed: {_preview(analysis)}")
        self._check_analysis_format(analysis)
        return analysis

    def save_results(self, application_id: str, transcript: str, analysis: Optional[str]) -> None:
        """Write transcript and raw analysis text onto the application row."""
        try:
            (
                self.client.table(self.config.supabase.applications_table)
                .update({
                    "video_transcript": transcript,
                    "video_analysis": analysis,
                    "status": ANALYZED_STATUS,
                })
                .eq("id", application_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"[VideoAnalysisService] Error updating application: {e}")
            raise ServiceError(f"Failed to update application: {error_message(e)}", self.COMPONENT)

        logger.info("[VideoAnalysisService] Successfully updated application with transcript and analysis")

    def _check_analysis_format(self, analysis: Optional[str]) -> None:
        # The raw text is stored either way; this only flags unexpected output.
        parsed = extract_json_object(analysis)
        if parsed is None:
            logger.warning("[VideoAnalysisService] Analysis is not a JSON object; storing raw text")
            return
        try:
            VideoAnalysis.model_validate(parsed)
        except ValidationError as e:
            logger.warning(
                f"[VideoAnalysisService] Analysis does not match expected fields ({e.error_count()} errors); "
                "storing raw text"
            )
