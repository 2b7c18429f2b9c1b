"""
Serverless-style function endpoints.

Mounted under /functions/v1 to mirror the edge-function URL layout the
frontend calls. Every response carries the permissive CORS headers and
every failure is reported as a 500 JSON body ``{"error": message}``.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from talent_screen.config import get_config
from talent_screen.schemas.job_documents import ProcessJobDocumentRequest
from talent_screen.schemas.video_analysis import AnalyzeVideoRequest
from talent_screen.services.container import get_job_document_service, get_video_analysis_service
from talent_screen.services.job_document_service import JobDocumentService
from talent_screen.services.video_analysis_service import VideoAnalysisService
from talent_screen.utils.exceptions import ServiceError, error_message
from talent_screen.utils.logger import get_logger

logger = get_logger(__name__)
config = get_config()

FUNCTIONS_PREFIX = "/functions/v1"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": config.server.cors_allow_origin,
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
}

router = APIRouter(prefix=FUNCTIONS_PREFIX, tags=["Functions"])


async def function_cors_middleware(request: Request, call_next):
    """Answer pre-flight requests and attach CORS headers for function routes."""
    if not request.url.path.startswith(FUNCTIONS_PREFIX):
        return await call_next(request)
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    response = await call_next(request)
    # CORSMiddleware may have answered for a listed origin; credentials cannot go with "*"
    if "access-control-allow-credentials" in response.headers:
        del response.headers["access-control-allow-credentials"]
    response.headers.update(CORS_HEADERS)
    return response


def _error_response(e: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": error_message(e)})


@router.post("/analyze-video")
async def analyze_video(
    request: Request,
    service: VideoAnalysisService = Depends(get_video_analysis_service),
):
    """
    Transcribe and analyze a candidate's video introduction.

    Body: ``{"applicationId": str, "videoPath": str}``
    Returns ``{"transcript", "analysis"}`` after the application row is updated.
    """
    try:
        payload = AnalyzeVideoRequest.model_validate(await request.json())
        logger.info(
            f"[Functions] Received request: applicationId={payload.applicationId}, videoPath={payload.videoPath}"
        )

        if not payload.applicationId or not payload.videoPath:
            raise ServiceError("Missing required parameters: applicationId or videoPath", "analyze-video")

        result = await service.analyze(payload.applicationId, payload.videoPath)
        return JSONResponse(content=result.model_dump())

    except Exception as e:
        logger.error(f"[Functions] analyze-video error: {e}", exc_info=True)
        return _error_response(e)


@router.post("/process-job-document")
async def process_job_document(
    request: Request,
    service: JobDocumentService = Depends(get_job_document_service),
):
    """
    Extract the structured job description from an uploaded document.

    Body: ``{"filePath": str}``
    """
    try:
        payload = ProcessJobDocumentRequest.model_validate(await request.json())
        logger.info(f"[Functions] Received request: filePath={payload.filePath}")

        if not payload.filePath:
            raise ServiceError("Missing required parameter: filePath", "process-job-document")

        document = await service.process(payload.filePath)
        return JSONResponse(content=document.model_dump())

    except Exception as e:
        logger.error(f"[Functions] process-job-document error: {e}", exc_info=True)
        return _error_response(e)
