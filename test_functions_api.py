import pytest
from fastapi.testclient import TestClient

from talent_screen.main import app
from talent_screen.services.container import get_job_document_service, get_video_analysis_service
from talent_screen.services.job_document_service import JobDocumentService
from talent_screen.services.video_analysis_service import VideoAnalysisService

client = TestClient(app)

CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-headers": "authorization, x-client-info, apikey, content-type",
}

JD_JSON = (
    '```json\n{"title": "Support Lead", "description": "Lead a team of six support engineers.", '
    '"good_candidate_attributes": "Calm under pressure", "bad_candidate_attributes": "Blames customers", '
    '"essential_attributes": ["Zendesk", "Coaching"]}\n```'
)


def assert_cors(response):
    for name, value in CORS.items():
        assert response.headers[name] == value


@pytest.fixture
def video_service(config, fake_supabase, fake_openai, fake_whisper):
    fake_supabase.storage.files[("applications", "videos/app-1.webm")] = b"webm-bytes"
    service = VideoAnalysisService(
        config,
        client=fake_supabase,
        openai_client=fake_openai,
        transport=fake_whisper.transport,
    )
    app.dependency_overrides[get_video_analysis_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


@pytest.fixture
def document_service(config, fake_supabase, make_openai):
    service = JobDocumentService(config, client=fake_supabase, openai_client=make_openai(JD_JSON))
    app.dependency_overrides[get_job_document_service] = lambda: service
    yield service
    app.dependency_overrides.clear()


def test_preflight_returns_headers_and_no_body(video_service, fake_supabase):
    response = client.options(
        "/functions/v1/analyze-video",
        headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
    )

    assert response.status_code == 200
    assert response.content == b""
    assert_cors(response)
    assert fake_supabase.calls == []


def test_preflight_ignores_request_body(video_service):
    response = client.request("OPTIONS", "/functions/v1/analyze-video", content=b"{not json")

    assert response.status_code == 200
    assert response.content == b""
    assert_cors(response)


def test_analyze_video_success(video_service, fake_supabase, fake_whisper, fake_openai):
    response = client.post(
        "/functions/v1/analyze-video",
        json={"applicationId": "app-1", "videoPath": "videos/app-1.webm"},
    )

    assert response.status_code == 200
    assert response.json() == {
        "transcript": fake_whisper.payload["text"],
        "analysis": fake_openai.chat.completions.content,
    }
    assert response.headers["content-type"] == "application/json"
    assert_cors(response)
    assert len(fake_supabase.calls_of("update")) == 1


def test_analyze_video_missing_parameter(video_service, fake_supabase):
    response = client.post("/functions/v1/analyze-video", json={"applicationId": "app-1"})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing required parameters: applicationId or videoPath"}
    assert_cors(response)
    assert fake_supabase.calls == []


def test_analyze_video_invalid_json(video_service):
    response = client.post(
        "/functions/v1/analyze-video",
        content=b"not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "Expecting value: line 1 column 1 (char 0)"}
    assert_cors(response)


def test_listed_origin_gets_wildcard_without_credentials(video_service):
    response = client.post(
        "/functions/v1/analyze-video",
        json={"applicationId": "app-1", "videoPath": "videos/app-1.webm"},
        headers={"Origin": "http://localhost:3000"},
    )

    assert response.status_code == 200
    assert_cors(response)
    assert "access-control-allow-credentials" not in response.headers


def test_process_job_document_empty_description(config, fake_supabase, make_openai):
    fake_supabase.storage.files[("job-documents", "jd.html")] = b"<p>Support lead</p>"
    service = JobDocumentService(
        config, client=fake_supabase, openai_client=make_openai('{"title": "Support Lead", "description": ""}')
    )
    app.dependency_overrides[get_job_document_service] = lambda: service
    try:
        response = client.post("/functions/v1/process-job-document", json={"filePath": "jd.html"})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert "incomplete job description" in response.json()["error"]
    assert_cors(response)


def test_analyze_video_without_data_skips_transcription(video_service, fake_whisper):
    response = client.post(
        "/functions/v1/analyze-video",
        json={"applicationId": "app-1", "videoPath": "videos/unknown.webm"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "No video data received from storage"}
    assert fake_whisper.requests == []


def test_analyze_video_without_transcript_skips_completion(video_service, fake_whisper, fake_openai):
    fake_whisper.payload = {}

    response = client.post(
        "/functions/v1/analyze-video",
        json={"applicationId": "app-1", "videoPath": "videos/app-1.webm"},
    )

    assert response.status_code == 500
    assert response.json() == {"error": "No transcript received from OpenAI"}
    assert fake_openai.completion_calls == []


def test_process_job_document_success(document_service, fake_supabase):
    fake_supabase.storage.files[("job-documents", "job-documents/1_lead.html")] = (
        b"<html><body><h1>Support Lead</h1><p>Lead a team.</p></body></html>"
    )

    response = client.post("/functions/v1/process-job-document", json={"filePath": "job-documents/1_lead.html"})

    assert response.status_code == 200
    body = response.json()
    assert body["title"] == "Support Lead"
    assert body["description"] == "Lead a team of six support engineers."
    assert body["essential_attributes"] == ["Zendesk", "Coaching"]
    assert_cors(response)


def test_process_job_document_missing_path(document_service):
    response = client.post("/functions/v1/process-job-document", json={})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing required parameter: filePath"}
    assert_cors(response)


def test_process_job_document_preflight(document_service):
    response = client.options("/functions/v1/process-job-document")

    assert response.status_code == 200
    assert response.content == b""
    assert_cors(response)


def test_health_has_no_function_cors_headers():
    response = client.get("/health")

    assert response.status_code == 200
    assert "access-control-allow-headers" not in response.headers
