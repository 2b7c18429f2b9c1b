"""
Configuration Management

Centralized configuration management using environment variables
with proper validation and type safety.
"""

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


# Load environment variables from .env in project root (resolve to absolute path)
_backend_root = Path(__file__).resolve().parent.parent
_env_path = _backend_root / ".env"
if _env_path.exists():
    load_dotenv(dotenv_path=str(_env_path))
else:
    # Also load from current working directory so "python backend_server.py" picks up .env
    load_dotenv()


@dataclass
class SupabaseConfig:
    """Supabase project configuration (storage, database, edge functions)"""
    url: str
    service_role_key: str
    applications_bucket: str = "applications"
    job_documents_bucket: str = "job-documents"
    applications_table: str = "applications"
    process_document_function: str = "process-job-document"


@dataclass
class OpenAIConfig:
    """OpenAI transcription and chat completion configuration"""
    api_key: str
    base_url: str = "https://api.openai.com/v1"
    transcription_model: str = "whisper-1"
    llm_model: str = "gpt-4o-mini"
    timeout: float = 60.0


@dataclass
class ServerConfig:
    """HTTP server configuration"""
    host: str
    port: int
    # Value of Access-Control-Allow-Origin on function responses
    cors_allow_origin: str = "*"


@dataclass
class Config:
    """Main application configuration"""

    # Storage, database and function invocation
    supabase: SupabaseConfig

    # Transcription + LLM
    openai: OpenAIConfig

    # Server configuration
    server: ServerConfig

    # Document processing
    MAX_DOCUMENT_CHARS: int = 15000  # Characters sent to the LLM

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def from_env(cls) -> "Config":
        """
        Create configuration from environment variables.

        Returns:
            Configured Config instance

        Raises:
            ValueError: If required environment variables are missing
        """
        supabase_url = os.getenv("SUPABASE_URL")
        supabase_key = os.getenv("SUPABASE_SERVICE_ROLE_KEY") or os.getenv("SUPABASE_SERVICE_KEY")

        if not supabase_url:
            raise ValueError("SUPABASE_URL environment variable is required")
        if not supabase_key:
            raise ValueError("SUPABASE_SERVICE_ROLE_KEY environment variable is required")

        openai_api_key = os.getenv("OPENAI_API_KEY")
        if not openai_api_key:
            raise ValueError("OPENAI_API_KEY environment variable is required")

        # Requests go to {base_url}/audio/transcriptions and {base_url}/chat/completions
        openai_base_url = (os.getenv("OPENAI_BASE_URL") or "https://api.openai.com/v1").rstrip("/")
        if not openai_base_url.endswith("/v1"):
            openai_base_url = f"{openai_base_url}/v1"

        return cls(
            supabase=SupabaseConfig(
                url=supabase_url,
                service_role_key=supabase_key,
                applications_bucket=os.getenv("APPLICATIONS_BUCKET", "applications"),
                job_documents_bucket=os.getenv("JOB_DOCUMENTS_BUCKET", "job-documents"),
                applications_table=os.getenv("APPLICATIONS_TABLE", "applications"),
                process_document_function=os.getenv("PROCESS_DOCUMENT_FUNCTION", "process-job-document"),
            ),
            openai=OpenAIConfig(
                api_key=openai_api_key,
                base_url=openai_base_url,
                transcription_model=os.getenv("OPENAI_TRANSCRIPTION_MODEL", "whisper-1"),
                llm_model=os.getenv("OPENAI_LLM_MODEL", "gpt-4o-mini"),
                timeout=float(os.getenv("OPENAI_TIMEOUT", "60")),
            ),
            server=ServerConfig(
                host=os.getenv("SERVER_HOST", "0.0.0.0"),
                port=int(os.getenv("SERVER_PORT", "8000")),
                cors_allow_origin=os.getenv("CORS_ALLOW_ORIGIN", "*"),
            ),
            MAX_DOCUMENT_CHARS=int(os.getenv("MAX_DOCUMENT_CHARS", "15000")),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
        )


def get_config() -> Config:
    """
    Get configuration from environment variables.

    Returns:
        Configuration instance
    """
    return Config.from_env()
