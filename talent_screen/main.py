"""
Application entrypoint.

Re-exports the FastAPI `app` instance from `talent_screen.api.main`
and registers the feature routers.
"""

from talent_screen.api.main import app  # noqa: F401
from talent_screen.config import get_config
from talent_screen.utils.logger import get_logger, setup_logging

config = get_config()
setup_logging(config)
logger = get_logger(__name__)

from talent_screen.api import functions as functions_api  # noqa: E402
from talent_screen.api import job_documents as job_documents_api  # noqa: E402

app.include_router(functions_api.router)
app.include_router(job_documents_api.router)
