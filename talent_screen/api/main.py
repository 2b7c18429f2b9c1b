"""
FastAPI Application

HTTP API server for job document upload and candidate video analysis.
"""

import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from talent_screen.api.functions import function_cors_middleware
from talent_screen.config import get_config
from talent_screen.utils.limiter import limiter

config = get_config()

# Create FastAPI app
app = FastAPI(
    title="Talent Screen API",
    description="Job document processing and candidate video analysis",
    version="1.0.0",
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# CORS for the /api routes. Local dev frontends plus CORS_ORIGINS (comma-separated).
_cors_origins = [
    "http://localhost:3000",
    "http://localhost:5173",
    "http://127.0.0.1:3000",
    "http://127.0.0.1:5173",
]
_extra_origins = os.getenv("CORS_ORIGINS", "")
if _extra_origins:
    for o in _extra_origins.split(","):
        o = o.strip().rstrip("/")
        if o and o not in _cors_origins:
            _cors_origins.append(o)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Registered after CORSMiddleware so it runs first: function routes answer
# pre-flight requests themselves with the fixed header set.
app.middleware("http")(function_cors_middleware)


@app.get("/health")
async def health():
    """Liveness probe: returns 200 if the process is running."""
    return {"status": "ok"}
