"""
Quiz Agent HTTP API Server

FastAPI server exposing the adaptive quiz agent.

Endpoints:
- GET /api/agent - Readiness message
- POST /api/agent - Generate the next adaptive question
- GET /health - Health check
"""

import logging
import secrets
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel

from agents import get_quiz_agent
from config import settings
from models.quiz import QuizRequest, QuizResponse

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"


# =============================================================================
# Authentication
# =============================================================================

security = HTTPBearer(auto_error=False)


async def verify_api_key(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> bool:
    """Verify API key from Authorization header."""
    # Skip auth when no API key is configured (local development)
    if not settings.quiz_api_key:
        return True

    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Missing authorization header",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not secrets.compare_digest(credentials.credentials, settings.quiz_api_key):
        raise HTTPException(
            status_code=401,
            detail="Invalid API key",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return True


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    version: str


class ReadyResponse(BaseModel):
    """Readiness message for the agent endpoint."""
    message: str


# =============================================================================
# FastAPI Application
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("[API] Starting quiz agent API server")
    logger.info(
        f"[API] Question model: {settings.question_generation_provider}/"
        f"{settings.question_generation_model} "
        f"(llm enabled: {settings.enable_llm_generation and bool(settings.provider_api_key())})"
    )
    yield
    logger.info("[API] Shutting down quiz agent API server")


app = FastAPI(
    title="Adaptive Quiz Agent API",
    description="HTTP API for adaptive multiple-choice math questions",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins if settings.quiz_api_key else ["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Return errors as {"error": ...} bodies."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=exc.headers,
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed JSON and type errors are client errors, not 422s."""
    errors = exc.errors()
    if any(error.get("type") == "json_invalid" for error in errors):
        message = "Invalid JSON body"
    else:
        message = "; ".join(
            f"{'.'.join(str(part) for part in error.get('loc', ())[1:])}: {error.get('msg')}"
            for error in errors
        ) or "Invalid request body"
    return JSONResponse(status_code=400, content={"error": message})


# =============================================================================
# Health Check
# =============================================================================

@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        version=API_VERSION,
    )


# =============================================================================
# Quiz Endpoints
# =============================================================================

@app.get("/api/agent", response_model=ReadyResponse)
async def agent_ready():
    """Readiness message for clients probing the agent."""
    return ReadyResponse(message="Agent API is reliable and ready.")


@app.post(
    "/api/agent",
    response_model=QuizResponse,
    response_model_by_alias=True,
    dependencies=[Depends(verify_api_key)],
)
async def generate_question(request: QuizRequest):
    """
    Generate the next adaptive question.

    Adjusts the difficulty from the learner's recent answers, tries the
    configured LLM, and falls back to the rule-based generator.
    """
    if not request.class_level or not request.topic:
        raise HTTPException(status_code=400, detail="Missing classLevel or topic")
    if request.class_level < 1:
        raise HTTPException(status_code=400, detail="classLevel must be a positive integer")

    agent = get_quiz_agent()
    return await agent.generate_question(
        class_level=request.class_level,
        topic=request.topic,
        current_difficulty=request.current_difficulty,
        previous_performance=request.previous_performance,
        previous_hashes=request.previous_hashes,
    )


# =============================================================================
# Server Entry Point
# =============================================================================

def start_server(host: str | None = None, port: int | None = None, reload: bool = False):
    """Start the API server."""
    uvicorn.run(
        "api:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    start_server(reload=True)
