import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from backend import content, llm
from backend.config import Settings, get_settings
from backend.schemas import (
    CleanTranscriptRequest,
    CleanTranscriptResponse,
    ErrorResponse,
    GenerateContentRequest,
    GeneratedContent,
    HealthResponse,
)

settings = get_settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Video to Blog Converter")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning("Rejected malformed request to %s: %s", request.url.path, exc.errors())
    return error_response(400, "Invalid request body")


@app.on_event("startup")
async def log_startup_state():
    current = get_settings()
    logger.info("Server running on port %s", current.port)
    logger.info("Environment: %s", current.environment)
    logger.info("LLM provider: %s (model %s)", current.provider_name, current.model)
    logger.info("%s configured: %s", current.api_key_env, bool(current.api_key))
    logger.info("Build directory exists: %s", Path(current.build_dir).is_dir())

    if not current.api_key:
        logger.error("WARNING: No %s found in environment variables", current.api_key_env)
        return
    logger.info("API key starts with: %s...", current.api_key[:7])
    try:
        llm.check_api_key(current)
    except llm.ProviderConfigError as e:
        logger.error("WARNING: %s", e)


@app.post("/api/clean-transcript", response_model=CleanTranscriptResponse, responses=ERROR_RESPONSES)
def clean_transcript_endpoint(
    body: Optional[CleanTranscriptRequest] = None,
    settings: Settings = Depends(get_settings),
):
    if body is None or not body.transcript:
        return error_response(400, "Transcript is required")

    if not settings.api_key:
        logger.error("%s not configured", settings.api_key_env)
        return error_response(500, f"{settings.api_key_env} not configured")

    try:
        provider = llm.build_provider(settings)
        cleaned = content.clean_transcript(provider, body.transcript)
    except llm.ProviderError as e:
        logger.error("%s API error for transcript cleaning: %s", settings.provider_name, e)
        return error_response(
            e.status_code, f"Failed to clean transcript: {e.message or 'Unknown error'}"
        )
    except Exception as e:
        logger.exception("Error cleaning transcript")
        return error_response(500, f"Failed to clean transcript: {e}")

    return {"cleanedTranscript": cleaned}


@app.post(
    "/api/generate-content",
    responses={200: {"model": GeneratedContent}, **ERROR_RESPONSES},
)
def generate_content_endpoint(
    body: Optional[GenerateContentRequest] = None,
    settings: Settings = Depends(get_settings),
):
    if body is None or not body.transcript:
        return error_response(400, "Transcript is required")

    if not settings.api_key:
        logger.error("%s not configured", settings.api_key_env)
        return error_response(500, f"{settings.api_key_env} not configured")

    try:
        provider = llm.build_provider(settings)
        return content.generate_content(provider, body.transcript, body.videoTitle)
    except llm.ProviderError as e:
        logger.error("%s API error: %s", settings.provider_name, e)
        message = content.describe_provider_error(e.status_code, e.message, settings.provider_name)
        return error_response(e.status_code, f"API request failed ({e.status_code}): {message}")
    except content.ContentParseError:
        return error_response(500, "Failed to parse generated content")
    except Exception as e:
        logger.exception("Error generating content")
        return error_response(500, f"Failed to generate content: {e}")


@app.get("/api/health", response_model=HealthResponse)
def health():
    timestamp = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return {"status": "OK", "timestamp": timestamp.replace("+00:00", "Z")}


@app.get("/{full_path:path}", include_in_schema=False)
def serve_frontend(full_path: str, settings: Settings = Depends(get_settings)):
    """Serve the prebuilt UI, falling back to index.html for client-side routes."""
    build_dir = Path(settings.build_dir).resolve()

    if full_path and not full_path.startswith("api/"):
        candidate = (build_dir / full_path).resolve()
        if candidate.is_file() and candidate.is_relative_to(build_dir):
            return FileResponse(candidate)

    index_path = build_dir / "index.html"
    if index_path.is_file():
        return FileResponse(index_path)
    return PlainTextResponse(
        "Application is building. Please try again in a few moments.", status_code=503
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.host, port=settings.port)
