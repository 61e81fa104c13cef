"""FastAPI server for Ski Planner, following the AgentCore endpoint conventions."""
import logging
import re
import time
import uuid
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field, StrictStr

from ski_planner.agent.executor import BedrockPromptExecutor, PromptExecutor
from ski_planner.agent.planner import get_detailed_plan
from ski_planner.agent.prompt_parser import parse_prompt
from ski_planner.config import settings
from ski_planner.errors import ValidationError
from ski_planner.logging_utils import configure_logging

# Load environment variables
load_dotenv()

configure_logging(settings.log_level, settings.log_file)

logger = logging.getLogger("server")

INVALID_PROMPT_MESSAGE = "Invalid request: prompt is required and must be a string"
GENERATION_FAILED_MESSAGE = "Internal server error occurred while processing your ski planning request"

REQUEST_ID_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._:-]")
MAX_REQUEST_ID_LENGTH = 128

_started_at = time.monotonic()

# Create FastAPI app
app = FastAPI(
    title="Ski Planner",
    description="AI-powered ski trip planning agent",
    version=settings.app_version,
)

# Initialized in startup event, or lazily on first use
prompt_executor: Optional[PromptExecutor] = None


def get_executor() -> PromptExecutor:
    """Dependency providing the shared prompt executor."""
    global prompt_executor
    if prompt_executor is None:
        prompt_executor = BedrockPromptExecutor(settings)
    return prompt_executor


@app.on_event("startup")
async def startup_event():
    """Initialize services on server startup."""
    logger.info("=== Starting Ski Planner Server ===")
    logger.info(f"Server host: {settings.host}:{settings.port}")
    logger.info(f"Bedrock model: {settings.aws_bedrock_model} ({settings.aws_region})")
    if not settings.has_bedrock_credentials:
        logger.warning("AWS_BEARER_TOKEN_BEDROCK not set - ski planning requests will fail")

    get_executor()
    logger.info("=== Server startup complete ===")


def _sanitize_request_id(value: Optional[str]) -> str:
    """Keep only safe characters of a client-supplied request id, capped in length."""
    cleaned = REQUEST_ID_UNSAFE_CHARS.sub("", value or "")[:MAX_REQUEST_ID_LENGTH]
    return cleaned or str(uuid.uuid4())


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log every request and its outcome, tagging it with a request id."""
    request_id = _sanitize_request_id(request.headers.get("x-request-id"))
    request.state.request_id = request_id

    start = time.perf_counter()
    logger.info(f"{request.method} {request.url.path} - Request received [reqId={request_id}]")

    # Unhandled errors propagate past this middleware to the catch-all handler
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} - {status_code} in {elapsed_ms:.1f}ms [reqId={request_id}]"
        )

    response.headers["x-request-id"] = request_id
    return response


def _error_body(message: str) -> dict:
    return {"response": message, "status": "error"}


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    logger.warning(f"Rejected request to {request.url.path}: {exc}")
    return JSONResponse(status_code=400, content=_error_body(str(exc)))


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return await validation_error_handler(request, ValidationError(INVALID_PROMPT_MESSAGE))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error occurred: {exc}", exc_info=exc)
    headers = {}
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        headers["x-request-id"] = request_id
    return JSONResponse(
        status_code=500,
        content={
            "response": "Internal Server Error",
            "status": "error",
            "error": "Internal Server Error",
            "statusCode": 500,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
        },
        headers=headers,
    )


class HealthResponse(BaseModel):
    status: str = "ok"
    timestamp: str
    uptime: float
    version: str
    environment: str


class PingResponse(BaseModel):
    status: str = "Healthy"
    time_of_last_update: int


class InvocationRequest(BaseModel):
    """AgentCore invocation body; fields other than prompt are accepted and ignored."""

    model_config = ConfigDict(extra="allow")

    prompt: StrictStr = Field(..., min_length=1)


class PlanMetadata(BaseModel):
    location: str
    skillLevel: str
    weatherInfo: str
    resortRecommendations: str
    gearSuggestions: str


class InvocationResponse(BaseModel):
    response: str
    status: str
    metadata: Optional[PlanMetadata] = None


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint - basic liveness probe, independent of the planner."""
    logger.debug("Health check requested")
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
        uptime=time.monotonic() - _started_at,
        version=settings.app_version,
        environment=settings.environment,
    )


@app.get("/ping", response_model=PingResponse)
async def ping():
    """AgentCore ping endpoint - reports the agent as ready for new work."""
    logger.debug("AgentCore ping check requested")
    return PingResponse(status="Healthy", time_of_last_update=int(time.time()))


@app.post("/invocations", response_model=InvocationResponse, response_model_exclude_none=True)
async def invocations(
    body: InvocationRequest,
    request: Request,
    executor: PromptExecutor = Depends(get_executor),
):
    """
    AgentCore invocation endpoint for ski planning.

    Args:
        body: Request with a free-text prompt, e.g. "Plan a ski trip to Aspen for beginners"

    Returns:
        The final plan with every intermediate artifact as metadata
    """
    start = time.perf_counter()
    request_id = getattr(request.state, "request_id", None) or str(uuid.uuid4())

    logger.info(f"Processing ski planning request: {body.prompt!r} [reqId={request_id}]")
    trip = parse_prompt(body.prompt)
    logger.debug(f"Parsed location={trip.location!r} skill_level={trip.skill_level!r}")

    result = await get_detailed_plan(
        trip.location,
        trip.skill_level,
        executor=executor,
        log_context={"reqId": request_id},
    )

    elapsed_ms = (time.perf_counter() - start) * 1000
    if result is None:
        logger.error(f"Ski planning workflow failed after {elapsed_ms:.0f}ms [reqId={request_id}]")
        return JSONResponse(status_code=500, content=_error_body(GENERATION_FAILED_MESSAGE))

    logger.info(f"Ski planning workflow completed in {elapsed_ms:.0f}ms [reqId={request_id}]")
    metadata = result.model_dump(by_alias=True, exclude={"final_plan"})
    return InvocationResponse(
        response=result.final_plan,
        status="success",
        metadata=PlanMetadata(**metadata),
    )


def run_server():
    """Run the HTTP server with uvicorn; exits non-zero if the port cannot be bound."""
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run_server()
