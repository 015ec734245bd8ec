## Main application entry point
import logging
import uuid

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from careerpath.settings import settings
from careerpath.logging_config import setup_logging
from careerpath.agents.errors import (
    ConfigurationError,
    ProviderExhaustedError,
    RequestShapeError,
    RoadmapValidationError,
    StageFailedError,
)
from careerpath.generation.routes import router as generation_router, VALID_SHAPES

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("careerpath.main")

app = FastAPI(title="CareerPath roadmap generator")


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or str(uuid.uuid4())


def _error(request: Request, status_code: int, error: str, message: str) -> JSONResponse:
    return JSONResponse(
        {"error": error, "message": message, "requestId": _request_id(request)},
        status_code=status_code,
    )


@app.middleware("http")
async def correlation_id(request: Request, call_next):
    request.state.request_id = str(uuid.uuid4())
    response = await call_next(request)
    response.headers["X-Request-ID"] = request.state.request_id
    return response


@app.get("/health")
def health():
    return {"status": "ok"}


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error("request_id=%s configuration error: %s", _request_id(request), exc)
    return _error(request, 500, "Server configuration error", str(exc))


@app.exception_handler(RequestShapeError)
async def request_shape_handler(request: Request, exc: RequestShapeError):
    logger.error("request_id=%s invalid request: %s", _request_id(request), exc)
    return _error(request, 400, "Invalid request", str(exc))


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # body missing or not a JSON object
    logger.error("request_id=%s unreadable body: %s", _request_id(request), exc.errors())
    return _error(request, 400, "Invalid request", VALID_SHAPES)


@app.exception_handler(ProviderExhaustedError)
@app.exception_handler(StageFailedError)
async def upstream_failure_handler(request: Request, exc: Exception):
    logger.error("request_id=%s upstream failure: %s", _request_id(request), exc)
    return _error(request, 502, "Upstream service failure", str(exc))


@app.exception_handler(RoadmapValidationError)
async def roadmap_validation_handler(request: Request, exc: RoadmapValidationError):
    logger.error("request_id=%s roadmap validation failed index=%s: %s", _request_id(request), exc.index, exc)
    return _error(request, 502, "Roadmap generation failed", str(exc))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("request_id=%s unhandled error", _request_id(request))
    return _error(request, 500, "Internal Server Error", f"{type(exc).__name__}: {exc}")


app.include_router(generation_router)
