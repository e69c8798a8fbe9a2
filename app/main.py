import logging
from time import perf_counter
from urllib.parse import urlparse
from uuid import uuid4

from fastapi import FastAPI, Request
from starlette.middleware.cors import CORSMiddleware

from app.api.exception_handlers import register_exception_handlers
from app.api.v1.router import api_router
from app.core.config import settings
from app.core.logging import configure_logging
from app.schemas.user import CreateUserRequest
from app.validation import Validator

configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

# Request models validated by the rule engine; checked against the registry at startup.
VALIDATED_MODELS = (CreateUserRequest,)


def build_validator() -> Validator:
    validator = Validator(locale=settings.validation_locale)
    for model in VALIDATED_MODELS:
        validator.check_schema(model.validation_schema)
    return validator


app = FastAPI(title=settings.app_name, version=settings.app_version)
app.state.validator = build_validator()

if settings.frontend_url:
    parsed = urlparse(settings.frontend_url)
    origin = f"{parsed.scheme}://{parsed.netloc}"
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

register_exception_handlers(app)
app.include_router(api_router, prefix="/api/v1")


@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or f"req-{uuid4().hex[:12]}"
    request.state.request_id = request_id
    started = perf_counter()
    response = await call_next(request)
    elapsed_ms = (perf_counter() - started) * 1000.0
    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request id=%s method=%s path=%s status=%s duration_ms=%.2f",
        request_id,
        request.method,
        request.url.path,
        response.status_code,
        elapsed_ms,
    )
    return response


@app.get("/health")
def health():
    return {"status": "OK", "env": settings.app_env}
