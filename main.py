from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.trustedhost import TrustedHostMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

import schemas
from config import get_settings
from exceptions import ConfigurationError, ContactError, RateLimitError, ValidationError
from forwarder import Forwarder
from intake import validate_submission

settings = get_settings()

# Configure logging
logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
logger = logging.getLogger(__name__)

# Rolling window per client address, kept in process memory
limiter = Limiter(key_func=get_remote_address, strategy="moving-window", headers_enabled=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        app.state.forwarder = Forwarder.from_settings(settings)
        logger.info(
            f"Contact forwarding ready for {len(settings.recipients)} recipients, "
            f"sheet append {'enabled' if settings.sheets_enabled else 'disabled'}"
        )
    except ConfigurationError as e:
        logger.error(f"Email configuration error: {e.detail}")
        app.state.forwarder = None
    yield
    if app.state.forwarder is not None:
        app.state.forwarder.close()


app = FastAPI(
    title="Furnilabs Contact API",
    description="Forwards contact form enquiries to the studio by email and Google Sheets",
    version="1.0.0",
    lifespan=lifespan,
)
app.state.limiter = limiter

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_methods=["POST", "GET", "OPTIONS"],
    allow_headers=["Content-Type"],
    max_age=3600,
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)


@app.middleware("http")
async def add_security_headers(request, call_next):
    response = await call_next(request)
    response.headers["X-Content-Type-Options"] = "nosniff"
    response.headers["X-Frame-Options"] = "DENY"
    response.headers["Referrer-Policy"] = "no-referrer"
    response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
    return response


def error_response(exc: ContactError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(ContactError)
async def contact_error_handler(request: Request, exc: ContactError):
    return error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    logger.info(f"Rejected contact body: {exc.errors()}")
    return error_response(ValidationError())


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning(f"Rate limit exceeded for {get_remote_address(request)}: {exc.detail}")
    response = error_response(RateLimitError())
    view_rate_limit = getattr(request.state, "view_rate_limit", None)
    if view_rate_limit is not None:
        response = request.app.state.limiter._inject_headers(response, view_rate_limit)
    return response


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=exc.headers,
    )


def get_forwarder(request: Request) -> Optional[Forwarder]:
    return getattr(request.app.state, "forwarder", None)


@app.get("/")
def read_root():
    return {"message": "Welcome to Furnilabs Contact API"}


@app.get("/api/health", response_model=schemas.HealthResponse)
def health_check(forwarder: Optional[Forwarder] = Depends(get_forwarder)):
    return {
        "status": "ok",
        "email_configured": forwarder is not None,
        "sheets_enabled": forwarder is not None and forwarder.sheets is not None,
    }


@app.post(
    "/api/contact",
    response_model=schemas.ContactResponse,
    responses={
        400: {"model": schemas.ErrorResponse},
        429: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)
@limiter.limit(settings.contact_rate_limit)
def submit_contact(
    request: Request,
    response: Response,
    form: schemas.ContactForm,
    forwarder: Optional[Forwarder] = Depends(get_forwarder),
):
    submission = validate_submission(form)

    if forwarder is None:
        logger.error("Email configuration error: contact forwarding is not configured")
        raise ConfigurationError()

    result = forwarder.forward(submission)
    return {"message": result.message}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=8000,
        proxy_headers=True,
        forwarded_allow_ips=settings.forwarded_allow_ips,
    )
