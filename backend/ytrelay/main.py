from typing import Annotated

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from ytrelay.config import settings
from ytrelay.dependencies import get_token_manager
from ytrelay.exceptions import RelayError
from ytrelay.logger import app_logger
from ytrelay.routers import auth, upload
from ytrelay.schemas.upload import ErrorResponse
from ytrelay.services.token_manager import TokenManager

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Include routers
app.include_router(auth.router, tags=["Authentication"])
app.include_router(upload.router, tags=["Upload"])


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    """Translate service errors into the JSON error body."""
    app_logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(error=exc.message).model_dump(),
    )


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
):
    """Report malformed input as a 400 with the JSON error body."""
    return JSONResponse(
        status_code=400,
        content=ErrorResponse(error=str(exc.errors())).model_dump(),
    )


@app.on_event("startup")
async def startup_event():
    """Run on application startup."""
    app_logger.info(f"Starting {settings.app_name}")

    manager = get_token_manager()
    manager.load_persisted()

    if not manager.has_refresh_token:
        app_logger.warning("No refresh token available; open /auth to authorize")


@app.get("/", response_class=PlainTextResponse)
async def root(manager: Annotated[TokenManager, Depends(get_token_manager)]):
    """Health check endpoint."""
    if manager.has_refresh_token:
        return "Backend OK. POST /upload to send a video."
    return "Backend OK. Use GET /auth to authorize, POST /upload to send a video."
