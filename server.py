"""
Video Annotation Server - FastAPI Application

This is the main entry point for the video annotation backend.
It exposes HTTP endpoints for reading a YouTube video together with its
visitor edits, adding/deleting comments, and editing the title.

Business logic is delegated to the services module - this file only handles:
- API routing
- Request/response handling
- Mapping service errors to structured error responses
- Middleware configuration
- Health checks
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import APIRouter, Depends, FastAPI, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from clients.youtube_data import MetadataProvider, YouTubeMetadataProvider
from config import config
from db.session import DatabaseClient
from errors import ConfigurationError, VideoServiceError
from schemas import (
    AddCommentRequest,
    AddCommentResponse,
    DeleteCommentResponse,
    ErrorResponse,
    HealthResponse,
    HistoryResponse,
    UpdateTitleRequest,
    UpdateTitleResponse,
    VideoViewResponse,
)
from services import CommentService, TitleService, VideoViewService
from store.video_store import VideoRecordStore

API_VERSION = "1.0.0"

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.server.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

router = APIRouter()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan handler for startup/shutdown events.

    Validates configuration and optionally creates tables on startup.
    Releases database connections on shutdown.
    """
    # Startup
    logger.info("Starting Video Annotation Server...")

    for warning in config.validate():
        logger.warning(f"Config warning: {warning}")

    if config.database.auto_create:
        try:
            app.state.database.create_all()
        except ConfigurationError as e:
            logger.warning(f"Skipping table creation: {e.message}")

    logger.info(f"Debug mode: {config.server.debug}")

    yield

    # Shutdown
    logger.info("Shutting down Video Annotation Server...")
    app.state.database.dispose()


# =============================================================================
# Dependencies
# =============================================================================

def get_video_store(request: Request) -> VideoRecordStore:
    return request.app.state.video_store


def get_comment_service(
    store: VideoRecordStore = Depends(get_video_store),
) -> CommentService:
    return CommentService(store)


def get_title_service(
    store: VideoRecordStore = Depends(get_video_store),
) -> TitleService:
    return TitleService(store)


def get_video_view_service(
    store: VideoRecordStore = Depends(get_video_store),
) -> VideoViewService:
    return VideoViewService(store)


# =============================================================================
# Error responses
# =============================================================================

def _error_response(
    status_code: int,
    message: str,
    error: Optional[str] = None,
) -> JSONResponse:
    body = ErrorResponse(message=message, error=error)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True))


def _service_error_response(e: VideoServiceError, action: str) -> JSONResponse:
    """
    Turn a service error into a structured response.

    Client errors (400/404) carry the service's own message. Server
    faults carry a generic "Error <action>" message with the cause as
    the error detail.
    """
    if e.status_code < 500:
        logger.warning(f"{action.capitalize()} rejected: {e.message}")
        return _error_response(e.status_code, e.message, e.detail)

    logger.error(f"Error {action}: {e.message} ({e.detail})")
    return _error_response(e.status_code, f"Error {action}", e.detail or e.message)


def _unexpected_error_response(e: Exception, action: str) -> JSONResponse:
    logger.exception(f"Unexpected error {action}: {e}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, f"Error {action}", str(e))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Report malformed request bodies as 400 with the structured error body."""
    logger.warning(f"Malformed request to {request.url.path}: {exc.errors()}")
    return _error_response(
        status.HTTP_400_BAD_REQUEST, "Invalid request", str(exc.errors()))


# =============================================================================
# Application factory
# =============================================================================

def create_app(
    database: Optional[DatabaseClient] = None,
    metadata_provider: Optional[MetadataProvider] = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        database: Database client; defaults to one built from config.
        metadata_provider: Video metadata source; defaults to the YouTube
            Data API client built from config.

    Returns:
        Configured FastAPI application.
    """
    app = FastAPI(
        title="Video Annotation Server",
        description="Title edits, comments and action history for YouTube videos",
        version=API_VERSION,
        lifespan=lifespan,
        docs_url="/docs" if config.server.debug else None,
        redoc_url="/redoc" if config.server.debug else None,
    )

    app.state.database = database or DatabaseClient(
        config.database.url, echo=config.database.echo)
    app.state.metadata_provider = metadata_provider or YouTubeMetadataProvider(
        api_key=config.youtube.api_key)
    app.state.video_store = VideoRecordStore(
        app.state.database, app.state.metadata_provider)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.server.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router)
    return app


# =============================================================================
# Routes
# =============================================================================

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Returns:
        HealthResponse with server status
    """
    return HealthResponse(status="healthy", version=API_VERSION)


@router.get("/", tags=["System"])
async def root() -> dict[str, str]:
    """Root endpoint with API information."""
    return {
        "service": "Video Annotation Server",
        "version": API_VERSION,
        "docs": "/docs" if config.server.debug else "Disabled in production"
    }


@router.get(
    "/youtube",
    response_model=VideoViewResponse,
    responses=ERROR_RESPONSES,
    tags=["Video"],
)
def get_video(
    video_id: Optional[str] = Query(default=None, alias="videoId"),
    service: VideoViewService = Depends(get_video_view_service),
):
    """
    Combined read: YouTube metadata merged with the stored title, comments
    and action history. Creates the stored record on first sight.

    Query params:
        videoId: YouTube video ID
    """
    try:
        return service.get_video_view(video_id)
    except VideoServiceError as e:
        return _service_error_response(e, "fetching data")
    except Exception as e:
        return _unexpected_error_response(e, "fetching data")


@router.post(
    "/video/comment",
    response_model=AddCommentResponse,
    responses=ERROR_RESPONSES,
    tags=["Comments"],
)
def add_comment(
    request: AddCommentRequest,
    service: CommentService = Depends(get_comment_service),
):
    """
    Add a comment to a video.

    Args:
        request: AddCommentRequest with videoId, text and optional username

    Returns:
        AddCommentResponse with the created comment and the action history
    """
    logger.info(f"Add comment request: video={request.video_id}")

    try:
        result = service.add(request.video_id, request.text, request.username)
        return AddCommentResponse(
            comment=result.comment,
            action_history=result.action_history,
        )
    except VideoServiceError as e:
        return _service_error_response(e, "adding comment")
    except Exception as e:
        return _unexpected_error_response(e, "adding comment")


@router.delete(
    "/video/comment",
    response_model=DeleteCommentResponse,
    responses=ERROR_RESPONSES,
    tags=["Comments"],
)
def delete_comment(
    video_id: Optional[str] = Query(default=None, alias="videoId"),
    comment_id: Optional[str] = Query(default=None, alias="commentId"),
    service: CommentService = Depends(get_comment_service),
):
    """
    Delete a comment from a video.

    Query params:
        videoId: YouTube video ID
        commentId: ID of the comment to delete
    """
    logger.info(f"Delete comment request: video={video_id}, comment={comment_id}")

    try:
        result = service.delete(video_id, comment_id)
        return DeleteCommentResponse(action_history=result.action_history)
    except VideoServiceError as e:
        return _service_error_response(e, "deleting comment")
    except Exception as e:
        return _unexpected_error_response(e, "deleting comment")


@router.put(
    "/video/title",
    response_model=UpdateTitleResponse,
    responses=ERROR_RESPONSES,
    tags=["Title"],
)
def update_title(
    request: UpdateTitleRequest,
    service: TitleService = Depends(get_title_service),
):
    """
    Edit the displayed title of a video.

    Args:
        request: UpdateTitleRequest with videoId and newTitle

    Returns:
        UpdateTitleResponse with the current title and the action history
    """
    logger.info(f"Update title request: video={request.video_id}")

    try:
        result = service.update(request.video_id, request.new_title)
        return UpdateTitleResponse(
            current_title=result.current_title,
            action_history=result.action_history,
        )
    except VideoServiceError as e:
        return _service_error_response(e, "updating title")
    except Exception as e:
        return _unexpected_error_response(e, "updating title")


@router.get(
    "/video/history",
    response_model=HistoryResponse,
    responses=ERROR_RESPONSES,
    tags=["History"],
)
def get_history(
    video_id: Optional[str] = Query(default=None, alias="videoId"),
    service: VideoViewService = Depends(get_video_view_service),
):
    """
    Fetch the action history of a stored video.

    Query params:
        videoId: YouTube video ID
    """
    try:
        return HistoryResponse(action_history=service.get_history(video_id))
    except VideoServiceError as e:
        return _service_error_response(e, "fetching action history")
    except Exception as e:
        return _unexpected_error_response(e, "fetching action history")


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "server:app",
        host=config.server.host,
        port=config.server.port,
        reload=config.server.debug,
        log_level=config.server.log_level.lower()
    )
