"""Image upload endpoint."""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from starlette.concurrency import run_in_threadpool

from ...errors import ValidationError
from ...logging_config import get_logger
from ...services.media import MediaUploadService
from ..dependencies import get_media
from ..schemas import ErrorResponse, SuccessResponse, UploadResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Upload"])


@router.get("/upload", response_model=SuccessResponse, summary="Upload endpoint readiness")
def upload_ready():
    return SuccessResponse(message="Upload endpoint ready")


@router.post(
    "/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload an image",
    description="Stores the image in the media service and returns its reference. "
    "The caller saves the metadata afterwards with POST /api/photos.",
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_photo(
    file: UploadFile | None = File(None, description="Image file (max 5MB)"),
    title: str | None = Form(None),
    date: str | None = Form(None),
    location: str | None = Form(None),
    comment: str | None = Form(None),
    category: str | None = Form(None),
    media: MediaUploadService = Depends(get_media),
):
    """Upload one image.

    date, location and comment are accepted for form compatibility; only
    title and category reach the media service.

    Raises:
        ConfigurationError: 500 if Cloudinary credentials are missing
        ValidationError: 400 if no file, not an image, or too large
        UploadError: 500 if the media service fails
    """
    media.ensure_configured()

    if file is None:
        raise ValidationError("No file uploaded", code="missing_file")

    file_data = await file.read()
    logger.info(
        "upload_request_received",
        filename=file.filename,
        content_type=file.content_type,
        size=len(file_data),
        category=category,
    )

    result = await run_in_threadpool(
        media.upload,
        file_data,
        file.content_type,
        title=title,
        category=category,
        filename=file.filename or "",
    )

    return UploadResponse(
        url=result.url,
        public_id=result.public_id,
        width=result.width,
        height=result.height,
        format=result.format,
    )
