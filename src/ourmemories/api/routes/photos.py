"""Photo metadata endpoints."""

from fastapi import APIRouter, Depends, Query, status

from ...errors import ValidationError
from ...logging_config import get_logger
from ...services.metadata import PhotoStore
from ..dependencies import get_store
from ..schemas import (
    CreatePhotoRequest,
    CreatePhotoResponse,
    ErrorResponse,
    PhotoSchema,
    PhotosListResponse,
    SuccessResponse,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["Photos"])


def _list_response(store: PhotoStore) -> PhotosListResponse:
    photos = store.list_photos()
    return PhotosListResponse(photos=[PhotoSchema.from_photo(photo) for photo in photos], count=len(photos))


@router.get(
    "/photos",
    response_model=PhotosListResponse,
    status_code=status.HTTP_200_OK,
    summary="List photos",
    description="All photos, newest first. An unreadable collection file yields an empty list.",
)
def list_photos(store: PhotoStore = Depends(get_store)):
    return _list_response(store)


@router.get(
    "/gallery",
    response_model=PhotosListResponse,
    status_code=status.HTTP_200_OK,
    summary="List photos for the gallery",
)
def list_gallery_photos(store: PhotoStore = Depends(get_store)):
    """Same listing as /api/photos, kept for gallery clients."""
    return _list_response(store)


@router.post(
    "/photos",
    response_model=CreatePhotoResponse,
    status_code=status.HTTP_200_OK,
    summary="Add photo metadata",
    responses={400: {"model": ErrorResponse}},
)
def create_photo(request: CreatePhotoRequest, store: PhotoStore = Depends(get_store)):
    """Append a photo record after its image has been uploaded.

    Raises:
        ValidationError: 400 if title or url is missing
    """
    photo = store.add_photo(**request.to_fields())
    logger.info("photo_created", photo_id=photo.id, title=photo.title)
    return CreatePhotoResponse(photo=PhotoSchema.from_photo(photo))


@router.delete(
    "/photos",
    response_model=SuccessResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete a photo record",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_photo(
    id: str | None = Query(None, description="ID of the photo to delete"),
    store: PhotoStore = Depends(get_store),
):
    """Remove a photo record. The image in the media service is not deleted.

    Raises:
        ValidationError: 400 if id is missing
        NotFoundError: 404 if no photo has this id
    """
    if not id:
        raise ValidationError("Photo ID is required", code="missing_photo_id")

    store.remove_photo(id)
    return SuccessResponse(message="Photo deleted successfully")
