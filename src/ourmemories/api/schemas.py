"""Request and response schemas for the JSON API."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models.photo import Photo


class PhotoSchema(BaseModel):
    """A photo record as returned by the API."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": "m2x9k1aa3f9c0d2b7e41",
                "title": "Sunset",
                "date": "2026-10-19",
                "location": "Busan",
                "comment": "",
                "category": "travel",
                "url": "https://res.cloudinary.com/demo/image/upload/v1/our-memories/1760870400000_Sunset.jpg",
                "publicId": "our-memories/1760870400000_Sunset",
                "uploadedAt": "2026-10-19T09:00:00.000Z",
            }
        },
    )

    id: str = Field(..., description="Opaque photo ID")
    title: str = Field(..., description="Photo title")
    date: str = Field(..., description="Calendar date the photo was taken (YYYY-MM-DD)")
    location: str = Field("", description="Where the photo was taken")
    comment: str = Field("", description="Free-form comment")
    category: str = Field("daily", description="dates, daily, travel, adventure or free text")
    url: str = Field(..., description="URL of the stored image")
    public_id: str = Field("", alias="publicId", description="Media service ID of the stored image")
    uploaded_at: str = Field(..., alias="uploadedAt", description="Server-assigned upload timestamp")

    @classmethod
    def from_photo(cls, photo: Photo) -> "PhotoSchema":
        return cls.model_validate(photo.to_dict())


class CreatePhotoRequest(BaseModel):
    """Fields for a new photo record. title and url are checked by the store."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = Field(None, description="Photo title (required)")
    url: Optional[str] = Field(None, description="URL of the uploaded image (required)")
    date: Optional[str] = Field(None, description="Calendar date, defaults to today")
    location: Optional[str] = Field(None, description="Where the photo was taken")
    comment: Optional[str] = Field(None, description="Free-form comment")
    category: Optional[str] = Field(None, description="Category, defaults to daily")
    public_id: Optional[str] = Field(None, alias="publicId", description="Media service ID")

    def to_fields(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PhotosListResponse(BaseModel):
    """Response schema for photo list endpoints."""

    success: bool = Field(True, description="Operation success status")
    photos: list[PhotoSchema] = Field(..., description="Photos, newest first")
    count: int = Field(..., description="Number of photos")


class CreatePhotoResponse(BaseModel):
    """Response schema for a created photo record."""

    success: bool = Field(True, description="Operation success status")
    photo: PhotoSchema = Field(..., description="The created record")
    message: str = Field("Photo saved successfully", description="Success message")


class SuccessResponse(BaseModel):
    """Standard success response for operations without specific data."""

    success: bool = Field(True, description="Operation success status")
    message: str = Field(..., description="Success message")


class UploadResponse(BaseModel):
    """Response schema for an uploaded image."""

    success: bool = Field(True, description="Operation success status")
    url: str = Field(..., description="Canonical URL of the stored image")
    public_id: str = Field(..., description="Media service ID of the stored image")
    width: Optional[int] = Field(None, description="Stored width in pixels")
    height: Optional[int] = Field(None, description="Stored height in pixels")
    format: Optional[str] = Field(None, description="Stored image format")


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = Field(False, description="Always false")
    error: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error details")
