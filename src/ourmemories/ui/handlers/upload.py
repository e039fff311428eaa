"""Upload handlers for the ourmemories application."""

from collections.abc import Callable, MutableMapping
from typing import Any

import structlog

from ...errors import ValidationError
from ...models.photo import DEFAULT_CATEGORY, PhotoDraft
from ...services.media import MAX_UPLOAD_SIZE, get_media_service, validate_upload
from ...services.metadata import get_photo_store

logger = structlog.get_logger(__name__)

ProgressCallback = Callable[[int, int, str], None]


def is_image_file(content_type: str | None) -> bool:
    """Check the declared MIME type of a selected file."""
    return bool(content_type) and content_type.lower().startswith("image/")


def default_title(filename: str) -> str:
    """Title suggested for a freshly selected file: its name without extension."""
    stem = filename.rsplit(".", 1)[0] if "." in filename else filename
    return stem.replace("_", " ").replace("-", " ").strip() or filename


def get_max_upload_size_mb() -> float:
    return MAX_UPLOAD_SIZE / (1024 * 1024)


def validate_uploaded_files(uploaded_files: list) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """
    Validate files selected in the uploader.

    Non-image files and files over the size limit are reported as errors
    instead of being queued.

    Args:
        uploaded_files: Files from st.file_uploader (name, type, getvalue())

    Returns:
        tuple: (valid_files, errors). Valid entries carry filename, content_type,
        data, size and the editable fields pre-filled with defaults.
    """
    valid_files = []
    errors = []

    for uploaded_file in uploaded_files:
        filename = uploaded_file.name
        content_type = uploaded_file.type
        data = uploaded_file.getvalue()

        try:
            validate_upload(data, content_type, filename)
        except ValidationError as e:
            errors.append({"filename": filename, "error": e.message, "code": e.code})
            continue

        valid_files.append(
            {
                "filename": filename,
                "content_type": content_type,
                "data": data,
                "size": len(data),
                "title": default_title(filename),
                "date": "",
                "location": "",
                "comment": "",
                "category": DEFAULT_CATEGORY,
            }
        )

    logger.info("upload_files_validated", valid=len(valid_files), errors=len(errors))
    return valid_files, errors


def process_single_upload(file_info: dict[str, Any]) -> dict[str, Any]:
    """
    Upload one file and save its metadata.

    The image goes to the media service first; the returned URL and id are
    then appended to the photo store together with the entered fields.

    Args:
        file_info: Entry from validate_uploaded_files with the fields edited by the user

    Returns:
        dict: Processing result with success status and details
    """
    filename = file_info["filename"]
    file_data = file_info["data"]

    try:
        logger.info("upload_processing_started", filename=filename, size=len(file_data))

        draft_fields = {
            "title": file_info.get("title"),
            "date": file_info.get("date"),
            "location": file_info.get("location"),
            "comment": file_info.get("comment"),
            "category": file_info.get("category"),
        }

        # Check the title before anything leaves the machine
        if not (draft_fields["title"] or "").strip():
            raise ValidationError("Title is required", code="missing_title", details={"filename": filename})

        upload_result = get_media_service().upload(
            file_data,
            file_info.get("content_type"),
            title=draft_fields["title"],
            category=draft_fields["category"],
            filename=filename,
        )

        draft = PhotoDraft.parse({**draft_fields, "url": upload_result.url, "publicId": upload_result.public_id})
        photo = get_photo_store().add_photo_draft(draft)

        logger.info("upload_processing_completed", filename=filename, photo_id=photo.id)

        return {
            "success": True,
            "filename": filename,
            "photo": photo,
            "message": f"Uploaded {filename}",
        }

    except Exception as e:
        logger.error("upload_processing_failed", filename=filename, error=str(e))
        return {
            "success": False,
            "filename": filename,
            "error": str(e),
            "message": f"Upload failed: {filename}",
        }


def summarize_batch(results: list[dict[str, Any]]) -> dict[str, Any]:
    """Counts and overall outcome for a list of process_single_upload results."""
    succeeded = sum(1 for result in results if result["success"])
    failed = len(results) - succeeded
    if results:
        message = f"Processed {len(results)} files: {succeeded} successful, {failed} failed"
    else:
        message = "No files to process"
    return {
        "success": failed == 0,
        "total_files": len(results),
        "successful_uploads": succeeded,
        "failed_uploads": failed,
        "results": results,
        "message": message,
    }


def process_batch_upload(
    valid_files: list[dict[str, Any]], progress_callback: ProgressCallback | None = None
) -> dict[str, Any]:
    """
    Upload files one at a time, in order.

    A failed file does not stop the batch.

    Args:
        valid_files: Entries from validate_uploaded_files
        progress_callback: Called with (done, total, message) before and after each file

    Returns:
        dict: See summarize_batch
    """
    total = len(valid_files)
    if total:
        logger.info("batch_upload_started", total_files=total)

    results: list[dict[str, Any]] = []
    for done, file_info in enumerate(valid_files):
        if progress_callback:
            progress_callback(done, total, f"Uploading {file_info['filename']} ({done + 1}/{total})")
        results.append(process_single_upload(file_info))
        if progress_callback:
            progress_callback(done + 1, total, results[-1]["message"])

    summary = summarize_batch(results)
    if total:
        logger.info(
            "batch_upload_finished",
            total_files=total,
            successful=summary["successful_uploads"],
            failed=summary["failed_uploads"],
        )
    return summary


def reset_after_batch(state: MutableMapping[str, Any], batch_result: dict[str, Any]) -> None:
    """
    Keep a finished batch's result and drop its queued files.

    Bumping ``uploader_generation`` gives the file uploader a new widget key,
    which empties it, so the same files cannot be uploaded twice.

    Args:
        state: Upload page session state
        batch_result: Result of process_batch_upload
    """
    state["last_upload_result"] = batch_result
    state["valid_files"] = []
    state["validation_errors"] = []
    state["upload_signature"] = None
    state["uploader_generation"] = state.get("uploader_generation", 0) + 1
