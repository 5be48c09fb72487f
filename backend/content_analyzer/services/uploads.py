"""
Video upload validation.

Nothing is stored: the upload is read into memory and forwarded inline to
the provider, so we enforce the size cap while reading instead of after.

Usage:
    video = await read_video_upload(file, settings.MAX_UPLOAD_BYTES)
"""

from fastapi import UploadFile

from content_analyzer.services.workspace import VideoUpload

INVALID_TYPE_MESSAGE = "Please select a valid video file."


class UnsupportedFileTypeError(Exception):
    """The selected file is not a video."""


class UploadTooLargeError(Exception):
    """The file exceeds the inline upload limit."""


def is_video_type(content_type) -> bool:
    """Any video/* MIME type is accepted; the provider sniffs the container."""
    return bool(content_type) and content_type.startswith("video/")


async def read_video_upload(file: UploadFile, max_bytes: int) -> VideoUpload:
    """Validate the MIME type and read the file in chunks.

    Raises:
        UnsupportedFileTypeError: Not a video/* upload.
        UploadTooLargeError: More than max_bytes of content.
    """
    if not is_video_type(file.content_type):
        raise UnsupportedFileTypeError(INVALID_TYPE_MESSAGE)

    # Read in chunks so an oversized upload is rejected without being
    # loaded into memory in full
    chunk_size = 1024 * 1024  # 1MB chunks
    chunks = []
    total_bytes = 0

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        total_bytes += len(chunk)
        if total_bytes > max_bytes:
            raise UploadTooLargeError(
                f"Video is larger than {max_bytes // (1024 * 1024)}MB."
            )
        chunks.append(chunk)

    return VideoUpload(
        data=b"".join(chunks),
        mime_type=file.content_type,
        filename=file.filename or "",
    )
