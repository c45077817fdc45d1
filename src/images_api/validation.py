"""Checks an upload must pass before it is handed to storage."""

from typing import Optional

from images_api.errors import NO_FILE_MESSAGE, ImageValidationError

MAX_FILE_SIZE_BYTES = 2 * 1024 * 1024  # 2MB

ALLOWED_CONTENT_TYPES = ("image/jpeg", "image/png", "image/gif", "image/jpg")
# `image/jpg` is accepted as an alias but not advertised.
ADVERTISED_CONTENT_TYPES = ["image/jpeg", "image/png", "image/gif"]
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif")


def split_file_name(file_name: str) -> tuple:
    """
    Split a client-supplied file name into `(stem, extension)`.

    Directory components are dropped first; browsers on Windows may send
    either separator. The extension is everything from the last dot, so
    `.png` is all extension and `photo.` has none.
    """
    base_name = file_name.replace("\\", "/").rsplit("/", 1)[-1]
    stem, dot, extension = base_name.rpartition(".")
    if not dot or not extension:
        return base_name, ""
    return stem, dot + extension


def validate_image_upload(file_name: Optional[str], content_type: Optional[str], size: int) -> None:
    """
    Validate an upload, short-circuiting on the first failure.

    :param file_name: The name the client gave the file.
    :param content_type: The declared MIME type of the file.
    :param size: Length of the file in bytes.
    :raises ImageValidationError: with a message fit to show the client.
    """
    if not file_name or size <= 0:
        raise ImageValidationError(NO_FILE_MESSAGE)

    if size > MAX_FILE_SIZE_BYTES:
        raise ImageValidationError(
            f"File size exceeds the maximum limit of {MAX_FILE_SIZE_BYTES // (1024 * 1024)}MB."
        )

    if (content_type or "").lower() not in ALLOWED_CONTENT_TYPES:
        raise ImageValidationError("Only JPG, PNG, and GIF images are allowed.")

    _, extension = split_file_name(file_name)
    if extension.lower() not in ALLOWED_EXTENSIONS:
        raise ImageValidationError(
            "Invalid file extension. Only .jpg, .jpeg, .png, and .gif are allowed."
        )
