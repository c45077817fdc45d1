"""Object naming for stored images."""

import re
import uuid
from datetime import datetime, timezone
from typing import Optional

from images_api.validation import split_file_name

MAX_BASE_NAME_LENGTH = 100
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"

# Control characters plus the characters Windows refuses in file names.
_ILLEGAL_CHARACTERS = re.compile(r'[\x00-\x1f<>:"/\\|?*]')


def clean_base_name(stem: str) -> str:
    """Replace illegal characters with hyphens and cap the length."""
    return _ILLEGAL_CHARACTERS.sub("-", stem)[:MAX_BASE_NAME_LENGTH]


def generate_object_name(
    original_file_name: str,
    force_unique: bool = False,
    now: Optional[datetime] = None,
) -> str:
    """
    Derive the name an upload is stored under.

    The result is `<base>_<yyyyMMddHHmmss><ext>`, deterministic for a given
    name and second. With `force_unique` a random 32 character hex token is
    added after the timestamp: `<base>_<yyyyMMddHHmmss>_<token><ext>`.

    :param original_file_name: The name the client gave the file.
    :param force_unique: Add a random token, used after a name collision.
    :param now: Generation time, defaults to the current UTC time.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)

    stem, extension = split_file_name(original_file_name)
    name = f"{clean_base_name(stem)}_{now.strftime(TIMESTAMP_FORMAT)}"
    if force_unique:
        name = f"{name}_{uuid.uuid4().hex}"
    return f"{name}{extension}"
