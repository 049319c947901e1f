import hashlib
import os
from typing import Callable, Optional

Fingerprint = Callable[[str], Optional[str]]


def file_fingerprint(path: str) -> Optional[str]:
    """Identify a file version by modification time and size.

    Args:
        path: Path of the file.

    Returns:
        ``"<mtime_ns>-<size>"``, or None when the file does not exist.
    """
    try:
        stat = os.stat(path)
    except FileNotFoundError:
        return None
    return f"{stat.st_mtime_ns}-{stat.st_size}"


def content_fingerprint(path: str) -> Optional[str]:
    """Identify a file version by the SHA-256 digest of its content."""
    try:
        with open(path, "rb") as handle:
            return hashlib.sha256(handle.read()).hexdigest()
    except FileNotFoundError:
        return None
