"""Small helpers for paths, the working directory and stable hashing."""

from __future__ import annotations

import hashlib
import os
import sys
from pathlib import Path


def get_executable_dir() -> Path:
    """Resolved directory holding the running program."""
    executable = sys.argv[0] if sys.argv and sys.argv[0] else sys.executable
    return Path(executable).resolve().parent


def change_working_directory(path) -> None:
    """Change the working directory, raising OSError with context on failure."""
    try:
        os.chdir(path)
    except OSError as exc:
        raise OSError(f"Failed to change working directory {str(path)!r}: {exc}") from exc


def calculate_hash(value) -> int:
    """A 64-bit hash of a value's representation that is stable across runs."""
    digest = hashlib.blake2b(repr(value).encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "little")