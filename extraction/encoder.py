"""
File encoding for inline upload to Gemini.
Accepts raw bytes, a path, a binary file object, or an upload object whose
read() is a coroutine (FastAPI's UploadFile).
"""

import asyncio
import base64
import inspect
import os
from pathlib import Path
from typing import Any

import structlog

from extraction.errors import FileReadError

logger = structlog.get_logger()


async def read_file_bytes(file: Any) -> bytes:
    """Read the whole file into memory. Raises FileReadError on any I/O failure."""
    if isinstance(file, (bytes, bytearray, memoryview)):
        return bytes(file)

    try:
        if isinstance(file, (str, os.PathLike)):
            return await asyncio.to_thread(Path(file).read_bytes)

        if not hasattr(file, "read"):
            raise FileReadError(f"Unsupported file object: {type(file).__name__}")

        data = file.read()
        if inspect.isawaitable(data):
            data = await data
    except (OSError, ValueError) as e:
        logger.error("file_read_error", error=str(e))
        raise FileReadError(f"Could not read file: {e}") from e

    if not isinstance(data, (bytes, bytearray)):
        raise FileReadError("File must be opened in binary mode")

    return bytes(data)


async def file_to_base64(file: Any) -> str:
    """Base64 payload of the file contents, without any data-URL prefix."""
    data = await read_file_bytes(file)
    return base64.b64encode(data).decode("ascii")
