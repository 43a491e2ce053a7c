#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/html2all/utils/io_utils.py
"""I/O utilities for persisting rendered output.

Renderers build their artifact completely in memory and hand the finished
text or bytes to :func:`write_content`, so a failing destination never
leaves partially rendered output behind.

"""

from __future__ import annotations

import io
import logging
from io import BytesIO, StringIO
from pathlib import Path
from typing import IO, Union, cast

from html2all.exceptions import OutputWriteError

logger = logging.getLogger(__name__)

OutputTarget = Union[str, Path, IO[bytes], IO[str]]


def _is_binary_stream(output: IO) -> bool:
    """Guess whether a file-like object expects bytes."""
    if isinstance(output, BytesIO):
        return True
    if isinstance(output, StringIO) or isinstance(output, io.TextIOBase):
        return False
    if isinstance(output, (io.BufferedIOBase, io.RawIOBase)):
        return True
    mode = getattr(output, "mode", "")
    return isinstance(mode, str) and "b" in mode


def describe_output(output: OutputTarget) -> str:
    """Return a printable name for an output destination."""
    if isinstance(output, (str, Path)):
        return str(output)
    return getattr(output, "name", None) or type(output).__name__


def write_content(content: Union[str, bytes], output: OutputTarget) -> None:
    """Write finished content to a path or file-like object.

    Parameters
    ----------
    content : str or bytes
        Rendered text (Markdown) or binary data (DOCX, PDF)
    output : str, Path, IO[bytes] or IO[str]
        Destination. Text written to a binary stream is UTF-8 encoded and
        bytes written to a text stream are UTF-8 decoded.

    Raises
    ------
    OutputWriteError
        If the destination cannot be written
    TypeError
        If the output type is not supported

    """
    if isinstance(output, (str, Path)):
        output_path = Path(output)
        try:
            if isinstance(content, str):
                output_path.write_text(content, encoding="utf-8")
            else:
                output_path.write_bytes(content)
        except OSError as e:
            raise OutputWriteError(str(output_path), original_error=e) from e
        logger.debug(f"Wrote {len(content)} {'characters' if isinstance(content, str) else 'bytes'} to {output_path}")
        return

    if not hasattr(output, "write"):
        raise TypeError(f"Unsupported output type: {type(output)}")

    try:
        if _is_binary_stream(output):
            data = content.encode("utf-8") if isinstance(content, str) else content
            cast(IO[bytes], output).write(data)
        else:
            text = content.decode("utf-8") if isinstance(content, bytes) else content
            cast(IO[str], output).write(text)
    except OSError as e:
        raise OutputWriteError(describe_output(output), original_error=e) from e


__all__ = ["OutputTarget", "describe_output", "write_content"]
