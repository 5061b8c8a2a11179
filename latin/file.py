"""
File operations for Latin.

Every function opens, uses and releases its own handle. Errors from the
filesystem propagate unchanged as OSError subclasses.
"""

import os
import shutil
from pathlib import Path
from typing import Iterable, Optional, Union

from .lines import LineReader

PathLike = Union[str, os.PathLike]
Content = Union[bytes, bytearray, memoryview, str]

UNIX_LINE_SEP = b"\n"
WINDOWS_LINE_SEP = b"\r\n"

# Resolved once for the running platform; pass line_sep= to override.
LINE_SEP = WINDOWS_LINE_SEP if os.name == "nt" else UNIX_LINE_SEP


def as_bytes(content: Content) -> bytes:
    """
    Convert any supported content value to bytes.

    Text is encoded as UTF-8. Byte-like values are copied as-is.

    Raises:
        TypeError: If content is not text or byte-like
    """
    if isinstance(content, str):
        return content.encode("utf-8")
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content)
    raise TypeError(f"Expected str or bytes-like content, got {type(content).__name__}")


def exists(path: PathLike) -> bool:
    """Return True if `path` names a regular file. Never raises."""
    try:
        return Path(path).is_file()
    except (OSError, ValueError):
        return False


def read(path: PathLike) -> bytes:
    """
    Read the whole file at `path`.

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file can't be opened or read
    """
    with open(path, "rb") as f:
        return f.read()


def read_text_utf8(path: PathLike) -> str:
    """
    Read the file at `path` as strict UTF-8.

    Raises:
        OSError: If the file can't be read
        UnicodeDecodeError: If the contents are not valid UTF-8
    """
    return read(path).decode("utf-8")


def read_text_utf8_lossy(path: PathLike) -> str:
    """Read the file at `path` as UTF-8, replacing invalid sequences with U+FFFD."""
    return read(path).decode("utf-8", errors="replace")


def read_lines(path: PathLike) -> LineReader:
    """
    Open the file at `path` for lazy line-by-line reading.

    Opening happens now, so a missing file raises here. Per-line read or
    decode failures are returned as LineResult values by the reader.

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file can't be opened
    """
    return LineReader(open(path, "rb"))


def write(path: PathLike, content: Content) -> None:
    """
    Write `content` to `path`, creating the file or truncating it first.

    Raises:
        FileNotFoundError: If the parent directory doesn't exist
        OSError: If the file can't be written
    """
    data = as_bytes(content)
    with open(path, "wb") as f:
        f.write(data)


def write_lines(path: PathLike, lines: Iterable[Content], line_sep: Optional[bytes] = None) -> None:
    """
    Write each item of `lines` followed by a line terminator.

    The file is created or truncated as with write(). Every item is
    converted before the file is opened, so a TypeError leaves an
    existing file untouched. The terminator defaults to LINE_SEP.
    """
    sep = LINE_SEP if line_sep is None else as_bytes(line_sep)
    data = [as_bytes(line) for line in lines]
    with open(path, "wb") as f:
        for line in data:
            f.write(line)
            f.write(sep)


def append(path: PathLike, content: Content) -> None:
    """Append `content` to `path`, creating the file if it doesn't exist."""
    data = as_bytes(content)
    with open(path, "ab") as f:
        f.write(data)


def append_line(path: PathLike, content: Content, line_sep: Optional[bytes] = None) -> None:
    """Append `content` and one line terminator to `path`."""
    data = as_bytes(content)
    sep = LINE_SEP if line_sep is None else as_bytes(line_sep)
    with open(path, "ab") as f:
        f.write(data + sep)


def copy(src: PathLike, dst: PathLike) -> None:
    """
    Copy the bytes of `src` into `dst`, creating or overwriting `dst`.

    Only contents are copied, not permissions or timestamps.

    Raises:
        FileNotFoundError: If `src` doesn't exist
        OSError: If `dst` can't be written
    """
    shutil.copyfile(src, dst)


def remove(path: PathLike) -> None:
    """
    Delete the file at `path`.

    Raises:
        FileNotFoundError: If nothing exists at `path`
        OSError: If `path` is a directory or can't be removed
    """
    os.remove(path)


def has_extension(path: PathLike, ext: str) -> bool:
    """
    Return True if the final extension of `path` equals `ext` exactly.

    The comparison is case-sensitive and `ext` carries no leading dot, so
    has_extension("a.tar.gz", "gz") is True. Names without an extension,
    including dotfiles like ".bashrc", always give False.
    """
    try:
        name = Path(path).name
    except (TypeError, ValueError):
        return False

    if name in ("", ".", ".."):
        return False

    stem, dot, suffix = name.rpartition(".")
    if not dot or not stem:
        return False
    return suffix == ext
