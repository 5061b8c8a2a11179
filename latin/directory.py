"""
Directory operations for Latin.

Listings are taken once, eagerly, in the order the filesystem returns them.
"""

import os
import shutil
from pathlib import Path
from typing import Callable, List, Union

PathLike = Union[str, os.PathLike]


def exists(path: PathLike) -> bool:
    """Return True if `path` names a directory. Never raises."""
    try:
        return Path(path).is_dir()
    except (OSError, ValueError):
        return False


def _scan(path: PathLike, keep: Callable[[os.DirEntry], bool]) -> List[Path]:
    with os.scandir(path) as entries:
        return [Path(entry.path) for entry in entries if keep(entry)]


def children(path: PathLike) -> List[Path]:
    """
    List every direct entry of `path`: files, directories and symlinks.

    Raises:
        FileNotFoundError: If `path` doesn't exist
        NotADirectoryError: If `path` is not a directory
        PermissionError: If `path` can't be read
    """
    return _scan(path, lambda entry: True)


def files(path: PathLike, follow_symlinks: bool = False) -> List[Path]:
    """
    List the regular files directly inside `path`.

    Symlinks are left out unless `follow_symlinks` is True, in which case
    a link to a file counts as a file.
    """
    return _scan(path, lambda entry: entry.is_file(follow_symlinks=follow_symlinks))


def sub_directories(path: PathLike, follow_symlinks: bool = False) -> List[Path]:
    """
    List the directories directly inside `path`.

    Symlinks are left out unless `follow_symlinks` is True.
    """
    return _scan(path, lambda entry: entry.is_dir(follow_symlinks=follow_symlinks))


def remove(path: PathLike) -> None:
    """
    Delete `path` and everything beneath it.

    Stops at the first entry that can't be removed. Whatever was deleted
    before that point stays deleted.

    Raises:
        FileNotFoundError: If `path` doesn't exist
        NotADirectoryError: If `path` is a file
        OSError: If an entry can't be removed
    """
    shutil.rmtree(path)
