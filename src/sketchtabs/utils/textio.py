# src/sketchtabs/utils/textio.py
import re
from pathlib import Path
from typing import Union

from sketchtabs.config import MAX_NAME_LENGTH

PathLike = Union[str, Path]

_SANITARY_NAME = re.compile(r"[A-Za-z0-9][A-Za-z0-9_.\-]*")


def load_file(path: PathLike) -> str:
    """
    Reads a text file as UTF-8.
    Undecodable bytes become U+FFFD instead of failing the read,
    line endings are kept as they are on disk.
    """
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as f:
        return f.read()


def save_file(text: str, path: PathLike) -> None:
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(text)


def count_lines(text: str) -> int:
    """Number of line breaks in text."""
    return text.count("\n")


def is_sanitary_name(base: str) -> bool:
    """True if base is acceptable as a tab name (extension already stripped)."""
    if not base or len(base) > MAX_NAME_LENGTH:
        return False
    return _SANITARY_NAME.fullmatch(base) is not None
