# src/sketchtabs/core/filters.py
from pathlib import Path
from typing import Iterable, List, Optional, Union

import pathspec

from sketchtabs.config import EXTENSIONS


def build_source_spec(extensions: Iterable[str] = EXTENSIONS) -> pathspec.GitIgnoreSpec:
    """
    Creates the PathSpec deciding which directory entries are code tabs.
    One include rule per extension, then a trailing exclusion for dotfiles
    (last match wins, so '.hidden.ino' stays out).
    Names are lowercased before matching, so patterns are lowercase too.
    """
    lines = [f"*.{ext.lower()}" for ext in extensions]
    lines.append("!.*")
    return pathspec.GitIgnoreSpec.from_lines(lines)


SOURCE_SPEC = build_source_spec()


def is_source_name(filename: str, spec: pathspec.PathSpec = SOURCE_SPEC) -> bool:
    """Case-insensitive check of a bare filename against the source PathSpec."""
    return spec.match_file(filename.lower())


def split_extension(filename: str, extensions: Iterable[str] = EXTENSIONS) -> Optional[str]:
    """
    Returns the base name with a recognized extension stripped,
    or None if filename carries none of the extensions.
    """
    lowered = filename.lower()
    for ext in extensions:
        suffix = "." + ext.lower()
        if lowered.endswith(suffix):
            return filename[: len(filename) - len(suffix)]
    return None


def normalize_extensions(extensions: Iterable[str]) -> List[str]:
    """Lowercases and drops any leading dot: [".CPP", "h"] -> ["cpp", "h"]."""
    return [e.lower().lstrip(".") for e in extensions]


def has_extension(path: Union[str, Path], extensions: Iterable[str]) -> bool:
    return split_extension(Path(path).name, normalize_extensions(extensions)) is not None
