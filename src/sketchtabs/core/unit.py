# src/sketchtabs/core/unit.py
import os
from pathlib import Path
from typing import Generic, Iterable, Optional, TypeVar, Union

from sketchtabs.core.filters import has_extension
from sketchtabs.utils.log import Log, StderrLog
from sketchtabs.utils.textio import count_lines, load_file, save_file

M = TypeVar("M")

REPLACEMENT_CHAR = "\ufffd"


class FileUnit(Generic[M]):
    """
    One tab of a sketch: the text held in memory, the file backing it
    and whether the two have diverged since the last load or save.

    `metadata` is a free slot for the caller (an editor document, a
    cursor position...). It is stored and handed back, never inspected.
    """

    def __init__(self, path: Union[str, Path], metadata: Optional[M] = None, log: Optional[Log] = None):
        self._path = Path(path).absolute()
        self._metadata = metadata
        self._log = log if log is not None else StderrLog()
        self._content = ""
        self._dirty = False

        try:
            self.load()
        except OSError:
            # The tab still opens, just empty
            self._log.log(f"Error while loading code {self.filename}")

    def __repr__(self) -> str:
        flag = "*" if self._dirty else ""
        return f"FileUnit({self.filename}{flag})"

    # --- Identity ---

    @property
    def path(self) -> Path:
        return self._path

    @property
    def filename(self) -> str:
        return self._path.name

    @property
    def pretty_name(self) -> str:
        """Filename without its last extension, e.g. 'Blink' for 'Blink.ino'."""
        name = self.filename
        dot = name.rfind(".")
        return name[:dot] if dot > 0 else name

    @property
    def display_name(self) -> str:
        """Tab label: .ino tabs drop their extension, everything else keeps it."""
        if self.filename.endswith(".ino"):
            return self.pretty_name
        return self.filename

    def has_extension(self, *extensions: str) -> bool:
        return has_extension(self._path, extensions)

    # --- Content ---

    @property
    def content(self) -> str:
        return self._content

    @content.setter
    def content(self, text: str) -> None:
        # No diffing: any assignment counts as an edit
        self._content = text
        self._dirty = True

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def metadata(self) -> Optional[M]:
        return self._metadata

    @metadata.setter
    def metadata(self, value: Optional[M]) -> None:
        self._metadata = value

    def line_count(self) -> int:
        return count_lines(self._content)

    # --- Disk state ---

    def exists(self) -> bool:
        return self._path.exists()

    def is_read_only(self) -> bool:
        return not os.access(self._path, os.W_OK)

    def load(self) -> None:
        """
        Replaces the in-memory text with what is on disk and clears the dirty flag.
        Raises OSError if the file can't be read.
        """
        text = load_file(self._path)

        if REPLACEMENT_CHAR in text:
            self._log.log(
                f'"{self.filename}" contains unrecognized characters. '
                "If this code was created with an older version of Arduino, "
                "you may need to use Tools -> Fix Encoding & Reload to update "
                "the sketch to use UTF-8 encoding. If not, you may need to "
                "delete the bad characters to get rid of this warning."
            )

        self._content = text
        self._dirty = False

    def save(self) -> None:
        """Writes the text back to its file whether or not it is dirty."""
        save_file(self._content, self._path)
        self._dirty = False

    def save_as(self, new_path: Union[str, Path]) -> None:
        """
        Writes the text to another location. This unit keeps its own path
        and dirty flag; callers open a fresh unit on new_path.
        """
        save_file(self._content, Path(new_path))

    def rename(self, new_path: Union[str, Path]) -> bool:
        """Moves the backing file. The unit's path only changes on success."""
        target = Path(new_path).absolute()
        try:
            self._path.rename(target)
        except OSError:
            return False
        self._path = target
        return True

    def delete(self, build_output_dirs: Iterable[Union[str, Path]]) -> bool:
        """
        Removes the backing file, then every artifact named after it
        ('Blink.ino' -> 'Blink.ino.cpp', 'Blink.ino.elf', ...) in the
        given output directories. Directories that don't exist are skipped.

        False means the source could not be deleted, or it was deleted but
        some artifact could not be.
        """
        prefix = self.filename
        try:
            self._path.unlink()
        except OSError:
            return False

        for folder in (Path(d) for d in build_output_dirs):
            if not folder.exists():
                continue
            if not self._delete_compiled_files(folder, prefix):
                return False
        return True

    @staticmethod
    def _delete_compiled_files(folder: Path, prefix: str) -> bool:
        try:
            compiled = [p for p in folder.iterdir() if p.name.startswith(prefix) and not p.is_dir()]
        except OSError:
            return False

        for artifact in compiled:
            try:
                artifact.unlink()
            except OSError:
                return False
        return True
