# src/sketchtabs/core/fileset.py
import os
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Union

from sketchtabs.config import (
    BUILD_SKETCH_SUBFOLDER,
    CODE_FOLDER,
    DATA_FOLDER,
    DEFAULT_EXTENSION,
    EXTENSIONS,
    SKETCH_EXTENSIONS,
)
from sketchtabs.core.filters import is_source_name, split_extension
from sketchtabs.core.unit import FileUnit
from sketchtabs.utils.log import Log, StderrLog
from sketchtabs.utils.textio import is_sanitary_name


class SketchError(IOError):
    """Base class for errors raised while handling a sketch."""


class EmptySketchError(SketchError):
    """The sketch folder holds no usable code file."""


def check_sketch_file(path: Union[str, Path]) -> Optional[Path]:
    """
    A sketch's main file must be named after its folder.
    Returns `path` itself when it is, otherwise the folder's own
    <folder>.pde or <folder>.ino if one exists, else None.
    """
    path = Path(path)
    parent = path.parent
    if path.name in (f"{parent.name}.pde", f"{parent.name}.ino"):
        return path
    return _main_file_in(parent)


def _main_file_in(folder: Path) -> Optional[Path]:
    # .pde wins over .ino when both are present
    for ext in ("pde", "ino"):
        candidate = folder / f"{folder.name}.{ext}"
        if candidate.is_file():
            return candidate
    return None


def resolve_primary(path: Union[str, Path]) -> Optional[Path]:
    """Accepts a sketch folder or any file inside one and finds the primary file."""
    path = Path(path)
    if path.is_dir():
        return _main_file_in(path)
    return check_sketch_file(path)


def build_output_dirs(build_path: Union[str, Path]) -> List[Path]:
    """Directories where the build leaves artifacts named after their sources."""
    build_path = Path(build_path)
    return [build_path, build_path / BUILD_SKETCH_SUBFOLDER]


class ProjectFileSet:
    """
    The ordered set of tabs making up one sketch.

    After load() the primary file (if found on disk) sits at index 0 and
    the other tabs follow sorted by filename. Filenames are unique right
    after load(); add_code() does not re-check it.
    """

    def __init__(
        self,
        primary_path: Union[str, Path],
        log: Optional[Log] = None,
        name_validator: Callable[[str], bool] = is_sanitary_name,
    ):
        self.primary_file = Path(primary_path).absolute()
        self.log = log if log is not None else StderrLog()
        self.name_validator = name_validator

        name = split_extension(self.primary_file.name, SKETCH_EXTENSIONS)
        if name is None:
            raise ValueError(f"Not a sketch file: {self.primary_file.name}")
        self.name = name

        self.folder = self.primary_file.parent
        self.code_folder = self.folder / CODE_FOLDER
        self.data_folder = self.folder / DATA_FOLDER

        self._units: List[FileUnit] = []

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[FileUnit]:
        return iter(list(self._units))

    def __repr__(self) -> str:
        return f"ProjectFileSet({self.name!r}, {len(self._units)} tabs)"

    @property
    def units(self) -> List[FileUnit]:
        """Snapshot of the tabs in order. Mutating it doesn't affect the set."""
        return list(self._units)

    @property
    def code_count(self) -> int:
        return len(self._units)

    @property
    def main_file_path(self) -> str:
        return str(self.primary_file)

    @property
    def default_extension(self) -> str:
        return DEFAULT_EXTENSION

    def load(self) -> None:
        """
        Rebuilds the tab list from the sketch folder.

        Raises IOError if the folder can't be listed and EmptySketchError
        if nothing in it qualifies as a code file.
        """
        self.clear_codes()

        try:
            entries = os.listdir(self.folder)
        except OSError as e:
            raise IOError(f"Unable to list files from {self.folder}") from e

        for filename in entries:
            # Also catches the '._' files macOS leaves on FAT drives
            if not is_source_name(filename):
                continue
            file_path = self.folder / filename
            if file_path.is_dir():
                continue

            base = split_extension(filename, EXTENSIONS)
            if self.name_validator(base):
                self.add_code(FileUnit(file_path, log=self.log))
            else:
                self.log.log(f"File name {filename} is invalid: ignored")

        if not self._units:
            raise EmptySketchError("No valid code files found")

        for unit in self._units:
            if unit.path == self.primary_file:
                self.move_to_front(unit)
                break

        self.sort_code()

    def save(self) -> None:
        """
        Saves every dirty tab in order. The first failure propagates;
        tabs already written stay written.
        """
        for unit in list(self._units):
            if unit.dirty:
                unit.save()

    def sort_code(self) -> None:
        """
        Orders tabs by filename (ordinal). The primary stays first when
        it leads the list; otherwise every tab takes part in the sort.
        """
        if len(self._units) < 2:
            return
        if self._units[0].path == self.primary_file:
            first, rest = self._units[0], self._units[1:]
            rest.sort(key=lambda u: u.filename)
            self._units[:] = [first] + rest
        else:
            self._units.sort(key=lambda u: u.filename)

    def add_code(self, unit: FileUnit) -> None:
        self._units.append(unit)

    def move_to_front(self, unit: FileUnit) -> None:
        """Puts unit at index 0. A unit not yet in the set is simply inserted."""
        if unit in self._units:
            self._units.remove(unit)
        self._units.insert(0, unit)

    def replace_code(self, new_unit: FileUnit) -> None:
        """
        Swaps in new_unit for the tab with the same filename, keeping its
        position. Nothing happens when no tab has that filename.
        """
        for i, unit in enumerate(self._units):
            if unit.filename == new_unit.filename:
                self._units[i] = new_unit
                return

    def remove_code(self, which: FileUnit) -> None:
        """Drops the tab that *is* `which` (identity, not filename)."""
        for i, unit in enumerate(self._units):
            if unit is which:
                del self._units[i]
                return
        self.log.log("removeCode: internal error.. could not find code")

    def index_of_code(self, who: FileUnit) -> int:
        for i, unit in enumerate(self._units):
            if unit is who:
                return i
        return -1

    def get_code(self, i: int) -> FileUnit:
        if not 0 <= i < len(self._units):
            raise IndexError(f"Tab index {i} out of range (0..{len(self._units) - 1})")
        return self._units[i]

    def find_code(self, filename: str) -> Optional[FileUnit]:
        for unit in self._units:
            if unit.filename == filename:
                return unit
        return None

    def clear_codes(self) -> None:
        self._units.clear()
