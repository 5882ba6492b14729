# src/sketchtabs/models.py
from dataclasses import dataclass
from pathlib import Path

from sketchtabs.core.unit import FileUnit

@dataclass(frozen=True)
class TabInfo:
    """Immutable snapshot of one tab, for reporting."""
    index: int
    path: Path
    filename: str
    line_count: int
    dirty: bool
    read_only: bool

    @classmethod
    def from_unit(cls, index: int, unit: FileUnit) -> "TabInfo":
        return cls(
            index=index,
            path=unit.path,
            filename=unit.filename,
            line_count=unit.line_count(),
            dirty=unit.dirty,
            read_only=unit.is_read_only(),
        )

    @property
    def flags(self) -> str:
        marks = []
        if self.dirty:
            marks.append("*")
        if self.read_only:
            marks.append("RO")
        return " ".join(marks)
