# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Works without 'pip install -e .' as well
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sketchtabs.utils.log import MemoryLog


@pytest.fixture
def log():
    return MemoryLog()


@pytest.fixture
def make_sketch(tmp_path):
    """
    Builds a sketch folder: make_sketch("Blink", {"Blink.ino": "...", "util.h": "..."}).
    Returns the folder path.
    """
    def _make(name, files):
        folder = tmp_path / name
        folder.mkdir()
        for filename, content in files.items():
            (folder / filename).write_text(content, encoding="utf-8")
        return folder
    return _make
