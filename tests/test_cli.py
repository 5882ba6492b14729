# tests/test_cli.py
import os
import sys
import pytest
from unittest.mock import patch

from sketchtabs.cli import main, validate_new_name
from sketchtabs.core.fileset import ProjectFileSet

# --- Fixtures ---

@pytest.fixture
def blink(make_sketch):
    return make_sketch("Blink", {
        "Blink.ino": "void setup() {}\nvoid loop() {}\n",
        "pins.h": "#define LED 13\n",
        "util.cpp": "int twice(int x) { return 2 * x; }\n",
    })

@pytest.fixture
def build(tmp_path):
    build = tmp_path / "build"
    (build / "sketch").mkdir(parents=True)
    (build / "util.cpp.o").write_bytes(b"\0")
    (build / "sketch" / "util.cpp.d").write_text("deps", encoding="utf-8")
    (build / "Blink.ino.elf").write_bytes(b"\0")
    return build

def run_cli(*args):
    with patch.object(sys, "argv", ["sketchtabs", *map(str, args)]):
        main()

# --- Test 1: Listing ---

def test_list_tabs(blink, capsys):
    run_cli(blink)

    out = capsys.readouterr().out
    assert "Main:   Blink.ino" in out
    lines = [l for l in out.splitlines() if l.endswith((".ino", ".h", ".cpp"))]
    assert [l.split("|")[-1].strip() for l in lines if "|" in l] == ["Blink.ino", "pins.h", "util.cpp"]
    assert "Total tabs:  3" in out
    assert "Total lines: 4" in out

def test_list_from_primary_file(blink, capsys):
    run_cli(blink / "Blink.ino")
    assert "Total tabs:  3" in capsys.readouterr().out

def test_no_sketch_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run_cli(tmp_path)
    assert excinfo.value.code == 1
    assert "No sketch found" in capsys.readouterr().err

# --- Test 2: Rename ---

def test_rename_tab(blink, capsys):
    run_cli(blink, "--rename", "util.cpp", "Aux.cpp")

    out = capsys.readouterr().out
    assert "Renamed: util.cpp -> Aux.cpp" in out
    assert (blink / "Aux.cpp").exists()
    assert not (blink / "util.cpp").exists()
    # Re-sorted: 'Aux.cpp' now comes before 'pins.h'
    assert out.index("| Aux.cpp") < out.index("| pins.h")

def test_rename_to_existing_name_fails(blink, capsys):
    with pytest.raises(SystemExit):
        run_cli(blink, "-r", "util.cpp", "pins.h")

    assert "already exists" in capsys.readouterr().err
    assert (blink / "util.cpp").exists()

def test_validate_new_name(blink):
    fileset = ProjectFileSet(blink / "Blink.ino")
    fileset.load()

    assert validate_new_name(fileset, "new.hpp") is None
    assert "must end with" in validate_new_name(fileset, "new.txt")
    assert "not a valid" in validate_new_name(fileset, "bad name.c")
    assert "already exists" in validate_new_name(fileset, "pins.h")

# --- Test 3: Delete ---

def test_delete_tab_with_artifacts(blink, build, capsys):
    run_cli(blink, "--delete", "util.cpp", "--build-path", build, "-y")

    out = capsys.readouterr().out
    assert "Deleted: util.cpp" in out
    assert "Total tabs:  2" in out
    assert not (blink / "util.cpp").exists()
    assert not (build / "util.cpp.o").exists()
    assert not (build / "sketch" / "util.cpp.d").exists()
    assert (build / "Blink.ino.elf").exists()

def test_delete_asks_for_confirmation(blink, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", lambda _: "n")

    run_cli(blink, "-d", "pins.h")

    assert "Skipped." in capsys.readouterr().out
    assert (blink / "pins.h").exists()

def test_delete_primary_refused(blink, capsys):
    with pytest.raises(SystemExit) as excinfo:
        run_cli(blink, "-d", "Blink.ino", "-y")

    assert excinfo.value.code == 1
    assert "can't be deleted" in capsys.readouterr().err
    assert (blink / "Blink.ino").exists()

def test_empty_sketch_reports_error(make_sketch, capsys):
    folder = make_sketch("Empty", {"notes.txt": "", ".Empty.ino": ""})

    with pytest.raises(SystemExit) as excinfo:
        run_cli(folder / "Empty.ino")

    assert excinfo.value.code == 1
    assert "No valid code files found" in capsys.readouterr().err

def test_ctrl_c_at_confirmation_cancels(blink, monkeypatch, capsys):
    def interrupt(_):
        raise KeyboardInterrupt

    monkeypatch.setattr("builtins.input", interrupt)

    with pytest.raises(SystemExit) as excinfo:
        run_cli(blink, "-d", "pins.h")

    assert excinfo.value.code == 1
    assert "Cancelled." in capsys.readouterr().out
    assert (blink / "pins.h").exists()

def test_list_flags_read_only_tabs(blink, monkeypatch, capsys):
    monkeypatch.setattr(os, "access", lambda path, mode: False)

    run_cli(blink)

    rows = [l for l in capsys.readouterr().out.splitlines() if l.endswith("| pins.h")]
    assert len(rows) == 1
    assert rows[0].split("|")[2].strip() == "RO"
