# src/sketchtabs/cli.py
import sys
import argparse
import os
from pathlib import Path
from typing import List, Optional

# Module imports
from sketchtabs.config import EXTENSIONS
from sketchtabs.core.filters import split_extension
from sketchtabs.core.fileset import ProjectFileSet, SketchError, build_output_dirs, resolve_primary
from sketchtabs.models import TabInfo
from sketchtabs.utils.textio import is_sanitary_name

def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Inspect and manage the tabs (source files) of an Arduino-style sketch."
    )
    parser.add_argument("sketch", type=str, nargs="?", default=os.getcwd(), help="Sketch folder or its main .ino/.pde file")
    parser.add_argument(
        "-b", "--build-path",
        type=str,
        default=None,
        help="Build folder whose artifacts are removed along with a deleted tab",
    )
    parser.add_argument("-r", "--rename", nargs=2, metavar=("OLD", "NEW"), default=None, help="Rename a tab")
    parser.add_argument("-d", "--delete", metavar="TAB", default=None, help="Delete a tab and its build artifacts")
    parser.add_argument("-y", "--yes", action="store_true", help="Skip confirmation")
    return parser

def print_tabs(fileset: ProjectFileSet) -> None:
    tabs: List[TabInfo] = [TabInfo.from_unit(i, unit) for i, unit in enumerate(fileset)]

    print(f"\n{'Index':<5} | {'Lines':<7} | {'Flags':<5} | {'File'}")
    print("-" * 60)
    for tab in tabs:
        print(f"{tab.index:<5} | {tab.line_count:<7} | {tab.flags:<5} | {tab.filename}")
    print("-" * 60)
    print(f"Total tabs:  {len(tabs)}")
    print(f"Total lines: {sum(t.line_count for t in tabs)}")

def validate_new_name(fileset: ProjectFileSet, new_name: str) -> Optional[str]:
    """Returns an error message, or None if new_name is usable for a tab."""
    base = split_extension(new_name, EXTENSIONS)
    if base is None:
        return f"'{new_name}' must end with one of: {', '.join('.' + e for e in EXTENSIONS)}"
    if not is_sanitary_name(base):
        return f"'{new_name}' is not a valid tab name"
    if fileset.find_code(new_name) is not None:
        return f"A tab named '{new_name}' already exists"
    return None

def rename_tab(fileset: ProjectFileSet, old_name: str, new_name: str) -> bool:
    unit = fileset.find_code(old_name)
    if unit is None:
        print(f"Error: No tab named '{old_name}'", file=sys.stderr)
        return False
    if unit.path == fileset.primary_file:
        print("Error: Renaming the main sketch file is not supported", file=sys.stderr)
        return False

    problem = validate_new_name(fileset, new_name)
    if problem:
        print(f"Error: {problem}", file=sys.stderr)
        return False

    if not unit.rename(fileset.folder / new_name):
        print(f"Error: Could not rename '{old_name}' to '{new_name}'", file=sys.stderr)
        return False

    fileset.sort_code()
    print(f"Renamed: {old_name} -> {new_name}")
    return True

def delete_tab(fileset: ProjectFileSet, name: str, build_path: Optional[Path], assume_yes: bool) -> bool:
    unit = fileset.find_code(name)
    if unit is None:
        print(f"Error: No tab named '{name}'", file=sys.stderr)
        return False
    if unit.path == fileset.primary_file:
        print("Error: The main sketch file can't be deleted", file=sys.stderr)
        return False

    if not assume_yes:
        choice = input(f"> Delete '{name}'? (y/N): ").strip().lower()
        if choice != "y":
            print("Skipped.")
            return True

    output_dirs = build_output_dirs(build_path) if build_path else []
    if not unit.delete(output_dirs):
        print(f"Error: Could not delete '{name}' (or some of its build files)", file=sys.stderr)
        # The source may be gone even though the delete failed
        if not unit.exists():
            fileset.remove_code(unit)
        return False

    fileset.remove_code(unit)
    print(f"Deleted: {name}")
    return True

def main():
    try:
        # 1. Setup
        parser = create_arg_parser()
        args = parser.parse_args()

        primary = resolve_primary(Path(args.sketch).resolve())
        if primary is None:
            print(f"Error: No sketch found at '{args.sketch}'", file=sys.stderr)
            sys.exit(1)

        build_path = Path(args.build_path).resolve() if args.build_path else None

        print(f"--- sketchtabs ---")
        print(f"Sketch: {primary.parent}")
        print(f"Main:   {primary.name}")

        # 2. Load
        fileset = ProjectFileSet(primary)
        fileset.load()

        # 3. Actions
        ok = True
        if args.rename:
            ok = rename_tab(fileset, args.rename[0], args.rename[1]) and ok
        if args.delete:
            ok = delete_tab(fileset, args.delete, build_path, args.yes) and ok

        # 4. Report
        print_tabs(fileset)

        if not ok:
            sys.exit(1)

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)

    except (SketchError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == "__main__":
    main()
