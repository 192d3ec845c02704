#!/usr/bin/env python3
# Print the icon alias table, one icon per line
import json
import sys
from pathlib import Path

DEFAULT_ALIASES = Path("src/icons.json")


def list_icons(path: Path) -> int:
    try:
        data = path.read_text(encoding="utf-8")
    except OSError as e:
        print(f"Error reading {path.name}: {e}", file=sys.stderr)
        return 1
    try:
        icons = json.loads(data)
    except ValueError as e:
        print(f"Error parsing {path.name}: {e}", file=sys.stderr)
        return 1
    if not isinstance(icons, dict):
        print(f"Error parsing {path.name}: expected a JSON object", file=sys.stderr)
        return 1

    print("List of icons:")
    for name, aliases in icons.items():
        print(name, aliases)
    return 0


def main():
    path = Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_ALIASES
    sys.exit(list_icons(path))


if __name__ == "__main__":
    main()
