"""
geoclipper — command-line entry point.

Usage:
    python -m geoclipper intersection subject.json clip.json --factor 1000
    python -m geoclipper difference paths.json clip.json
    python -m geoclipper offset subject.json --delta 5 --join miter:5 --end closed-polygon

SUBJECT and CLIP are GeoJSON-style geometry files (Polygon, MultiPolygon,
LineString or MultiLineString).  The result is printed as JSON.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from geoclipper.ops import api
from geoclipper.serialization import (
    geometry_to_dict, parse_end_type, parse_geometry, parse_join_type,
)


BOOLEAN_COMMANDS = ("difference", "intersection", "union", "xor")

USAGE = (
    "Usage: python -m geoclipper {difference|intersection|union|xor} SUBJECT CLIP [--factor F]\n"
    "       python -m geoclipper offset SUBJECT --delta D [--join JOIN] [--end END] [--factor F]\n"
    "       add --verbose for debug logging"
)


def _load(path: str):
    return parse_geometry(json.loads(Path(path).read_text(encoding="utf-8")))


def _fail(message: str) -> int:
    print(message, file=sys.stderr)
    print(USAGE, file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    cmd = args[0] if args else ""

    options: dict[str, str] = {}
    positional: list[str] = []
    verbose = False
    i = 1
    while i < len(args):
        a = args[i]
        if a == "--verbose":
            verbose = True
        elif a in ("--factor", "--delta", "--join", "--end") and i + 1 < len(args):
            options[a[2:]] = args[i + 1]
            i += 1
        elif a.startswith("--"):
            return _fail(f"Unknown option: {a}")
        else:
            positional.append(a)
        i += 1

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    factor = float(options["factor"]) if "factor" in options else None

    if cmd in BOOLEAN_COMMANDS:
        if len(positional) != 2:
            return _fail(f"{cmd} needs SUBJECT and CLIP")
        subject, clip = (_load(p) for p in positional)
        operation = getattr(api.clipper(subject), cmd, None)
        if operation is None:
            return _fail(f"{cmd} is not defined for {subject.geom_type} subjects")
        result = operation(clip, factor)
    elif cmd == "offset":
        if len(positional) != 1 or "delta" not in options:
            return _fail("offset needs SUBJECT and --delta")
        subject = _load(positional[0])
        join_type = parse_join_type(options.get("join", "square"))
        end_type = parse_end_type(options.get("end", "closed-polygon"))
        result = api.offset(subject, float(options["delta"]), join_type, end_type, factor)
    else:
        return _fail(f"Unknown command: {cmd}")

    print(json.dumps(geometry_to_dict(result)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
