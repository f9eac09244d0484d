from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from .codec import located_string_to_dict
from .errors import LocatedStringError
from .located import LocatedString
from .mapping import MappingMode
from .offsets import OffsetGroup


logger = logging.getLogger(__name__)


def _read_source(path: Path) -> str:
    # newline="" keeps carriage returns, which affect logical offsets.
    with path.open(encoding="utf-8", newline="") as f:
        return f.read()


def _locate(path: Path, args: argparse.Namespace) -> LocatedString:
    mode = MappingMode.MARKUP if args.markup else MappingMode.PLAIN
    anchor = OffsetGroup.matching(0, byte_offset=0 if args.byte_offsets else None)
    located = LocatedString.from_text(_read_source(path), anchor, mode=mode)
    logger.info("%s: %d characters, %d regions", path, len(located), len(located.regions))
    if args.substring is not None:
        start, end = args.substring
        located = located.substring(start, end)
    return located


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="locstr", description="Show source offsets of text files")
    ap.add_argument("files", nargs="+", help="UTF-8 text files")
    ap.add_argument(
        "--markup",
        action="store_true",
        help="Do not advance logical offsets inside <...> tags or at carriage returns",
    )
    ap.add_argument("--byte-offsets", action="store_true", help="Track UTF-8 byte offsets")
    ap.add_argument(
        "--substring",
        nargs=2,
        type=int,
        metavar=("START", "END"),
        help="Restrict to an inclusive code point offset range",
    )
    ap.add_argument("--lookup", type=int, metavar="CP", help="Print the offsets of one code point")
    ap.add_argument("--json", action="store_true", help="Print located strings as JSON")
    ap.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    payload: dict[str, object] = {}
    for name in args.files:
        path = Path(name)
        try:
            located = _locate(path, args)
            group = None if args.lookup is None else located.offset_group_for_code_point_offset(args.lookup)
        except (LocatedStringError, OSError) as e:
            logger.error("%s: %s", path, e)
            return 1

        if args.json:
            entry = located_string_to_dict(located)
            if group is not None:
                entry["lookup"] = {"code_point_offset": group.code_point_offset, "logical_offset": group.logical_offset}
            payload[str(path)] = entry
            continue

        print(f"{path}: {located.bounds}")
        for region in located.regions:
            marker = " skip" if region.is_skip_region else ""
            print(f"  {region}{marker}")
        if group is not None:
            print(f"  lookup {args.lookup}: {group}")

    if args.json:
        print(json.dumps(payload, indent=2, sort_keys=True))
    return 0
