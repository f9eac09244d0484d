from __future__ import annotations

import argparse
from pathlib import Path

from locstr import LocatedString, MappingMode, OffsetGroup
from locstr.testing import generate_corpus_files


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="generate_corpus")
    ap.add_argument("--seed", type=int, default=1)
    ap.add_argument("--count", type=int, default=300)
    ap.add_argument("--out", default="tests/fixtures/generated_corpus")
    ap.add_argument(
        "--mode",
        choices=[m.value for m in MappingMode],
        help="Also print region and skip-region counts per file under this mapping mode",
    )
    ap.add_argument("--anchor", type=int, default=0, help="Code point offset of each file's first character")
    args = ap.parse_args(argv)

    out_dir = Path(args.out).resolve() / f"seed_{args.seed}_count_{args.count}"
    out_dir.mkdir(parents=True, exist_ok=True)

    for rel, src in generate_corpus_files(seed=args.seed, count=args.count):
        # Keep CRLF pairs intact on every platform.
        (out_dir / rel).write_text(src, encoding="utf-8", newline="")
        if args.mode is not None:
            s = LocatedString.from_text(src, OffsetGroup.matching(args.anchor), mode=MappingMode(args.mode))
            skips = sum(1 for r in s.regions if r.is_skip_region)
            print(f"{rel}\t{len(s.regions)}\t{skips}\t{s.bounds}")

    print(str(out_dir))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
