"""
命令列介面

核心之外的薄包裝：讀取檔案或 stdin、輸出修正結果 (或 unified diff)、
就地寫回 (可選備份)。

    boxfix docs/architecture.md
    boxfix -i --backup .orig README.md
    cat notes.txt | boxfix --diff -v
"""

import argparse
import difflib
import logging
import shutil
import sys
from typing import List, Optional

from boxfix import __version__
from boxfix.config import CorrectionConfig
from boxfix.correction.diagram_corrector import DiagramCorrector
from boxfix.exceptions import ConfigError
from boxfix.utils.logger import get_logger, setup_logger

_logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxfix",
        description="Fix misaligned right-hand borders in ASCII/Unicode box diagrams.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("input", nargs="?", metavar="FILE", help="Input file (reads stdin if omitted).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    g_out = parser.add_argument_group("Output")
    g_out.add_argument("-i", "--in-place", action="store_true", help="Edit FILE in place.")
    g_out.add_argument(
        "--backup",
        metavar="SUFFIX",
        help="With --in-place, copy the original to FILE+SUFFIX first.",
    )
    g_out.add_argument("--diff", action="store_true", help="Print a unified diff instead of the document.")

    g_proc = parser.add_argument_group("Correction")
    g_proc.add_argument("-m", "--max-iters", type=int, default=10, help="Maximum iterations per block.")
    g_proc.add_argument(
        "-s", "--min-score", type=float, default=0.5, help="Minimum score for applying revisions (0.0-1.0)."
    )
    g_proc.add_argument("-t", "--tab-width", type=int, default=4, help="Tab width for expansion.")
    g_proc.add_argument(
        "-a", "--all", action="store_true", help="Process all diagram-like blocks, not just confident ones."
    )
    g_proc.add_argument("-v", "--verbose", action="store_true", help="Log correction progress to stderr.")
    return parser


def _read_input(path: Optional[str]) -> str:
    if path is None:
        # 直接讀取位元組，保留 "\r\n"
        return sys.stdin.buffer.read().decode("utf-8")
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def _render_diff(original: str, corrected: str, name: str) -> str:
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        corrected.splitlines(keepends=True),
        fromfile=f"a/{name}",
        tofile=f"b/{name}",
    )
    return "".join(diff)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.in_place and args.input is None:
        parser.error("--in-place requires an input file")
    if args.backup and not args.in_place:
        parser.error("--backup requires --in-place")

    setup_logger(level=logging.DEBUG if args.verbose else logging.WARNING)

    try:
        config = CorrectionConfig(
            max_iterations=args.max_iters,
            min_score=args.min_score,
            tab_width=args.tab_width,
            include_low_confidence=args.all,
            verbose=args.verbose,
        )
    except ConfigError as e:
        parser.error(str(e))

    try:
        original = _read_input(args.input)
    except (OSError, UnicodeDecodeError) as e:
        _logger.error(f"Failed to read input: {e}")
        return 1

    _logger.debug(f"Processing {original.count(chr(10)) + 1} lines...")
    result = DiagramCorrector(config).correct_text(original)
    corrected = result.text
    stats = result.stats

    if args.diff:
        sys.stdout.write(_render_diff(original, corrected, args.input or "stdin"))
    elif args.in_place:
        try:
            if args.backup:
                shutil.copy2(args.input, args.input + args.backup)
            if corrected != original:
                with open(args.input, "w", encoding="utf-8", newline="") as f:
                    f.write(corrected)
        except OSError as e:
            _logger.error(f"Failed to write {args.input}: {e}")
            return 1
    else:
        sys.stdout.write(corrected)

    _logger.info(
        f"Processed {stats.blocks_found} block(s), modified {stats.blocks_modified}, "
        f"{stats.revisions_applied} revision(s) applied"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
