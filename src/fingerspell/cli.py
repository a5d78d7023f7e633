"""
Fingerspell command line.

Replays recorded detector output through the gesture pipeline.
"""
import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

from .config import build_debouncer, build_pipeline, load_config

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Fingerspell - hand landmark to letter classification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Replay format: one JSON list of hands per line, each hand a list\n"
            "of 21 [x, y, z] points. An empty list means no hand was detected."
        ),
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.yaml)",
    )

    parser.add_argument(
        "--table",
        action="store_true",
        help="Print the active gesture rule table and exit",
    )

    parser.add_argument(
        "--replay",
        metavar="PATH",
        default=None,
        help="Classify recorded landmark frames (JSON lines, '-' for stdin)",
    )

    parser.add_argument(
        "--smooth",
        action="store_true",
        help="Enable symbol debouncing (overrides config)",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    return parser.parse_args(argv)


def read_replay(stream: TextIO) -> Iterator[List]:
    """Yield the hand list of each non-blank line. Lines that are not JSON yield []."""
    for lineno, line in enumerate(stream, 1):
        line = line.strip()
        if not line:
            continue
        try:
            hands = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning(f"Line {lineno}: not valid JSON ({e})")
            yield []
            continue
        if not isinstance(hands, list):
            logger.warning(f"Line {lineno}: expected a list of hands")
            yield []
            continue
        yield hands


def print_table(pipeline, out: Optional[TextIO] = None) -> None:
    out = out if out is not None else sys.stdout
    table = pipeline.classifier.table
    print("Signature  Symbol", file=out)
    print("(T I M R P)", file=out)
    for signature in sorted(table, key=lambda s: s.key):
        print(f"{signature.key}      {table[signature]}", file=out)
    print(f"(other)    {pipeline.classifier.sentinel}", file=out)


def replay(pipeline, stream: TextIO, debouncer=None, out: Optional[TextIO] = None) -> int:
    """Classify every frame in stream, printing one symbol per line. Returns frame count."""
    out = out if out is not None else sys.stdout
    count = 0
    for hands in read_replay(stream):
        result = pipeline.process_hands(hands)
        symbol = result.symbol
        if debouncer is not None:
            symbol = debouncer.update(symbol)
        signature = result.signature.key if result.signature is not None else "-----"
        print(f"{count:5d} {signature} {symbol}", file=out)
        count += 1
    return count


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(args.config)
        if args.smooth:
            config.smoothing.enabled = True
        pipeline = build_pipeline(config)
        debouncer = build_debouncer(config)
    except ValueError as e:
        print(f"ERROR: invalid configuration: {e}", file=sys.stderr)
        return 2

    if args.table:
        print_table(pipeline)
        return 0

    if args.replay is None:
        print("Nothing to do: pass --table or --replay PATH", file=sys.stderr)
        return 1

    print("Fingerspell replay", file=sys.stderr)
    print(f"  Rules: {len(pipeline.classifier.table)}", file=sys.stderr)
    print(f"  Smoothing: {debouncer is not None}", file=sys.stderr)

    if args.replay == "-":
        count = replay(pipeline, sys.stdin, debouncer)
    else:
        path = Path(args.replay)
        if not path.exists():
            print(f"ERROR: replay file not found: {path}", file=sys.stderr)
            return 1
        with open(path, 'r') as f:
            count = replay(pipeline, f, debouncer)

    logger.info(f"Classified {count} frames")
    return 0


if __name__ == "__main__":
    sys.exit(main())
