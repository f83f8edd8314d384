from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import TextIO

from log_structurer.core.config import StructurerConfig, configure_logging, resolve_config, resolve_policy
from log_structurer.core.errors import GrammarError
from log_structurer.core.grammar import default_grammar
from log_structurer.core.models import FieldPolicy
from log_structurer.core.pipeline import RecordStats, iter_records, write_jsonl

LOGGER = logging.getLogger(__name__)


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError("must be an integer") from e
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        description="Turn plain-text log lines into JSON records (one per line)."
    )
    p.add_argument("log_path", nargs="?", default="-", help="Log file (plain or .gz); '-' reads stdin")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument(
        "--strict",
        dest="policy",
        action="store_const",
        const=FieldPolicy.STRICT,
        help="Reject value-less fields and non-numeric repetition counts (default)",
    )
    mode.add_argument(
        "--lenient",
        dest="policy",
        action="store_const",
        const=FieldPolicy.LENIENT,
        help="Keep value-less fields as null and malformed counts as strings",
    )
    p.add_argument("--workers", type=_positive_int, default=None, help="Worker threads (default: env or CPU count)")
    p.add_argument("--encoding", default="utf-8", help="Input text encoding")
    p.add_argument("--stats", action="store_true", help="Log a summary of recognized lines when done")
    p.set_defaults(policy=None)
    return p


async def _process_lines(args: argparse.Namespace, cfg: StructurerConfig, sink: TextIO) -> RecordStats:
    source: str | Path | TextIO
    if args.log_path == "-":
        sys.stdin.reconfigure(encoding=cfg.encoding, errors=cfg.decode_errors)
        source = sys.stdin
    else:
        source = Path(args.log_path)

    stats = RecordStats()
    async for record in iter_records(
        source,
        grammar=default_grammar(),
        policy=cfg.policy,
        max_workers=cfg.max_workers,
        encoding=cfg.encoding,
        decode_errors=cfg.decode_errors,
    ):
        write_jsonl(record, sink)
        stats.add(record)
    return stats


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint: structure a log stream into JSON lines on stdout."""
    configure_logging()
    args = _build_parser().parse_args(argv)

    try:
        default_grammar()
    except GrammarError as e:
        print(f"compiling grammar: {e}", file=sys.stderr)
        raise SystemExit(1)

    try:
        cfg = resolve_config(
            StructurerConfig(
                policy=resolve_policy(args.policy),
                max_workers=args.workers,
                encoding=args.encoding,
            )
        )
        stats = asyncio.run(_process_lines(args, cfg, sys.stdout))
    except FileNotFoundError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2)
    except (OSError, UnicodeDecodeError) as e:
        print(f"processing lines: {e}", file=sys.stderr)
        raise SystemExit(1)
    except (ValueError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        raise SystemExit(2)

    sys.stdout.flush()
    if args.stats:
        LOGGER.info(
            "Done. %d lines: %d known, %d unknown, %d with parse errors",
            stats.total,
            stats.known,
            stats.unknown,
            stats.parse_errors,
        )
    else:
        LOGGER.debug("Done.")


if __name__ == "__main__":
    main()
