"""Line stream processing.

Reads lines from a file or an open text stream and yields one structured
record per line, in input order.
"""

from __future__ import annotations

import asyncio
import gzip
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from functools import partial
from pathlib import Path
from typing import Any, TextIO

import aiofiles
from aiofiles.threadpool import wrap
from pydantic import BaseModel

from .config import resolve_max_workers, resolve_policy
from .grammar import LogGrammar, default_grammar
from .models import FieldPolicy
from .records import structure_line

LOGGER = logging.getLogger(__name__)

Record = dict[str, Any]


class RecordStats(BaseModel):
    """Running counts over emitted records."""

    total: int = 0
    known: int = 0
    unknown: int = 0
    parse_errors: int = 0

    def add(self, record: Record) -> None:
        self.total += 1
        if record.get("known_format"):
            self.known += 1
        else:
            self.unknown += 1
        if "parse_error" in record:
            self.parse_errors += 1


@asynccontextmanager
async def _open_text(path: Path, *, encoding: str, decode_errors: str):
    """Open a log file for async text reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rt", encoding=encoding, errors=decode_errors)
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, encoding=encoding, errors=decode_errors) as f:
            yield f


@asynccontextmanager
async def _open_source(source: str | Path | TextIO, *, encoding: str, decode_errors: str):
    """Open a path, or borrow an already-open text stream without closing it."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise FileNotFoundError(f"Log file not found: {path}")
        async with _open_text(path, encoding=encoding, decode_errors=decode_errors) as f:
            yield f
    else:
        yield wrap(source)


async def _run_pipeline(
    work_iter: AsyncIterator[tuple[int, str]],
    *,
    worker_count: int,
    processor: Callable[[str], Awaitable[Record]],
) -> AsyncIterator[Record]:
    """Process items on `worker_count` workers and yield results in sequence order."""
    if worker_count < 1:
        raise ValueError("worker_count must be >= 1")

    queue_size = max(1, worker_count * 4)
    work_queue: asyncio.Queue[tuple[object, str | None]] = asyncio.Queue(maxsize=queue_size)
    result_queue: asyncio.Queue[tuple[object, Record | None]] = asyncio.Queue(maxsize=queue_size)
    work_sentinel = object()
    done_sentinel = object()
    errors: list[Exception] = []

    async def reader() -> None:
        try:
            async for seq, item in work_iter:
                await work_queue.put((seq, item))
        except Exception as exc:
            errors.append(exc)
        finally:
            for _ in range(worker_count):
                await work_queue.put((work_sentinel, None))

    async def worker() -> None:
        try:
            while True:
                seq, item = await work_queue.get()
                if seq is work_sentinel:
                    break
                record = await processor(item)
                await result_queue.put((seq, record))
        except Exception as exc:
            errors.append(exc)
        finally:
            await result_queue.put((done_sentinel, None))

    reader_task = asyncio.create_task(reader())
    worker_tasks = [asyncio.create_task(worker()) for _ in range(worker_count)]

    pending: dict[int, Record] = {}
    next_seq = 0
    done_workers = 0

    try:
        while True:
            seq, record = await result_queue.get()
            if seq is done_sentinel:
                done_workers += 1
                if done_workers == worker_count:
                    break
                continue

            pending[seq] = record
            while next_seq in pending:
                yield pending.pop(next_seq)
                next_seq += 1

        if errors:
            raise errors[0]
    finally:
        reader_task.cancel()
        for task in worker_tasks:
            task.cancel()
        await asyncio.gather(reader_task, *worker_tasks, return_exceptions=True)


async def iter_records(
    source: str | Path | TextIO,
    *,
    grammar: LogGrammar | None = None,
    policy: FieldPolicy | str | None = None,
    max_workers: int | None = None,
    encoding: str = "utf-8",
    decode_errors: str = "strict",
) -> AsyncIterator[Record]:
    """Yield one structured record per input line, in input order.

    Read failures (I/O, decoding) propagate to the caller.
    """
    grammar = grammar or default_grammar()
    policy = resolve_policy(policy)
    workers = resolve_max_workers(max_workers)
    structure = partial(structure_line, grammar=grammar, policy=policy)

    async with _open_source(source, encoding=encoding, decode_errors=decode_errors) as f:
        if workers == 1:
            async for line in f:
                yield structure(line.rstrip("\r\n"))
            return

        LOGGER.debug("Structuring lines with %d workers (policy=%s)", workers, policy.value)
        loop = asyncio.get_running_loop()

        async def line_work_iter() -> AsyncIterator[tuple[int, str]]:
            async for seq, line in _enumerate_async(f):
                yield seq, line.rstrip("\r\n")

        async def process_line(line: str) -> Record:
            return await loop.run_in_executor(executor, structure, line)

        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            async for record in _run_pipeline(
                line_work_iter(),
                worker_count=workers,
                processor=process_line,
            ):
                yield record
        finally:
            executor.shutdown(wait=True)


async def get_records(source: str | Path | TextIO, **iter_kwargs) -> list[Record]:
    """Collect iter_records into a list."""
    return [record async for record in iter_records(source, **iter_kwargs)]


def structure_lines(
    lines: Iterable[str],
    *,
    grammar: LogGrammar | None = None,
    policy: FieldPolicy | str | None = None,
) -> list[Record]:
    """Structure an in-memory sequence of lines."""
    grammar = grammar or default_grammar()
    policy = resolve_policy(policy)
    return [structure_line(line.rstrip("\r\n"), grammar=grammar, policy=policy) for line in lines]


def dump_record(record: Record) -> str:
    """Serialize a record as one compact JSON line (without the newline)."""
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def write_jsonl(record: Record, sink: TextIO) -> None:
    sink.write(dump_record(record))
    sink.write("\n")


async def _enumerate_async(iterable, start: int = 0):
    """Async enumerate helper for async iterators."""
    index = start
    async for item in iterable:
        yield index, item
        index += 1
