"""Introductory demos: virtualizing the CPU and memory, persistence,
address-space layout and a TLB cost measurement."""

import argparse
import inspect
import os
import sys
import time
from itertools import count as _forever

from osdemo.timing import spin

PAGE_SIZE = 4096
HEAP_BYTES = 100_000_000


def _steps(count):
    return _forever() if count is None else range(count)


def cpu_loop(text: str, count=None, out=None) -> None:
    """Print ``text`` once a second, ``count`` times or forever when None."""
    out = sys.stdout if out is None else out
    for _ in _steps(count):
        out.write(f"{text}\n")
        out.flush()
        spin(1)


def write_file(path, text: str) -> int:
    """Write ``text`` to ``path``, force it to disk and return the bytes written."""
    data = text.encode()
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
    try:
        written = os.write(fd, data)
        if written != len(data):
            raise OSError(f"short write: {written} of {len(data)} bytes")
        os.fsync(fd)
    finally:
        os.close(fd)
    return written


def mem_loop(value: int, count=None, out=None) -> int:
    """Store ``value`` in a fresh object and add one to it each second.

    Runs ``count`` times, or forever when None; returns the final value.
    """
    out = sys.stdout if out is None else out
    pid = os.getpid()
    cell = [value]
    out.write(f"({pid}) addr pointed to by p: {hex(id(cell))}\n")
    out.flush()
    for _ in _steps(count):
        spin(1)
        cell[0] += 1
        out.write(f"({pid}) value of p: {cell[0]}\n")
        out.flush()
    return cell[0]


def print_layout(out=None) -> dict[str, int]:
    """Print where code, a large heap allocation and the current frame live."""
    out = sys.stdout if out is None else out
    heap = bytearray(HEAP_BYTES)
    frame = inspect.currentframe()
    layout = {
        "code": id(print_layout.__code__),
        "heap": id(heap),
        "stack": id(frame),
    }
    del frame, heap
    out.write(f"location of code : {hex(layout['code'])}\n")
    out.write(f"location of heap : {hex(layout['heap'])}\n")
    out.write(f"location of stack: {hex(layout['stack'])}\n")
    return layout


def tlb_measure(pages: int, iterations: int) -> float:
    """Touch one byte per page ``iterations`` times; return microseconds per access."""
    if pages <= 0 or iterations <= 0:
        raise ValueError("pages and iterations must both be positive")
    memory = bytearray(PAGE_SIZE * pages)
    offsets = range(0, PAGE_SIZE * pages, PAGE_SIZE)
    start = time.perf_counter()
    for _ in range(iterations):
        for offset in offsets:
            memory[offset] = 1
    elapsed = time.perf_counter() - start
    return elapsed * 1e6 / pages / iterations


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="intro")
    sub = parser.add_subparsers(dest="demo", required=True)
    cpu = sub.add_parser("cpu")
    cpu.add_argument("string")
    cpu.add_argument("--count", type=int, default=None)
    io = sub.add_parser("io")
    io.add_argument("--path", default="/tmp/file")
    mem = sub.add_parser("mem")
    mem.add_argument("value", type=int)
    mem.add_argument("--count", type=int, default=None)
    sub.add_parser("va")
    tlb = sub.add_parser("tlb")
    tlb.add_argument("pages", type=int)
    tlb.add_argument("iterations", type=int)
    args = parser.parse_args(argv)

    try:
        if args.demo == "cpu":
            cpu_loop(args.string, args.count, sys.stdout)
        elif args.demo == "io":
            write_file(args.path, "hello world\n")
        elif args.demo == "mem":
            mem_loop(args.value, args.count, sys.stdout)
        elif args.demo == "va":
            print_layout(sys.stdout)
        else:
            per_access = tlb_measure(args.pages, args.iterations)
            print(f"Time per access: {per_access:.6f} microseconds")
    except (OSError, ValueError) as exc:
        print(f"intro: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())