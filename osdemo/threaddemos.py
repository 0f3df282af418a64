"""Small thread demos: creating and joining threads, passing arguments and
return values, racing on a shared counter, and throttling with a semaphore."""

import argparse
import sys
import threading
import time
from concurrent.futures import ThreadPoolExecutor

T2_DEFAULT_LOOPS = 10_000_000


def _emit(out, text: str) -> None:
    out.write(text + "\n")


def _run_in_thread(fn, *args):
    """Start ``fn`` in a new thread, join it and return what it returned."""
    with ThreadPoolExecutor(max_workers=1) as pool:
        return pool.submit(fn, *args).result()


def _race(loops: int, names, out) -> int:
    """Let one thread per name add 1 to a shared counter ``loops`` times, unlocked."""
    counter = 0

    def worker(name: str) -> None:
        nonlocal counter
        if out is not None:
            _emit(out, f"{name}: begin [addr of i: {hex(threading.get_ident())}]")
        for _ in range(loops):
            counter = counter + 1
        if out is not None:
            _emit(out, f"{name}: done")

    threads = [threading.Thread(target=worker, args=(name,)) for name in names]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return counter


def count_unsynchronized(loops: int, threads: int = 2) -> int:
    """Race ``threads`` threads on a shared counter; updates may be lost."""
    return _race(loops, [str(i) for i in range(threads)], None)


def count_with_semaphore(loops: int, threads: int = 2) -> int:
    """Increment a shared counter under a binary semaphore; no update is lost."""
    mutex = threading.Semaphore(1)
    counter = 0

    def child() -> None:
        nonlocal counter
        for _ in range(loops):
            with mutex:
                counter += 1

    workers = [threading.Thread(target=child) for _ in range(threads)]
    for t in workers:
        t.start()
    for t in workers:
        t.join()
    return counter


def print_letters(out) -> None:
    """Two threads print "A" and "B"; the order between them is up to the scheduler."""
    _emit(out, "main: begin")
    threads = [threading.Thread(target=_emit, args=(out, letter)) for letter in ("A", "B")]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    _emit(out, "main: end")


def _print_args(a: int, b: int, out) -> None:
    _run_in_thread(lambda: _emit(out, f"{a} {b}"))
    _emit(out, "done")


def pass_args(a: int, b: int, out) -> tuple[int, int]:
    """Hand two ints to a thread and get a pair of ints back from it."""
    def mythread(x: int, y: int) -> tuple[int, int]:
        _emit(out, f"args {x} {y}")
        return 1, 2

    result = _run_in_thread(mythread, a, b)
    _emit(out, f"returned {result[0]} {result[1]}")
    return result


def increment_return(value: int, out) -> int:
    """A thread prints ``value`` and returns it plus one."""
    def mythread(v: int) -> int:
        _emit(out, str(v))
        return v + 1

    result = _run_in_thread(mythread, value)
    _emit(out, f"returned {result}")
    return result


def throttle(num_threads: int, sem_value: int, delay: float, out) -> int:
    """Let at most ``sem_value`` of ``num_threads`` children run at once.

    Returns the largest number of children seen running together.
    """
    if num_threads > 0 and sem_value < 1:
        raise ValueError(f"semaphore value must be at least 1, got {sem_value}")
    sem = threading.Semaphore(max(sem_value, 0))
    stats = threading.Lock()
    active = 0
    peak = 0

    def child(i: int) -> None:
        nonlocal active, peak
        with sem:
            with stats:
                active += 1
                peak = max(peak, active)
            _emit(out, f"child {i}")
            time.sleep(delay)
            with stats:
                active -= 1

    _emit(out, "parent: begin")
    children = [threading.Thread(target=child, args=(i,)) for i in range(num_threads)]
    for t in children:
        t.start()
    for t in children:
        t.join()
    _emit(out, "parent: end")
    return peak


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="threaddemos")
    sub = parser.add_subparsers(dest="demo", required=True)
    sub.add_parser("counter").add_argument("loops", type=int)
    sub.add_parser("race").add_argument("loops", type=int)
    sub.add_parser("letters")
    sub.add_parser("create")
    sub.add_parser("simple-args")
    sub.add_parser("return-args")
    binary = sub.add_parser("binary")
    binary.add_argument("--loops", type=int, default=T2_DEFAULT_LOOPS)
    thr = sub.add_parser("throttle")
    thr.add_argument("num_threads", type=int)
    thr.add_argument("sem_value", type=int)
    thr.add_argument("--delay", type=float, default=1.0)
    args = parser.parse_args(argv)
    out = sys.stdout

    if args.demo == "counter":
        _emit(out, "Initial value : 0")
        _emit(out, f"Final value   : {count_unsynchronized(args.loops, 2)}")
    elif args.demo == "race":
        _emit(out, "main: begin [counter = 0]")
        counter = _race(args.loops, ["A", "B"], out)
        _emit(out, f"main: done\n [counter: {counter}]\n [should: {args.loops * 2}]")
    elif args.demo == "letters":
        print_letters(out)
    elif args.demo == "create":
        _print_args(10, 20, out)
    elif args.demo == "simple-args":
        increment_return(100, out)
    elif args.demo == "return-args":
        pass_args(10, 20, out)
    elif args.demo == "binary":
        result = count_with_semaphore(args.loops, 2)
        _emit(out, f"result: {result} (should be {args.loops * 2})")
    else:
        try:
            throttle(args.num_threads, args.sem_value, args.delay, out)
        except ValueError as exc:
            print(f"throttle: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())