"""Classic concurrency bugs: an atomicity violation, a lock-order deadlock and
an ordering violation, each with its fix where one exists."""

import argparse
import contextlib
import sys
import threading
import time
from dataclasses import dataclass
from types import SimpleNamespace
from typing import Optional

PR_STATE_INIT = 0
_T2_INDENT = " " * 17
_DEADLOCK_T2_INDENT = " " * 27


class ThreadBugError(RuntimeError):
    """A thread used shared state that another thread had not set up or had torn down."""


@dataclass
class _Proc:
    pid: int


@dataclass
class _ThreadInfo:
    proc_info: Optional[_Proc]


@dataclass
class _PRThread:
    thread: threading.Thread
    state: int = PR_STATE_INIT


def _emit(out, text: str) -> None:
    out.write(text + "\n")
    out.flush()


def run_atomicity(fixed: bool = False, out=None, check_delay: float = 2.0,
                  clear_delay: float = 1.0) -> Optional[int]:
    """t1 checks then uses a shared pointer while t2 clears it.

    Returns the pid t1 used, or None if t1 found the pointer already cleared.
    Raises ThreadBugError if t1 used the pointer after t2 cleared it.
    """
    out = sys.stdout if out is None else out
    info = _ThreadInfo(_Proc(pid=100))
    guard = threading.Lock() if fixed else contextlib.nullcontext()
    used: list[int] = []
    failures: list[Exception] = []

    def thread1() -> None:
        _emit(out, "t1: before check")
        with guard:
            if info.proc_info is not None:
                _emit(out, "t1: after check")
                time.sleep(check_delay)
                _emit(out, "t1: use!")
                try:
                    pid = info.proc_info.pid
                except AttributeError as exc:
                    failures.append(exc)
                    return
                _emit(out, str(pid))
                used.append(pid)

    def thread2() -> None:
        _emit(out, f"{_T2_INDENT}t2: begin")
        time.sleep(clear_delay)
        with guard:
            _emit(out, f"{_T2_INDENT}t2: set to NULL")
            info.proc_info = None

    _emit(out, "main: begin")
    threads = [threading.Thread(target=thread1), threading.Thread(target=thread2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    if failures:
        raise ThreadBugError("t1 used proc_info after t2 cleared it") from failures[0]
    _emit(out, "main: end")
    return used[0] if used else None


def run_deadlock(timeout: Optional[float] = None, out=None) -> bool:
    """Two threads take two locks in opposite orders.

    With ``timeout`` set, a thread that cannot get a lock in time gives up and
    the call returns True; None waits forever, as a real deadlock would.
    """
    out = sys.stdout if out is None else out
    wait = -1 if timeout is None else timeout
    l1, l2 = threading.Lock(), threading.Lock()
    gave_up: list[str] = []

    def worker(name: str, indent: str, order) -> None:
        _emit(out, f"{indent}{name}: begin")
        held = []
        for lock_name, lock in order:
            _emit(out, f"{indent}{name}: try to acquire {lock_name}...")
            if not lock.acquire(timeout=wait):
                _emit(out, f"{indent}{name}: gave up on {lock_name}")
                gave_up.append(name)
                for other in held:
                    other.release()
                return
            held.append(lock)
            _emit(out, f"{indent}{name}: {lock_name} acquired")
        l1.release()
        l2.release()

    threads = [
        threading.Thread(target=worker, args=("t1", "", [("L1", l1), ("L2", l2)])),
        threading.Thread(target=worker,
                         args=("t2", _DEADLOCK_T2_INDENT, [("L2", l2), ("L1", l1)])),
    ]
    _emit(out, "main: begin")
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    _emit(out, "main: end")
    return bool(gave_up)


def _pr_create_thread(start_routine, delay: float) -> _PRThread:
    thread = threading.Thread(target=start_routine)
    created = _PRThread(thread)
    thread.start()
    time.sleep(delay)
    return created


def run_ordering(fixed: bool = False, out=None, create_delay: float = 1.0) -> int:
    """A new thread reads the handle its creator has not stored yet.

    Returns the state the thread read. Raises ThreadBugError when it read the
    handle before it was stored; the fixed version waits for a signal first.
    """
    out = sys.stdout if out is None else out
    shared = SimpleNamespace(m_thread=None, initialized=False)
    cond = threading.Condition()
    states: list[int] = []
    failures: list[Exception] = []

    def m_main() -> None:
        _emit(out, "mMain: begin")
        if fixed:
            with cond:
                cond.wait_for(lambda: shared.initialized)
        try:
            state = shared.m_thread.state
        except AttributeError as exc:
            failures.append(exc)
            return
        _emit(out, f"mMain: state is {state}")
        states.append(state)

    _emit(out, "ordering: begin")
    shared.m_thread = _pr_create_thread(m_main, create_delay)
    if fixed:
        with cond:
            shared.initialized = True
            cond.notify()
    shared.m_thread.thread.join()
    if failures:
        raise ThreadBugError("mMain read mThread before it was initialized") from failures[0]
    _emit(out, "ordering: end")
    return states[0]


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="bugs")
    parser.add_argument("bug", choices=["atomicity", "atomicity-fixed", "deadlock",
                                        "ordering", "ordering-fixed"])
    parser.add_argument("--delay", type=float, default=1.0,
                        help="seconds the creator sleeps in the ordering demos")
    parser.add_argument("--timeout", type=float, default=None,
                        help="give up on a lock in the deadlock demo after this long")
    args = parser.parse_args(argv)
    try:
        if args.bug.startswith("atomicity"):
            run_atomicity(args.bug.endswith("fixed"), sys.stdout)
        elif args.bug == "deadlock":
            run_deadlock(args.timeout, sys.stdout)
        else:
            run_ordering(args.bug.endswith("fixed"), sys.stdout, args.delay)
    except ThreadBugError as exc:
        print(f"bugs: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())