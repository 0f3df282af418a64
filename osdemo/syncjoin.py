"""Waiting for a child thread: condition variables, semaphores, spinning,
and two broken variants that lose their wake-up."""

import argparse
import sys
import threading
import time

from osdemo.zemaphore import Zemaphore


class Synchronizer:
    """One-shot signal: ``wait`` blocks until ``signal``, then re-arms itself."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._done = False

    def signal(self) -> None:
        with self._cond:
            self._done = True
            self._cond.notify()

    def wait(self) -> None:
        with self._cond:
            while not self._done:
                self._cond.wait()
            self._done = False


def _emit(out, text: str) -> None:
    out.write(text + "\n")
    out.flush()


def join_with_condition(delay: float, out) -> None:
    """Parent waits on a condition variable guarded by a state flag."""
    sync = Synchronizer()

    def child() -> None:
        _emit(out, "child")
        time.sleep(delay)
        sync.signal()

    _emit(out, "parent: begin")
    worker = threading.Thread(target=child)
    worker.start()
    sync.wait()
    _emit(out, "parent: end")
    worker.join()


def join_with_semaphore(delay: float, out) -> None:
    """Parent waits on a semaphore that starts at zero."""
    sem = Zemaphore(0)

    def child() -> None:
        time.sleep(delay)
        _emit(out, "child")
        sem.post()

    _emit(out, "parent: begin")
    worker = threading.Thread(target=child)
    worker.start()
    sem.wait()
    _emit(out, "parent: end")
    worker.join()


def join_spin(delay: float, out) -> None:
    """Parent busy-waits on a shared flag."""
    done = False

    def child() -> None:
        nonlocal done
        _emit(out, "child")
        time.sleep(delay)
        done = True

    _emit(out, "parent: begin")
    worker = threading.Thread(target=child)
    worker.start()
    while not done:
        pass
    _emit(out, "parent: end")
    worker.join()


def _join_no_lock(delay: float, timeout: float, out) -> bool:
    """Child signals without the lock while the parent is not yet waiting.

    The signal is lost; the parent gives up after ``timeout`` seconds.
    Returns whether the parent was actually woken.
    """
    cond = threading.Condition(threading.Lock())
    done = False

    def child() -> None:
        nonlocal done
        _emit(out, "child: begin")
        time.sleep(delay)
        done = True
        _emit(out, "child: signal")
        # A signal with nobody waiting on the condition has no effect.
        if cond.acquire(blocking=False):
            try:
                cond.notify()
            finally:
                cond.release()

    _emit(out, "parent: begin")
    worker = threading.Thread(target=child)
    worker.start()
    signalled = True
    with cond:
        _emit(out, "parent: check condition")
        while not done:
            time.sleep(2 * delay)
            _emit(out, "parent: wait to be signalled...")
            if not cond.wait(timeout):
                signalled = False
                _emit(out, "parent: gave up waiting")
    _emit(out, "parent: end")
    worker.join()
    return signalled


def _join_no_state_var(delay: float, timeout: float, out) -> bool:
    """Child signals before the parent waits and no flag records it."""
    cond = threading.Condition(threading.Lock())

    def child() -> None:
        _emit(out, "child: begin")
        with cond:
            _emit(out, "child: signal")
            cond.notify()

    _emit(out, "parent: begin")
    worker = threading.Thread(target=child)
    worker.start()
    time.sleep(delay)
    _emit(out, "parent: wait to be signalled...")
    with cond:
        signalled = cond.wait(timeout)
    if not signalled:
        _emit(out, "parent: gave up waiting")
    _emit(out, "parent: end")
    worker.join()
    return signalled


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="syncjoin")
    parser.add_argument("mode", choices=["cv", "sema", "spin", "no-lock", "no-state-var"])
    parser.add_argument("--delay", type=float, default=1.0,
                        help="seconds the child (or parent) sleeps")
    parser.add_argument("--timeout", type=float, default=5.0,
                        help="how long the broken variants wait before giving up")
    args = parser.parse_args(argv)
    out = sys.stdout
    if args.mode == "cv":
        join_with_condition(args.delay, out)
    elif args.mode == "sema":
        join_with_semaphore(args.delay, out)
    elif args.mode == "spin":
        join_spin(args.delay, out)
    elif args.mode == "no-lock":
        _join_no_lock(args.delay, args.timeout, out)
    else:
        _join_no_state_var(args.delay, args.timeout, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())