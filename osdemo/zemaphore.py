"""A counting semaphore built from a lock and a condition variable."""

import argparse
import sys
import threading
import time


class Zemaphore:
    """Counting semaphore: ``wait`` blocks while the value is not positive."""

    def __init__(self, value: int) -> None:
        self._value = value
        self._cond = threading.Condition(threading.Lock())

    @property
    def value(self) -> int:
        with self._cond:
            return self._value

    def wait(self) -> None:
        """Block until the value is positive, then decrement it."""
        with self._cond:
            while self._value <= 0:
                self._cond.wait()
            self._value -= 1

    def post(self) -> None:
        """Increment the value and wake one waiter."""
        with self._cond:
            self._value += 1
            self._cond.notify()


def main(argv=None) -> int:
    """Parent waits on a zemaphore until a child thread posts it."""
    parser = argparse.ArgumentParser(prog="zemaphore")
    parser.add_argument("--delay", type=float, default=4.0,
                        help="seconds the child sleeps before posting")
    args = parser.parse_args(argv)

    sem = Zemaphore(0)

    def child() -> None:
        time.sleep(args.delay)
        print("child", flush=True)
        sem.post()

    print("parent: begin", flush=True)
    worker = threading.Thread(target=child)
    worker.start()
    sem.wait()
    print("parent: end", flush=True)
    worker.join()
    return 0


if __name__ == "__main__":
    sys.exit(main())