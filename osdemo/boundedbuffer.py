"""Producer/consumer over a bounded buffer, with condition variables or semaphores."""

import argparse
import sys
import threading
from collections import deque

END_OF_PRODUCTION = -1
CMAX = 10


class BoundedBuffer:
    """FIFO of at most ``size`` items; ``put`` blocks when full, ``get`` when empty."""

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"buffer size must be positive, got {size}")
        self.size = size
        self._items: deque = deque()
        lock = threading.Lock()
        self._not_full = threading.Condition(lock)
        self._not_empty = threading.Condition(lock)

    def __len__(self) -> int:
        with self._not_full:
            return len(self._items)

    def put(self, value) -> None:
        with self._not_full:
            while len(self._items) == self.size:
                self._not_full.wait()
            self._items.append(value)
            self._not_empty.notify()

    def get(self):
        with self._not_empty:
            while not self._items:
                self._not_empty.wait()
            value = self._items.popleft()
            self._not_full.notify()
            return value


class _SingleConditionBuffer(BoundedBuffer):
    """Producers and consumers share one condition variable.

    With more than one consumer a signal can wake the wrong kind of thread
    and everyone may end up asleep.
    """

    def __init__(self, size: int) -> None:
        super().__init__(size)
        self._not_empty = self._not_full


def run_with_conditions(buffer_size: int, loops: int, consumers: int,
                        single_cv: bool = False) -> list[list[int]]:
    """Produce 0..loops-1 then one end marker per consumer.

    Returns the values each consumer took, end markers excluded.
    """
    buffer_type = _SingleConditionBuffer if single_cv else BoundedBuffer
    buf = buffer_type(buffer_size)
    consumed: list[list[int]] = [[] for _ in range(consumers)]

    def producer() -> None:
        for i in range(loops):
            buf.put(i)
        for _ in range(consumers):
            buf.put(END_OF_PRODUCTION)

    def consumer(taken: list[int]) -> None:
        while (value := buf.get()) != END_OF_PRODUCTION:
            taken.append(value)

    threads = [threading.Thread(target=producer)]
    threads += [threading.Thread(target=consumer, args=(taken,)) for taken in consumed]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return consumed


def run_with_semaphores(buffer_size: int, loops: int, consumers: int, out) -> list[list[int]]:
    """Semaphore-based producer/consumer; each consumer prints "<id> <value>"."""
    if consumers > CMAX:
        raise ValueError(f"at most {CMAX} consumers are supported, got {consumers}")
    if buffer_size <= 0:
        raise ValueError(f"buffer size must be positive, got {buffer_size}")

    items: deque = deque()
    empty = threading.Semaphore(buffer_size)
    full = threading.Semaphore(0)
    mutex = threading.Semaphore(1)

    def put(value: int) -> None:
        empty.acquire()
        with mutex:
            items.append(value)
        full.release()

    def get() -> int:
        full.acquire()
        with mutex:
            value = items.popleft()
        empty.release()
        return value

    consumed: list[list[int]] = [[] for _ in range(consumers)]

    def producer() -> None:
        for i in range(loops):
            put(i)
        for _ in range(consumers):
            put(END_OF_PRODUCTION)

    def consumer(cid: int, taken: list[int]) -> None:
        value = 0
        while value != END_OF_PRODUCTION:
            value = get()
            out.write(f"{cid} {value}\n")
            if value != END_OF_PRODUCTION:
                taken.append(value)

    threads = [threading.Thread(target=producer)]
    threads += [threading.Thread(target=consumer, args=(cid, taken))
                for cid, taken in enumerate(consumed)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    return consumed


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="boundedbuffer")
    parser.add_argument("buffersize", type=int)
    parser.add_argument("loops", type=int)
    parser.add_argument("consumers", type=int)
    parser.add_argument("--mode", choices=["cv", "single-cv", "sem"], default="cv")
    args = parser.parse_args(argv)
    try:
        if args.mode == "sem":
            run_with_semaphores(args.buffersize, args.loops, args.consumers, sys.stdout)
        else:
            run_with_conditions(args.buffersize, args.loops, args.consumers,
                                args.mode == "single-cv")
    except ValueError as exc:
        print(f"boundedbuffer: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())