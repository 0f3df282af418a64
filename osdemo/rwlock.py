"""Reader-writer lock built from two semaphores, with a reader/writer demo."""

import sys
import threading


class RWLock:
    """Readers share the lock; a writer holds it alone."""

    def __init__(self) -> None:
        self.readers = 0
        self._lock = threading.Semaphore(1)
        self._writelock = threading.Semaphore(1)

    def acquire_readlock(self) -> None:
        with self._lock:
            self.readers += 1
            if self.readers == 1:
                self._writelock.acquire()

    def release_readlock(self) -> None:
        with self._lock:
            self.readers -= 1
            if self.readers == 0:
                self._writelock.release()

    def acquire_writelock(self) -> None:
        self._writelock.acquire()

    def release_writelock(self) -> None:
        self._writelock.release()


def run(read_loops: int, write_loops: int, out) -> int:
    """Run one reader and one writer thread; return the final counter."""
    lock = RWLock()
    counter = 0

    def reader() -> None:
        local = 0
        for _ in range(read_loops):
            lock.acquire_readlock()
            local = counter
            lock.release_readlock()
            print(f"read {local}", file=out)
        print(f"read done: {local}", file=out)

    def writer() -> None:
        nonlocal counter
        for _ in range(write_loops):
            lock.acquire_writelock()
            counter += 1
            lock.release_writelock()
        print("write done", file=out)

    threads = [threading.Thread(target=reader), threading.Thread(target=writer)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    print("all done", file=out)
    return counter


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: rwlock readloops writeloops", file=sys.stderr)
        return 1
    try:
        read_loops, write_loops = (int(a) for a in args)
    except ValueError:
        print("usage: rwlock readloops writeloops", file=sys.stderr)
        return 1
    run(read_loops, write_loops, sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())