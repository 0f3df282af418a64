"""Dining philosophers with semaphores, with and without the deadlock."""

import argparse
import sys
import threading

PHILOSOPHERS = 5


def left(p: int) -> int:
    """Index of the fork on philosopher ``p``'s left."""
    return p % PHILOSOPHERS


def right(p: int) -> int:
    """Index of the fork on philosopher ``p``'s right."""
    return (p + 1) % PHILOSOPHERS


class Table:
    """Five forks, one semaphore each; optionally the last philosopher reaches right first."""

    def __init__(self, avoid_deadlock: bool = False, out=None) -> None:
        self.avoid_deadlock = avoid_deadlock
        self._out = out
        self._forks = [threading.Semaphore(1) for _ in range(PHILOSOPHERS)]
        self._print_lock = threading.Semaphore(1)

    def say(self, p: int, message: str) -> None:
        """Print ``message`` indented by philosopher ``p``'s column."""
        if self._out is None:
            return
        with self._print_lock:
            self._out.write(" " * (p * 10) + message + "\n")

    def _fork_order(self, p: int) -> tuple[int, int]:
        if self.avoid_deadlock and p == PHILOSOPHERS - 1:
            return right(p), left(p)
        return left(p), right(p)

    def get_forks(self, p: int) -> None:
        for fork in self._fork_order(p):
            if not self.avoid_deadlock:
                self.say(p, f"{p}: try {fork}")
            elif p == PHILOSOPHERS - 1:
                self.say(p, f"{p} try {fork}")
            else:
                self.say(p, f"try {fork}")
            self._forks[fork].acquire()

    def put_forks(self, p: int) -> None:
        self._forks[left(p)].release()
        self._forks[right(p)].release()


def dine(num_loops: int, avoid_deadlock: bool = False, out=None) -> list[int]:
    """Run five philosophers for ``num_loops`` meals each; return meals eaten per seat."""
    table = Table(avoid_deadlock, out)
    meals = [0] * PHILOSOPHERS

    def philosopher(p: int) -> None:
        table.say(p, f"{p}: start")
        for _ in range(num_loops):
            table.say(p, f"{p}: think")
            table.get_forks(p)
            table.say(p, f"{p}: eat")
            meals[p] += 1
            table.put_forks(p)
            table.say(p, f"{p}: done")

    if out is not None:
        out.write("dining: started\n")
    threads = [threading.Thread(target=philosopher, args=(p,)) for p in range(PHILOSOPHERS)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    if out is not None:
        out.write("dining: finished\n")
    return meals


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="dining_philosophers")
    parser.add_argument("num_loops", type=int)
    parser.add_argument("--avoid-deadlock", action="store_true",
                        help="let the last philosopher pick up the right fork first")
    parser.add_argument("--verbose", action="store_true",
                        help="print every step of every philosopher")
    args = parser.parse_args(argv)
    if args.verbose:
        dine(args.num_loops, args.avoid_deadlock, sys.stdout)
    else:
        print("dining: started", flush=True)
        dine(args.num_loops, args.avoid_deadlock, None)
        print("dining: finished", flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())