"""Lottery scheduling: pick a winning job by drawing a ticket."""

import sys


class _GlibcRandom:
    """The additive-feedback generator behind the C library's random()."""

    _DEG = 31
    _SEP = 3

    def __init__(self, seed: int) -> None:
        seed &= 0xFFFFFFFF
        if seed == 0:
            seed = 1
        word = seed - (1 << 32) if seed >= (1 << 31) else seed
        state = [word & 0xFFFFFFFF]
        for _ in range(1, self._DEG):
            hi = int(word / 127773)
            lo = word - hi * 127773
            word = 16807 * lo - 2836 * hi
            if word < 0:
                word += 2147483647
            state.append(word & 0xFFFFFFFF)
        self._state = state
        self._front = self._SEP
        self._rear = 0
        for _ in range(self._DEG * 10):
            self.random()

    def random(self) -> int:
        state = self._state
        state[self._front] = (state[self._front] + state[self._rear]) & 0xFFFFFFFF
        result = state[self._front] >> 1
        self._front = (self._front + 1) % self._DEG
        self._rear = (self._rear + 1) % self._DEG
        return result


class Lottery:
    """Jobs holding tickets; newly inserted jobs go to the front."""

    def __init__(self) -> None:
        self.jobs: list[int] = []

    @property
    def total(self) -> int:
        return sum(self.jobs)

    def insert(self, tickets: int) -> None:
        self.jobs.insert(0, tickets)

    def pick(self, winner: int) -> int:
        """Return the ticket count of the job holding ticket number ``winner``."""
        counter = 0
        for tickets in self.jobs:
            counter += tickets
            if counter > winner:
                return tickets
        raise ValueError(f"no job holds ticket {winner}")

    def describe(self) -> str:
        return "List: " + "".join(f"[{tickets}] " for tickets in self.jobs)


def simulate(seed: int, loops: int, out) -> list[tuple[int, int]]:
    """Run ``loops`` draws; return (winning ticket, winner's tickets) pairs."""
    rng = _GlibcRandom(seed)
    lottery = Lottery()
    for tickets in (50, 100, 25):
        lottery.insert(tickets)

    print(lottery.describe(), file=out)
    results = []
    for _ in range(loops):
        winner = rng.random() % lottery.total
        tickets = lottery.pick(winner)
        print(lottery.describe(), file=out)
        print(f"winner: {winner} {tickets}\n", file=out)
        results.append((winner, tickets))
    return results


def _atoi(text: str) -> int:
    text = text.lstrip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    digits = ""
    for ch in text:
        if not ch.isdigit():
            break
        digits += ch
    return sign * int(digits) if digits else 0


def main(argv=None) -> int:
    args = sys.argv[1:] if argv is None else list(argv)
    if len(args) != 2:
        print("usage: lottery <seed> <loops>", file=sys.stderr)
        return 1
    simulate(_atoi(args[0]), _atoi(args[1]), sys.stdout)
    return 0


if __name__ == "__main__":
    sys.exit(main())