"""A stack of ints that persists in a memory-mapped file."""

import mmap
import os
import struct
import sys

_HEADER = struct.Struct("=Q")
_ITEM = struct.Struct("=i")


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
    value = sign * int(digits) if digits else 0
    return (value + (1 << 31)) % (1 << 32) - (1 << 31)


class PersistentStack:
    """Stack stored in a file: a size_t count followed by int items."""

    def __init__(self, path) -> None:
        self._file = open(path, "r+b")
        try:
            self._size = os.fstat(self._file.fileno()).st_size
            if self._size < _HEADER.size or self._size % _ITEM.size != 0:
                raise ValueError(
                    f"backing file size {self._size} is too small or not a "
                    f"multiple of {_ITEM.size}"
                )
            self._map = mmap.mmap(self._file.fileno(), self._size)
        except BaseException:
            self._file.close()
            raise

    def __enter__(self) -> "PersistentStack":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def __len__(self) -> int:
        return _HEADER.unpack_from(self._map, 0)[0]

    def _set_len(self, n: int) -> None:
        _HEADER.pack_into(self._map, 0, n)

    def push(self, value: int) -> bool:
        """Push ``value``; return False (and drop it) if the stack is full."""
        n = len(self)
        if _HEADER.size + (n + 1) * _ITEM.size > self._size:
            return False
        _ITEM.pack_into(self._map, _HEADER.size + n * _ITEM.size, value)
        self._set_len(n + 1)
        return True

    def pop(self):
        """Pop and return the top item, or None if the stack is empty."""
        n = len(self)
        if n == 0:
            return None
        n -= 1
        self._set_len(n)
        return _ITEM.unpack_from(self._map, _HEADER.size + n * _ITEM.size)[0]

    def close(self) -> None:
        if not self._map.closed:
            self._map.flush()
            self._map.close()
        self._file.close()


def run(path, commands, out) -> None:
    """Apply each command: "pop" prints the top item, anything else is pushed."""
    with PersistentStack(path) as stack:
        for command in commands:
            if command == "pop":
                value = stack.pop()
                if value is not None:
                    print(value, file=out)
            else:
                stack.push(_atoi(command))


def main(argv=None) -> int:
    commands = sys.argv[1:] if argv is None else list(argv)
    try:
        run("ps.img", commands, sys.stdout)
    except (OSError, ValueError) as exc:
        print(f"pstack: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())