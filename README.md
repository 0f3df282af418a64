# osdemo

A collection of small, runnable demonstrations of classic operating-system
ideas: processes, threads, locks, condition variables, semaphores, scheduling,
persistence and networking. Each one can be run from the command line or
imported and driven from Python. The package needs nothing beyond the
standard library.

## What is inside

| Module | Shows |
| --- | --- |
| `osdemo.timing` | wall-clock time and busy-waiting (`get_time`, `spin`) |
| `osdemo.zemaphore` | a counting semaphore built from a lock and a condition variable (`Zemaphore`) |
| `osdemo.rwlock` | a reader/writer lock built from two semaphores (`RWLock`, `run`) |
| `osdemo.lottery` | lottery scheduling over a list of ticket holders (`Lottery`, `simulate`) |
| `osdemo.pstack` | a stack of integers kept in a memory-mapped file (`PersistentStack`, `run`) |
| `osdemo.udp` | UDP helpers (`udp_open`, `fill_sock_addr`, `udp_write`, `udp_read`, `udp_close`) with a client and a server (`run_client`, `run_server`) |
| `osdemo.syncjoin` | waiting for a thread with a condition variable, a semaphore or a spin loop (`Synchronizer`, `join_with_condition`, `join_with_semaphore`, `join_spin`) |
| `osdemo.boundedbuffer` | producer/consumer over a bounded buffer (`BoundedBuffer`, `run_with_conditions`, `run_with_semaphores`) |
| `osdemo.philosophers` | dining philosophers, with and without deadlock (`Table`, `dine`, `left`, `right`) |
| `osdemo.threaddemos` | creating threads, passing arguments and results, races and throttling |
| `osdemo.bugs` | atomicity, lock-order deadlock and ordering bugs (`run_atomicity`, `run_deadlock`, `run_ordering`) |
| `osdemo.cas` | compare-and-swap (`AtomicInt`) |
| `osdemo.processes` | fork, wait, exec, redirection, shared files and pipes (`ForkReport` and one function per demo) |
| `osdemo.intro` | CPU and memory virtualisation, file I/O, address layout and TLB timing |

## Installing

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Commands

| Command | Arguments |
| --- | --- |
| `osdemo-zemaphore` | `[--delay SECONDS]` |
| `osdemo-rwlock` | `readloops writeloops` |
| `osdemo-lottery` | `seed loops` |
| `osdemo-pstack` | any mix of integers (pushed) and `pop` |
| `osdemo-udp-server` | `[--port PORT]` (default 10000) |
| `osdemo-udp-client` | `[--host HOST] [--server-port PORT] [--port PORT]` (defaults `localhost`, 10000, 20000) |
| `osdemo-join` | `cv`, `sema`, `spin`, `no-lock` or `no-state-var`, `[--delay] [--timeout]` |
| `osdemo-pc` | `buffersize loops consumers [--mode cv\|single-cv\|sem]` |
| `osdemo-dining` | `num_loops [--avoid-deadlock] [--verbose]` |
| `osdemo-threads` | `counter LOOPS`, `race LOOPS`, `letters`, `create`, `simple-args`, `return-args`, `binary [--loops N]`, `throttle NUM_THREADS SEM_VALUE [--delay]` |
| `osdemo-bugs` | `atomicity`, `atomicity-fixed`, `deadlock`, `ordering` or `ordering-fixed`, `[--delay] [--timeout]` |
| `osdemo-cas` | none |
| `osdemo-processes` | `p1`–`p4` or `quest1`–`quest8`, `[--file] [--output] [--path]` |
| `osdemo-intro` | `cpu STRING [--count]`, `io [--path]`, `mem VALUE [--count]`, `va`, `tlb PAGES ITERATIONS` |

A few examples:

```
osdemo-lottery 1 5          # seed, number of draws
osdemo-rwlock 5 10          # read loops, write loops
osdemo-pc 4 20 2            # buffer size, loops, consumers
osdemo-dining 10 --avoid-deadlock
osdemo-cas
```

`osdemo-lottery` draws with the same additive-feedback generator as the C
library's `random()`, so a given seed always yields the same winners.

### The persistent stack

`osdemo-pstack` works on a file named `ps.img` in the current directory. The
file must already exist, be at least 8 bytes long and have a size that is a
multiple of 4; the first 8 bytes hold the item count and the rest hold the
integers. Create an empty one first, for example:

```
truncate -s 4096 ps.img
osdemo-pstack 7 13 47 pop   # prints 47
osdemo-pstack pop pop       # prints 13 and 7: the stack survives between runs
```

Pushing onto a full stack silently drops the value; popping an empty stack
prints nothing.

### UDP

The networking pair runs in two terminals. The server answers every datagram
with "goodbye world" and runs until interrupted:

```
osdemo-udp-server
osdemo-udp-client
```

## Using it from Python

```python
from osdemo.lottery import Lottery
from osdemo.zemaphore import Zemaphore
from osdemo.cas import AtomicInt
from osdemo.boundedbuffer import run_with_conditions

lottery = Lottery()
lottery.insert(50)
lottery.insert(100)
lottery.insert(25)
print(lottery.describe())   # List: [25] [100] [50]
print(lottery.pick(30))     # 100

sem = Zemaphore(1)
sem.wait()
sem.post()

value = AtomicInt(0)
value.compare_and_swap(0, 100)   # True
value.compare_and_swap(0, 200)   # False

per_consumer = run_with_conditions(4, 20, 2)
```

Most demo functions take an `out` argument, any object with `write`, so their
output can be captured with `io.StringIO`.

## Limits

- Some demonstrations misbehave on purpose. The unsynchronised counter can
  lose updates, the dining philosophers without `--avoid-deadlock` can hang,
  `osdemo-pc --mode single-cv` with more than one consumer can hang, and
  `osdemo-bugs deadlock` waits forever unless `--timeout` is given.
  `osdemo-bugs atomicity` and `ordering` exit with status 1 when the bug
  shows.
- The broken joins (`no-lock`, `no-state-var`) give up after `--timeout`
  seconds rather than sleeping forever.
- `osdemo.processes` uses `fork` and `exec`, and the `p3`/`p4` demos run the
  system's `wc`; they need a POSIX system.
- Addresses printed by `osdemo-intro va` and `mem` are object identities, not
  raw machine addresses.