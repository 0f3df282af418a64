[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "osdemo"
version = "0.1.0"
description = "Small runnable demonstrations of operating-system concepts: processes, threads, locks, condition variables, semaphores, scheduling, persistence and networking."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "concurrency",
    "threads",
    "semaphores",
    "condition variables",
    "scheduling",
    "fork",
    "teaching",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
osdemo-zemaphore = "osdemo.zemaphore:main"
osdemo-rwlock = "osdemo.rwlock:main"
osdemo-lottery = "osdemo.lottery:main"
osdemo-pstack = "osdemo.pstack:main"
osdemo-udp-client = "osdemo.udp:client_main"
osdemo-udp-server = "osdemo.udp:server_main"
osdemo-join = "osdemo.syncjoin:main"
osdemo-pc = "osdemo.boundedbuffer:main"
osdemo-dining = "osdemo.philosophers:main"
osdemo-threads = "osdemo.threaddemos:main"
osdemo-bugs = "osdemo.bugs:main"
osdemo-cas = "osdemo.cas:main"
osdemo-processes = "osdemo.processes:main"
osdemo-intro = "osdemo.intro:main"

[tool.setuptools.packages.find]
include = ["osdemo*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
