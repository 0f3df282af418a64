"""Runnable demonstrations of operating-system concepts: processes, threads,
locks, condition variables, semaphores, scheduling, persistence and UDP."""

__version__ = "0.1.0"