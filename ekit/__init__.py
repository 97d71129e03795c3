"""Generic containers, concurrent and delay queues, and an on-demand task pool."""

__version__ = "0.1.0"