"""is - a descriptive replacement for the test(1) command."""

__version__ = "0.1.0"
