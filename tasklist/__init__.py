"""tasklist - multi-user to-do list."""

__version__ = "0.1.0"
