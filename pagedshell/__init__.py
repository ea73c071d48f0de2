"""A small shell with a paged frame store, shell variables and process scheduling policies."""

__version__ = "0.1.0"