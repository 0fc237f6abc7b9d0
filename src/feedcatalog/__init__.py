"""Feed catalog service: default feeds plus user-registered feeds."""

__version__ = "0.1.0"
