"""Content-integrity and redundancy checker for ZIM archives."""

__version__ = "0.1.0"
