"""Exception cause chains, and splitting condition text at its top-level comparison."""

__version__ = "0.1.0"

__all__ = ["chain", "tokens", "partition"]