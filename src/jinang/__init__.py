"""jinang — append-only declarative memory for agents."""

__version__ = "0.1.0"
