"""Order-flow analysis tools for recorded trade tick feeds."""

__version__ = "0.1.0"
