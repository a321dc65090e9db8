"""guard-console - operator console for the swap policy registry and guard hook."""

__version__ = "0.1.0"
