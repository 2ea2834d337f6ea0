"""Rolling-window statistics per symbol, served over HTTP."""

__version__ = "0.1.0"