"""Personal command launcher: expand shortcut templates and run them."""

__version__ = "0.1.0"
