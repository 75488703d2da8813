"""Docker volume plugin backed by loop-mounted sparse image files."""

__version__ = "1.0.0"
