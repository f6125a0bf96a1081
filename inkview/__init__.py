"""inkview: a live-reloading markdown file viewer."""

__version__ = "0.1.0"
