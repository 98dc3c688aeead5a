"""StreamHub - watch up to twelve live streams side by side."""

__version__ = "1.0.0"
