"""Status line components, a terminal system summary and box-drawing geometry."""

__version__ = "0.1.0"