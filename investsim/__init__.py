"""Investment projection engine and its Flask API."""

__version__ = "0.1.0"
