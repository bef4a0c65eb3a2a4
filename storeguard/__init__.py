"""Role-based access decisions for the store back office."""

__version__ = "1.0.0"
