"""User registry service: a FastAPI catalog of registered people."""

__version__ = "0.1.0"
