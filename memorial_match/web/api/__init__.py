"""REST API for duplicate checks."""

from .main import app

__all__ = ['app']
