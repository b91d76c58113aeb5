"""
HTTP API for Store Finder.
"""
from .app import create_app

__all__ = ["create_app"]
