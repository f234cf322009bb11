"""
HTTP API for roomrules.
"""
from .app import create_app, Services

__all__ = ["create_app", "Services"]
