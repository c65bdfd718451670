"""
Backend event handlers.

Handlers react to events emitted by a running search and push them to clients.
"""

from .websocket_handler import SearchWebSocketHandler

__all__ = ['SearchWebSocketHandler']
