"""
WebSocket Package

Real-time channel for guesses and the cosmetic game timers.
"""

from .handlers import register_websocket_handlers

__all__ = ['register_websocket_handlers']
