"""Core package - command dispatch over a connection."""

from .dispatcher import Dispatcher

__all__ = ['Dispatcher']
