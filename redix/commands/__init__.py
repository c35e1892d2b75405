"""Commands package - command table, reply conversions and command mixins."""

from .generic import GenericCommands
from .sets import SetCommands
from .table import COMMANDS, CommandSpec, validate

__all__ = [
    'COMMANDS',
    'CommandSpec',
    'GenericCommands',
    'SetCommands',
    'validate',
]
