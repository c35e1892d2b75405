"""Shared plumbing for the command mixins."""

from typing import Any, Callable

from redix.commands.conversions import to_python
from redix.commands.table import validate
from redix.errors import EncodingError
from redix.protocol.resp import Command, Reply

Converter = Callable[[Reply], Any]


class CommandsBase:
    """
    Base for classes exposing command methods.

    Command methods shape their arguments and call _command(); the concrete
    class decides what executing means through _execute(). The client runs
    the command immediately, a pipeline queues it.
    """

    def _execute(self, command: Command, convert: Converter) -> Any:
        raise NotImplementedError

    def _command(self, name: str, *args, convert: Converter = to_python) -> Any:
        validate(name, args)
        return self._execute(Command(name, args), convert)

    def execute_command(self, name: str, *args) -> Any:
        """
        Run any command by name, converting the reply generically.

        Simple strings come back as str, bulk strings as bytes, integers as
        int, nulls as None and arrays as lists.
        """
        if not isinstance(name, str) or not name:
            raise EncodingError(f"Invalid command name: {name!r}")
        return self._command(name.upper(), *args)
