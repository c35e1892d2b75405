"""
Pipeline Module

A pipeline queues commands and sends them in a single write. Replies are
read back in the order the commands were queued, one per command.
"""

import logging
from typing import Any, List, Tuple

from redix.commands import GenericCommands, SetCommands
from redix.commands.base import Converter
from redix.core.dispatcher import Dispatcher
from redix.errors import CommandError, command_error_from_message
from redix.protocol.resp import Command, Error

logger = logging.getLogger(__name__)


class Pipeline(GenericCommands, SetCommands):
    """
    Queue of commands executed together.

    Command methods return the pipeline itself so calls can be chained:

        with client.pipeline() as pipe:
            added, size = pipe.sadd("tags", "a", "b").scard("tags").execute()
    """

    def __init__(self, dispatcher: Dispatcher, raise_on_error: bool = True):
        self._dispatcher = dispatcher
        self.raise_on_error = raise_on_error
        self._queue: List[Tuple[Command, Converter]] = []

    def __len__(self) -> int:
        return len(self._queue)

    def __enter__(self) -> "Pipeline":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.reset()

    def _execute(self, command: Command, convert: Converter) -> "Pipeline":
        self._queue.append((command, convert))
        return self

    def reset(self) -> None:
        self._queue = []

    def execute(self) -> List[Any]:
        """
        Send every queued command and collect the converted replies.

        Error replies become CommandError instances in the result list. With
        raise_on_error, the first of them is raised instead, after all
        replies have been read so the connection stays in step.
        """
        queued, self._queue = self._queue, []
        if not queued:
            return []

        replies = self._dispatcher.call_many(command for command, _ in queued)

        results = []
        for (command, convert), reply in zip(queued, replies):
            if isinstance(reply, Error):
                results.append(command_error_from_message(reply.message))
            else:
                results.append(convert(reply))

        if self.raise_on_error:
            for position, result in enumerate(results):
                if isinstance(result, CommandError):
                    logger.debug("Pipeline: command %d (%s) failed: %s",
                                 position, queued[position][0].name, result)
                    raise result
        return results
