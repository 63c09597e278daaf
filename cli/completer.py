"""Completer for the reader CLI with remote path completion."""

import posixpath
from typing import Callable, Iterable, Optional

from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.document import Document

from client.dfs_client import DFSClient
from client.exceptions import DFSException
from cli.constants import COMMANDS, PATH_COMMANDS
from common.logging_config import get_logger

logger = get_logger(__name__)


class RemotePathCompleter(Completer):
    """
    Custom completer that provides:
    - Command name completion for the first token
    - Remote path completion for the path argument of ls/stat/cat/read
    """

    def __init__(self, client_factory: Optional[Callable[[], DFSClient]] = None):
        self._client_factory = client_factory

    def get_completions(
        self, document: Document, complete_event
    ) -> Iterable[Completion]:
        text = document.text_before_cursor
        tokens = text.split()

        is_typing_new_token = text.endswith(" ") or not tokens

        if not tokens or (len(tokens) == 1 and not is_typing_new_token):
            yield from self._complete_commands(tokens[0] if tokens else "")
            return

        command = tokens[0].lower()
        if command not in PATH_COMMANDS or self._client_factory is None:
            return

        arg_index = len(tokens) - (1 if not is_typing_new_token else 0)
        if arg_index != 1:
            return

        current_word = "" if is_typing_new_token else tokens[-1]
        yield from self._complete_remote_paths(current_word)

    def _complete_commands(self, partial: str) -> Iterable[Completion]:
        """Complete command names matching the partial input."""
        partial_lower = partial.lower()
        for cmd in COMMANDS:
            if cmd.startswith(partial_lower):
                yield Completion(cmd, start_position=-len(partial))

    def _complete_remote_paths(self, partial: str) -> Iterable[Completion]:
        """Complete entries of the remote directory the partial path points into."""
        if not partial:
            directory, prefix = "/", ""
        elif partial.startswith("/"):
            directory, prefix = posixpath.split(partial)
        else:
            return
        start_position = -len(partial)

        try:
            entries = self._client_factory().list_dir(directory or "/")
        except DFSException as e:
            logger.debug(f"Path completion for {partial!r} unavailable: {e}")
            return

        for entry in sorted(entries, key=lambda e: e.name):
            name = posixpath.basename(entry.name)
            if not name.startswith(prefix):
                continue
            candidate = posixpath.join(directory, name)
            if entry.is_dir:
                candidate += "/"
            yield Completion(candidate, start_position=start_position)
