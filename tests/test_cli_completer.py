"""Tests for RemotePathCompleter."""

import pytest
from prompt_toolkit.document import Document

from cli.completer import RemotePathCompleter
from cli.constants import COMMANDS
from client.exceptions import MetadataServiceError


@pytest.fixture
def completer(dfs):
    """Create a RemotePathCompleter backed by the in-memory filesystem."""
    return RemotePathCompleter(lambda: dfs)


def get_completions_list(completer, text):
    """Helper to get list of completion texts from completer."""
    doc = Document(text, len(text))
    return [c.text for c in completer.get_completions(doc, None)]


class TestCommandCompletion:
    """Tests for command name completion."""

    def test_empty_input_lists_all_commands(self, completer):
        assert get_completions_list(completer, "") == COMMANDS

    def test_partial_command(self, completer):
        assert get_completions_list(completer, "c") == ["cat", "clear"]

    def test_case_insensitive(self, completer):
        assert get_completions_list(completer, "ST") == ["stat"]


class TestPathCompletion:
    """Tests for remote path completion."""

    def test_root_entries_after_command(self, completer):
        assert get_completions_list(completer, "ls ") == ["/data/", "/empty/", "/logs/"]

    def test_prefix_inside_directory(self, completer):
        assert get_completions_list(completer, "cat /logs/part-0000") == [
            f"/logs/part-0000{i}" for i in range(5)
        ]

    def test_directory_with_trailing_slash(self, completer):
        assert get_completions_list(completer, "stat /data/") == ["/data/small.txt", "/data/two_blocks.bin"]

    def test_start_position_replaces_partial(self, completer):
        doc = Document("cat /data/sm", len("cat /data/sm"))
        completions = list(completer.get_completions(doc, None))

        assert [c.text for c in completions] == ["/data/small.txt"]
        assert completions[0].start_position == -len("/data/sm")

    def test_relative_paths_not_completed(self, completer):
        assert get_completions_list(completer, "cat data") == []

    def test_only_first_argument_completed(self, completer):
        assert get_completions_list(completer, "read /data/small.txt ") == []

    def test_missing_directory_yields_nothing(self, completer):
        assert get_completions_list(completer, "ls /nowhere/x") == []

    def test_transport_error_yields_nothing(self):
        def failing_client():
            raise MetadataServiceError("unreachable")

        completer = RemotePathCompleter(failing_client)

        assert get_completions_list(completer, "ls /") == []

    def test_no_client_factory(self):
        assert get_completions_list(RemotePathCompleter(), "ls /") == []
