"""
Unit tests for the classifier and the interface capability filter.
"""

import pytest

from pane_prompt.actions import (
    UNRECOGNIZED,
    Action,
    ActionKind,
    EditArgs,
    HelpArgs,
    Interface,
    NewPaneArgs,
    PaneIdArgs,
    RunArgs,
)
from pane_prompt.classifier import classify, classify_and_filter, restrict
from pane_prompt.grammar import GRAMMAR
from pane_prompt.selection import Cursor, Unbounded

INTERFACES = list(Interface)
CONSOLE_ONLY = [
    (entry, alias)
    for entry in GRAMMAR
    if entry.interface is Interface.CONSOLE
    for alias in entry.aliases
]
PIPE_ONLY = [
    (entry, alias)
    for entry in GRAMMAR
    if entry.interface is Interface.PIPE
    for alias in entry.aliases
]


class TestClassify:
    """Test head matching."""

    def test_empty(self):
        """Test empty input is unrecognized."""
        assert classify("", Interface.CONSOLE) == UNRECOGNIZED
        assert classify("   ", Interface.PIPE) == UNRECOGNIZED

    def test_unknown_head(self):
        """Test unknown head is unrecognized."""
        assert classify("launch rockets", Interface.ALL) == UNRECOGNIZED

    def test_prefix_is_not_a_match(self):
        """Test partial names do not match."""
        assert classify("ed", Interface.ALL) == UNRECOGNIZED
        assert classify("detach-m", Interface.ALL) == UNRECOGNIZED

    def test_head_case_insensitive(self):
        """Test head token matches regardless of case."""
        assert classify("NEW-PANE /tmp", Interface.ALL).kind is ActionKind.NEW_PANE

    @pytest.mark.parametrize("entry", GRAMMAR, ids=lambda e: e.name)
    def test_alias_coverage(self, entry):
        """Test every alias alone classifies to its entry with empty arguments."""
        for alias in entry.aliases:
            action = classify(alias, Interface.ALL)

            assert action.kind is entry.kind
            assert action.payload == entry.parse([], Interface.ALL)
            assert action.rejected_by is None

    @pytest.mark.parametrize("interface", INTERFACES)
    @pytest.mark.parametrize(
        "text",
        ["", "help", "edit a b 3", "run x ---env A", "detach-me", "bogus", "help-pipe"],
    )
    def test_idempotent(self, text, interface):
        """Test classifying twice gives equal results."""
        assert classify_and_filter(text, interface) == classify_and_filter(text, interface)


class TestEditArguments:
    """Test the trailing line number rule."""

    def test_path_and_line(self):
        """Test numeric last token becomes the line number."""
        action = classify("edit foo/bar.txt 42", Interface.ALL)

        assert action == Action(ActionKind.EDIT, EditArgs(path="foo/bar.txt", line=42))

    def test_path_with_space(self):
        """Test non-numeric last token stays in the path."""
        action = classify("edit foo bar", Interface.ALL)

        assert action.payload == EditArgs(path="foo bar", line=None)

    def test_line_only(self):
        """Test a lone number is a line number with an empty path."""
        assert classify("edit 7", Interface.ALL).payload == EditArgs(path="", line=7)

    def test_no_arguments(self):
        """Test bare edit gives an empty path."""
        assert classify("edit", Interface.ALL).payload == EditArgs(path="", line=None)

    def test_single_path(self):
        """Test a single non-numeric token is the path."""
        assert classify("e README.md", Interface.ALL).payload == EditArgs(path="README.md")

    def test_negative_number_is_path(self):
        """Test negative numbers are not line numbers."""
        assert classify("edit notes -3", Interface.ALL).payload == EditArgs(path="notes -3")

    def test_oversized_number_is_path(self):
        """Test numbers beyond the 64-bit index range stay in the path."""
        assert classify("edit notes 18446744073709551615", Interface.ALL).payload == EditArgs(
            path="notes", line=2**64 - 1
        )
        assert classify("edit notes 18446744073709551616", Interface.ALL).payload == EditArgs(
            path="notes 18446744073709551616"
        )

    def test_spaces_collapsed(self):
        """Test path tokens are joined by single spaces."""
        payload = classify("edit  my   file.txt   10", Interface.ALL).payload

        assert payload == EditArgs(path="my file.txt", line=10)


class TestNewPaneArguments:
    """Test new-pane path joining."""

    def test_path(self):
        """Test tokens form the path verbatim."""
        payload = classify("new-pane ~/My Projects", Interface.ALL).payload

        assert payload == NewPaneArgs(path="~/My Projects")

    def test_flags_not_parsed(self):
        """Test flag-looking tokens are part of the path."""
        payload = classify("pane ---cwd x", Interface.ALL).payload

        assert payload == NewPaneArgs(path="---cwd x")


class TestRunArguments:
    """Test run flag parsing."""

    def test_full_command(self):
        """Test executable, arguments, cwd and environment."""
        payload = classify("run prog a b ---cwd /tmp ---env K V", Interface.ALL).payload

        assert payload == RunArgs(path="prog", args=["a", "b"], cwd="/tmp", env={"K": "V"})

    def test_bare_run(self):
        """Test run without arguments."""
        assert classify("run", Interface.ALL).payload == RunArgs(path="")

    def test_cwd_before_executable(self):
        """Test flags may precede the executable."""
        payload = classify("run ---cwd /srv make all", Interface.ALL).payload

        assert payload == RunArgs(path="make", args=["all"], cwd="/srv")

    def test_last_cwd_wins(self):
        """Test repeated ---cwd keeps the last value."""
        payload = classify("run ls ---cwd /a ---cwd /b", Interface.ALL).payload

        assert payload.cwd == "/b"

    def test_dangling_cwd(self):
        """Test ---cwd without a value leaves cwd unset."""
        assert classify("run ls ---cwd", Interface.ALL).payload == RunArgs(path="ls")

    def test_env_is_one_way(self):
        """Test tokens after ---env are always key/value pairs."""
        payload = classify("run ls ---env ---cwd /x A", Interface.ALL).payload

        assert payload == RunArgs(path="ls", env={"---cwd": "/x"})

    def test_env_drops_trailing_key(self):
        """Test an unmatched trailing key is dropped."""
        payload = classify("run ls ---env A 1 B", Interface.ALL).payload

        assert payload.env == {"A": "1"}

    def test_empty_env(self):
        """Test ---env without pairs gives an empty mapping."""
        assert classify("run ls ---env", Interface.ALL).payload.env == {}

    def test_arguments_keep_case(self):
        """Test arguments keep their original casing."""
        payload = classify("RUN Make ALL", Interface.ALL).payload

        assert payload == RunArgs(path="Make", args=["ALL"])


class TestPaneIdArguments:
    """Test close-*-pane id parsing."""

    def test_pane_id(self):
        """Test numeric first token is the pane id."""
        payload = classify("close-terminal-pane 3", Interface.ALL).payload

        assert payload == PaneIdArgs(pane_id=3)

    def test_bad_pane_id(self):
        """Test malformed id degrades to None."""
        assert classify("close-plugin-pane abc", Interface.ALL).payload == PaneIdArgs()

    def test_oversized_pane_id(self):
        """Test ids beyond the 64-bit index range degrade to None."""
        payload = classify("close-terminal-pane 99999999999999999999999", Interface.ALL).payload

        assert payload == PaneIdArgs()

    def test_missing_pane_id(self):
        """Test missing id degrades to None."""
        assert classify("close-plugin-pane", Interface.ALL).payload == PaneIdArgs()


class TestTechnicalArguments:
    """Test argument-less kinds."""

    def test_arguments_ignored(self):
        """Test trailing tokens are ignored."""
        assert classify("detach-me now please", Interface.ALL) == Action(ActionKind.DETACH_ME)
        assert classify("clear everything", Interface.ALL) == Action(ActionKind.CLEAR_SCREEN)


class TestHelp:
    """Test help cursors."""

    def test_console_help_has_cursor(self):
        """Test console help starts at row 0 over the console-visible entries."""
        action = classify("help", Interface.CONSOLE)

        assert action.payload == HelpArgs(
            subset=Interface.ALL, perspective=Interface.CONSOLE, selection=Cursor(0, 14)
        )

    def test_pipe_help_unbounded(self):
        """Test pipe help has no cursor."""
        action = classify("?", Interface.PIPE)

        assert action.payload == HelpArgs(
            subset=Interface.ALL, perspective=Interface.PIPE, selection=Unbounded()
        )

    def test_scoped_help_bound(self):
        """Test scoped help counts the subset's entries."""
        assert classify("help-pipe", Interface.CONSOLE).payload.selection == Cursor(0, 9)
        assert classify("help-pane", Interface.CONSOLE).payload.selection == Cursor(0, 14)

    def test_help_arguments_ignored(self):
        """Test help ignores trailing tokens."""
        assert classify("help me", Interface.CONSOLE) == classify("help", Interface.CONSOLE)


class TestRestrict:
    """Test the interface capability filter."""

    @pytest.mark.parametrize(
        "entry, alias", CONSOLE_ONLY, ids=[alias for _, alias in CONSOLE_ONLY]
    )
    def test_console_only_from_pipe(self, entry, alias):
        """Test every console-only alias is unavailable from the pipe."""
        action = restrict(classify(alias, Interface.PIPE), Interface.PIPE)

        assert action.kind is entry.kind
        assert action.rejected_by is Interface.PIPE
        assert not action.is_executable
        assert classify_and_filter(alias, Interface.CONSOLE).rejected_by is None
        assert classify_and_filter(alias, Interface.ALL).rejected_by is None

    @pytest.mark.parametrize("entry, alias", PIPE_ONLY, ids=[alias for _, alias in PIPE_ONLY])
    def test_pipe_only_from_console(self, entry, alias):
        """Test every pipe-only alias is unavailable from the console."""
        action = classify_and_filter(alias, Interface.CONSOLE)

        assert action.kind is entry.kind
        assert action.rejected_by is Interface.CONSOLE
        assert classify_and_filter(alias, Interface.PIPE).rejected_by is None
        assert classify_and_filter(alias, Interface.ALL).rejected_by is None

    @pytest.mark.parametrize("text", ["detach-me", "detach-everyone", "clear", "run ls"])
    def test_all_passes_through(self, text):
        """Test the ALL calling interface never restricts."""
        action = classify(text, Interface.ALL)

        assert restrict(action, Interface.ALL) == action

    def test_matching_tag_passes(self):
        """Test an action tagged for the caller passes."""
        assert classify_and_filter("detach-me", Interface.CONSOLE).rejected_by is None
        assert classify_and_filter("detach-everyone", Interface.PIPE).rejected_by is None

    def test_unrestricted_passes(self):
        """Test ALL-tagged actions pass from every interface."""
        for interface in INTERFACES:
            assert classify_and_filter("edit x", interface).is_executable

    def test_unrecognized_never_wrapped(self):
        """Test unrecognized actions are never marked unavailable."""
        assert restrict(UNRECOGNIZED, Interface.PIPE) == UNRECOGNIZED

    def test_arguments_parsed_before_rejection(self):
        """Test rejected actions keep their parsed arguments."""
        action = classify_and_filter("close-focus 12", Interface.PIPE)

        assert action.rejected_by is Interface.PIPE
        assert action.kind is ActionKind.CLOSE_FOCUS

    def test_unwrap(self):
        """Test unwrapping an unavailable action gives the inner action."""
        action = classify_and_filter("detach-me", Interface.PIPE)

        assert action.unwrap() == Action(ActionKind.DETACH_ME)
        assert action.unwrap().unwrap() == action.unwrap()

    def test_no_nesting(self):
        """Test rejecting twice keeps a single level."""
        action = Action(ActionKind.DETACH_ME).reject(Interface.PIPE).reject(Interface.CONSOLE)

        assert action.rejected_by is Interface.CONSOLE
        assert action.unwrap() == Action(ActionKind.DETACH_ME)
