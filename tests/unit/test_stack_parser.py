"""Tests for stack line classification, splitting and frame parsing."""

import pytest

from stack_mapper.core.stack_parser import (
    SplitState,
    StackDialect,
    StackSplitter,
    clean_function_name,
    detect_dialect,
    get_whitespace,
    is_frame_line,
    parse_frame_line,
    split_stack,
)
from stack_mapper.models.stack import FrameFields


class TestIsFrameLine:
    """Tests for is_frame_line."""

    @pytest.mark.parametrize(
        "line",
        [
            "    at foo (http://localhost/bundle.js:12:5)",
            "at foo (file.js:12:5)",
            "    at http://localhost/bundle.js:12:5",
            "foo@http://localhost/bundle.js:12:5",
            "@http://localhost/bundle.js:12:5",
            "\tat new Widget (widget.js:1:2)",
        ],
    )
    def test_frame_lines(self, line: str) -> None:
        """Test that both Chromium and Firefox frames are recognized."""
        assert is_frame_line(line) is True

    @pytest.mark.parametrize(
        "line",
        [
            "Error: something went wrong",
            "AssertionError: expected 1 to equal 2",
            "",
            "    at <anonymous>",
            "see line 12 for details",
        ],
    )
    def test_message_lines(self, line: str) -> None:
        """Test that message text is not treated as a frame."""
        assert is_frame_line(line) is False

    def test_non_string_is_not_a_frame(self) -> None:
        """Test that non-string input returns False instead of raising."""
        assert is_frame_line(None) is False
        assert is_frame_line(42) is False


class TestGetWhitespace:
    """Tests for get_whitespace."""

    def test_leading_spaces(self) -> None:
        """Test that leading spaces are returned verbatim."""
        assert get_whitespace("    at foo (a.js:1:2)") == "    "

    def test_mixed_whitespace(self) -> None:
        """Test that tabs and spaces are preserved in order."""
        assert get_whitespace("\t  at foo (a.js:1:2)") == "\t  "

    def test_no_whitespace(self) -> None:
        """Test lines without indentation."""
        assert get_whitespace("Error: boom") == ""

    def test_empty_and_none(self) -> None:
        """Test empty input."""
        assert get_whitespace("") == ""
        assert get_whitespace(None) == ""


class TestSplitStack:
    """Tests for split_stack and the StackSplitter automaton."""

    def test_multi_line_message(self, chromium_stack: str) -> None:
        """Test that every line before the first frame is message text."""
        messages, frames = split_stack(chromium_stack)

        assert messages == [
            "AssertionError: Timed out retrying",
            "Expected to find element: .submit",
        ]
        assert len(frames) == 3
        assert frames[0].strip().startswith("at Context.eval")

    def test_lines_after_first_frame_stay_frames(self) -> None:
        """Test that the transition to frames is one-way."""
        stack = "Error: x\n  at foo (a.js:1:2)\nnot a frame\n  at bar (b.js:3:4)"
        messages, frames = split_stack(stack)

        assert messages == ["Error: x"]
        assert frames == ["  at foo (a.js:1:2)", "not a frame", "  at bar (b.js:3:4)"]

    def test_only_message(self) -> None:
        """Test a stack without any frame."""
        messages, frames = split_stack("Error: x\nstill the message")

        assert messages == ["Error: x", "still the message"]
        assert frames == []

    def test_only_frames(self, firefox_stack: str) -> None:
        """Test a Firefox stack, which has no message lines."""
        messages, frames = split_stack(firefox_stack)

        assert messages == []
        assert len(frames) == 3

    @pytest.mark.parametrize(
        "stack",
        [
            "",
            "Error",
            "Error: x\n\n  at foo (a.js:1:2)\n",
            "a\nb\nc\n  at foo (a.js:1:2)\nd\ne",
        ],
    )
    def test_line_count_preserved(self, stack: str) -> None:
        """Test that no line is lost or duplicated."""
        messages, frames = split_stack(stack)
        assert len(messages) + len(frames) == len(stack.split("\n"))

    def test_non_string_stack(self) -> None:
        """Test that a missing stack splits into nothing."""
        assert split_stack(None) == ([], [])

    def test_splitter_states(self) -> None:
        """Test the automaton's state transitions."""
        splitter = StackSplitter()
        assert splitter.state is SplitState.MESSAGE

        assert splitter.feed("Error: x") is SplitState.MESSAGE
        assert splitter.feed("  at foo (a.js:1:2)") is SplitState.FRAMES
        assert splitter.feed("Error: looks like a message") is SplitState.FRAMES

        assert splitter.message_lines == ["Error: x"]
        assert splitter.frame_lines == ["  at foo (a.js:1:2)", "Error: looks like a message"]


class TestCleanFunctionName:
    """Tests for clean_function_name."""

    def test_strips_wrapper_suffixes(self) -> None:
        """Test that Firefox wrapper markers are removed."""
        assert clean_function_name("Context.prototype.run/<") == "Context.prototype.run"
        assert clean_function_name("setup</<") == "setup"

    def test_plain_name_untouched(self) -> None:
        """Test that normal names are unchanged."""
        assert clean_function_name("Context.eval") == "Context.eval"

    def test_missing_name(self) -> None:
        """Test that missing names become a placeholder."""
        assert clean_function_name(None) == "<unknown>"
        assert clean_function_name("") == "<unknown>"
        assert clean_function_name(123) == "<unknown>"


class TestDetectDialect:
    """Tests for detect_dialect."""

    def test_chromium(self) -> None:
        """Test that `at` frames are Chromium frames."""
        assert detect_dialect("    at foo (a.js:1:2)") is StackDialect.CHROMIUM
        assert detect_dialect("    at a.js:1:2") is StackDialect.CHROMIUM

    def test_firefox(self) -> None:
        """Test that `@` frames are Firefox frames."""
        assert detect_dialect("foo@a.js:1:2") is StackDialect.FIREFOX
        assert detect_dialect("@a.js:1:2") is StackDialect.FIREFOX


class TestParseFrameLine:
    """Tests for parse_frame_line."""

    def test_chromium_named_frame(self) -> None:
        """Test a Chromium frame with a function name."""
        result = parse_frame_line("    at Context.eval (http://localhost/bundle.js:10:3)")

        assert result == FrameFields(
            function_name="Context.eval",
            file="http://localhost/bundle.js",
            line=10,
            column=3,
        )

    def test_chromium_anonymous_frame(self) -> None:
        """Test a Chromium frame without a function name."""
        result = parse_frame_line("    at http://localhost/bundle.js:10:3")

        assert result is not None
        assert result.function_name == "<unknown>"
        assert result.file == "http://localhost/bundle.js"
        assert (result.line, result.column) == (10, 3)

    def test_chromium_constructor_frame(self) -> None:
        """Test that `new` stays part of the function name."""
        result = parse_frame_line("    at new Widget (widget.js:4:9)")

        assert result is not None
        assert result.function_name == "new Widget"
        assert result.file == "widget.js"

    def test_chromium_async_frame(self) -> None:
        """Test that `async` stays part of the function name."""
        result = parse_frame_line("    at async runCommand (commands.js:8:1)")

        assert result is not None
        assert result.function_name == "async runCommand"

    def test_chromium_eval_frame(self) -> None:
        """Test that eval wrappers resolve to the evaluating file."""
        line = "    at eval (eval at run (http://localhost/bundle.js:5:10), <anonymous>:1:1)"
        result = parse_frame_line(line)

        assert result is not None
        assert result.function_name == "eval"
        assert result.file == "http://localhost/bundle.js"
        assert (result.line, result.column) == (5, 10)

    def test_chromium_anonymous_file(self) -> None:
        """Test that <anonymous> is not reported as a file."""
        result = parse_frame_line("    at foo (<anonymous>:1:1)")

        assert result is not None
        assert result.file is None
        assert result.function_name == "foo"

    def test_firefox_named_frame(self) -> None:
        """Test a Firefox frame with a wrapped function name."""
        result = parse_frame_line("Context.prototype.run/<@http://localhost/bundle.js:10:3")

        assert result == FrameFields(
            function_name="Context.prototype.run",
            file="http://localhost/bundle.js",
            line=10,
            column=3,
        )

    def test_firefox_anonymous_frame(self) -> None:
        """Test a Firefox frame without a function name."""
        result = parse_frame_line("@http://localhost/bundle.js:10:3")

        assert result is not None
        assert result.function_name == "<unknown>"
        assert result.file == "http://localhost/bundle.js"

    def test_firefox_indented_frame(self) -> None:
        """Test that indentation is not part of the function name."""
        result = parse_frame_line("    callFn@vendor.js:7:11")

        assert result is not None
        assert result.function_name == "callFn"

    def test_firefox_eval_frame(self) -> None:
        """Test that Firefox eval chains collapse to the evaluating line."""
        result = parse_frame_line("run@http://localhost/bundle.js line 12 > eval:1:5")

        assert result is not None
        assert result.function_name == "run"
        assert result.file == "http://localhost/bundle.js"
        assert result.line == 12
        assert result.column is None

    def test_message_line_returns_none(self) -> None:
        """Test that non-frame lines are not parsed."""
        assert parse_frame_line("Error: boom") is None
        assert parse_frame_line("") is None
