"""Tests for faultline.core.stack module."""

from faultline.core.stack import (
    Frame,
    StackTrace,
    capture,
    from_traceback,
    stack_of,
)


def _outer():
    return _inner()


def _inner():
    return capture(skip=1)


def _here():
    return capture()


class TestCapture:
    """Test capture()."""

    def test_first_frame_is_caller(self):
        """skip=0 starts at the function that called capture."""
        stack = _here()
        assert stack[0].name == "_here"
        assert stack[1].name == "test_first_frame_is_caller"

    def test_skip_drops_inner_frames(self):
        stack = _outer()
        assert stack[0].name == "_outer"

    def test_limit_caps_frames(self):
        assert len(capture(limit=2)) == 2

    def test_skip_past_bottom_is_empty(self):
        """Skipping more frames than exist degrades to an empty trace."""
        stack = capture(skip=100_000)
        assert len(stack) == 0
        assert not stack

    def test_frames_carry_locations(self):
        frame = _here()[0]
        assert frame.filename.endswith("test_stack.py")
        assert frame.lineno > 0
        assert "capture()" in frame.line


class TestFromTraceback:
    """Test traceback conversion."""

    def test_innermost_first(self):
        try:
            _raise_nested()
        except RuntimeError as exc:
            stack = from_traceback(exc.__traceback__)

        names = [frame.name for frame in stack]
        assert names == ["_raise_leaf", "_raise_nested", "test_innermost_first"]

    def test_none_is_empty(self):
        assert from_traceback(None) == StackTrace()

    def test_limit(self):
        try:
            _raise_nested()
        except RuntimeError as exc:
            stack = from_traceback(exc.__traceback__, limit=1)
        assert [frame.name for frame in stack] == ["_raise_leaf"]


def _raise_nested():
    _raise_leaf()


def _raise_leaf():
    raise RuntimeError("leaf")


class TestStackOf:
    """Test stack_of() classification."""

    def test_none(self):
        assert stack_of(None) is None

    def test_unraised_exception_has_no_stack(self):
        assert stack_of(ValueError("never raised")) is None

    def test_raised_exception_exposes_traceback(self):
        try:
            raise ValueError("raised")
        except ValueError as exc:
            caught = exc

        stack = stack_of(caught)
        assert stack is not None
        assert stack[0].name == "test_raised_exception_exposes_traceback"


class TestFrameAndTrace:
    """Test value behavior of Frame and StackTrace."""

    def test_frames_compare_by_value(self):
        assert Frame("f", "a.py", 3) == Frame("f", "a.py", 3)

    def test_unknown_file_has_no_line(self):
        assert Frame("f", "<unknown>", 0).line is None

    def test_format_one_line_per_frame(self):
        stack = StackTrace((Frame("f", "a.py", 3), Frame("g", "b.py", 7)))
        assert stack.format_lines() == ["    a.py:3 in f", "    b.py:7 in g"]

    def test_to_list(self):
        stack = StackTrace((Frame("f", "a.py", 3),))
        assert stack.to_list() == [{"name": "f", "filename": "a.py", "lineno": 3}]
