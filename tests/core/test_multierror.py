"""Tests for faultline.core.multierror module."""

import pytest

from faultline.core.errors import ErrorMessage
from faultline.core.multierror import MultiError


class TestCollection:
    """Append, length and ordering."""

    def test_empty_is_absent(self):
        merr = MultiError()
        assert len(merr) == 0
        assert merr.error_or_nil() is None

    def test_append_preserves_order(self):
        a, b, c = ValueError("a"), KeyError("b"), OSError("c")
        merr = MultiError()
        merr.append(a)
        merr.append(b, c)
        assert merr.wrapped_errors() == [a, b, c]
        assert list(merr) == [a, b, c]
        assert merr.error_or_nil() is merr

    def test_constructor_appends(self):
        a = ValueError("a")
        assert MultiError(a).wrapped_errors() == [a]

    def test_none_is_skipped(self):
        merr = MultiError(None)
        merr.append(None, ValueError("x"), None)
        assert len(merr) == 1

    def test_duplicates_are_kept(self):
        err = ValueError("same")
        merr = MultiError(err, err)
        assert len(merr) == 2

    def test_non_error_rejected(self):
        with pytest.raises(TypeError):
            MultiError().append("oops")

    def test_wrapped_errors_is_a_copy(self):
        merr = MultiError(ValueError("a"))
        merr.wrapped_errors().clear()
        assert len(merr) == 1

    def test_nested_aggregate_is_one_child(self):
        inner = MultiError(ValueError("a"), ValueError("b"))
        outer = MultiError(inner)
        assert len(outer) == 1

    def test_append_returns_self(self):
        merr = MultiError()
        assert merr.append(ValueError("a")) is merr

    def test_repr(self):
        assert repr(MultiError(ValueError("a"))) == "MultiError(1 error)"
        assert repr(MultiError()) == "MultiError(0 errors)"


class TestAbsenceIsIndependent:
    """Identity absence and aggregate emptiness are separate invariants."""

    def test_absent_node_still_counts(self):
        absent = ErrorMessage("", 0, "")
        merr = MultiError()
        merr.append(absent)

        assert absent.error_or_nil() is None
        assert len(merr) == 1
        assert merr.error_or_nil() is merr


class TestStackDelegation:
    """stack_trace() follows the first stack-bearing child."""

    def test_empty_has_no_stack(self):
        assert MultiError().stack_trace() is None

    def test_first_node_child(self):
        first = ErrorMessage("A", 1, "first")
        second = ErrorMessage("A", 2, "second")
        assert MultiError(first, second).stack_trace() is first.stack

    def test_skips_children_without_stack(self):
        node = ErrorMessage("A", 1, "node")
        merr = MultiError(ValueError("never raised"), node)
        assert merr.stack_trace() is node.stack

    def test_raised_primitive_child(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError as exc:
            caught = exc
        stack = MultiError(caught).stack_trace()
        assert stack[0].name == "test_raised_primitive_child"


class TestRendering:
    """String conversion."""

    def test_three_nodes_three_lines(self):
        merr = MultiError(
            ErrorMessage("A", 1, "one"),
            ErrorMessage("A", 2, "two"),
            ErrorMessage("A", 3, "three"),
        )
        assert str(merr) == "A-1: one\nA-2: two\nA-3: three"

    def test_empty_renders_empty(self):
        assert str(MultiError()) == ""

    def test_can_be_raised(self):
        with pytest.raises(MultiError) as exc_info:
            raise MultiError(ValueError("a"))
        assert len(exc_info.value) == 1

    def test_always_truthy(self):
        assert MultiError()
