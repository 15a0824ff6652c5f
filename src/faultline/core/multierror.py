"""Multi-error aggregation.

``MultiError`` collects independent failures (from parallel workers, from
a loop over sub-operations) into one returnable value. It keeps every
appended error in insertion order; it never deduplicates, ranks or filters
them. An empty aggregate represents "no error"::

    >>> merr = MultiError()
    >>> merr.error_or_nil() is None
    True
    >>> merr.append(ValueError("a"), ValueError("b"))
    MultiError(2 errors)
    >>> print(merr)
    a
    b

The aggregate has no internal lock. Threads appending to the same instance
must synchronize externally, or funnel results through a single writer.

Tags:
    multierror, aggregation, error-collection, faultline-core

Doc-Types:
    - API Reference
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from faultline.core.stack import StackTrace, TracedError, stack_of

if TYPE_CHECKING:
    from faultline.core.errors import ErrorLike


class MultiError(TracedError):
    """Ordered collection of error values, absent when empty."""

    def __init__(self, *errors: ErrorLike | None):
        super().__init__()
        self.children: list[ErrorLike] = []
        self.append(*errors)

    def append(self, *errors: ErrorLike | None) -> MultiError:
        """Append errors in order. ``None`` means "no error" and is skipped."""
        for err in errors:
            if err is None:
                continue
            if not isinstance(err, BaseException):
                raise TypeError(f"cannot append {type(err).__name__} to MultiError")
            self.children.append(err)
        return self

    def wrapped_errors(self) -> list[ErrorLike]:
        """Snapshot of the children, in insertion order."""
        return list(self.children)

    def error_or_nil(self) -> MultiError | None:
        if not self.children:
            return None
        return self

    def stack_trace(self) -> StackTrace | None:
        """Stack of the first child that exposes one."""
        for child in self.children:
            stack = stack_of(child)
            if stack is not None:
                return stack
        return None

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[ErrorLike]:
        return iter(list(self.children))

    def __bool__(self) -> bool:
        # exceptions are truthy; use len() or error_or_nil() for emptiness
        return True

    def to_dict(self, include_stack: bool = False) -> dict[str, Any]:
        from faultline.core.formatting import to_dict

        return to_dict(self, include_stack=include_stack)

    def __str__(self) -> str:
        from faultline.core.formatting import RenderMode, render

        return render(self, RenderMode.COMPACT)

    def __format__(self, format_spec: str) -> str:
        from faultline.core.formatting import RenderMode, render

        return render(self, RenderMode.from_format_spec(format_spec))

    def __repr__(self) -> str:
        noun = "error" if len(self.children) == 1 else "errors"
        return f"{self.__class__.__name__}({len(self.children)} {noun})"


__all__ = ["MultiError"]
