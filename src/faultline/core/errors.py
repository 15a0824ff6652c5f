"""
Catalog-bound error values.

``ErrorMessage`` is the error node of faultline: a single message bound to a
``(header, code)`` identity, optionally wrapping another error, always
carrying a stack trace. It is a regular ``Exception`` and can be raised,
returned, wrapped or collected into a ``MultiError``.

Manifesto:
    - **Identity over prose:** ``DAS-1001`` is what alerts and dashboards key on
    - **One stack per failure:** Wrapping reuses the wrapped error's stack
    - **Prototypes are read-only:** Derive with ``renew``/``clone``, never mutate
    - **Never swallow:** A wrapped error always surfaces in rendering

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                        ErrorMessage                          │
        ├──────────────────────────────────────────────────────────────┤
        │  header: str            err_code: int                        │
        │  template: str          message: str  (rendered)             │
        │  wrapped: ErrorLike | None                                   │
        │  stack: StackTrace      stack_origin: CAPTURED | INHERITED   │
        ├──────────────────────────────────────────────────────────────┤
        │  specify(*args) -> self     clone() -> ErrorMessage          │
        │  renew(*args) -> ErrorMessage                                │
        │  error_or_nil()   code   stack_trace()                       │
        └──────────────────────────────────────────────────────────────┘

        ErrorLike = ErrorMessage | MultiError | BaseException
                      (NODE)       (AGGREGATE)  (PRIMITIVE)

Examples:
    Binding values into a template:

    >>> err = ErrorMessage("DAS", 1001, "failed to connect to %s: %s")
    >>> str(err.specify("db1", "timeout"))
    'DAS-1001: failed to connect to db1: timeout'

    Reusing one prototype from many call sites:

    >>> proto = ErrorMessage("DAS", 1002, "x=%s")
    >>> a, b = proto.renew("1"), proto.renew("2")
    >>> a.message, b.message, proto.message
    ('x=1', 'x=2', 'x=%s')

    Wrapping a raised exception keeps its stack:

    >>> try:
    ...     raise ConnectionError("refused")
    ... except ConnectionError as exc:
    ...     err = ErrorMessage("DAS", 1001, "connect failed", exc)
    >>> err.stack_origin
    <StackOrigin.INHERITED: 'inherited'>

Guardrails:
    ❌ DON'T: Call ``specify`` on a shared prototype
    ✅ DO: ``proto.renew(...)`` to get a private copy

    ❌ DON'T: Make a node wrap itself or an ancestor
    ✅ DO: Keep chains finite; rendering assumes a tree

Tags:
    error-node, error-chaining, stack-trace, templates, faultline-core

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Union

from faultline.core.logging import get_logger
from faultline.core.multierror import MultiError
from faultline.core.settings import get_settings
from faultline.core.stack import StackTrace, TracedError, capture, stack_of
from faultline.core.template import substitute

logger = get_logger(__name__)


class StackOrigin(str, Enum):
    """Where a node's stack came from."""

    CAPTURED = "captured"  # leaf: captured at construction
    INHERITED = "inherited"  # wrapper: taken verbatim from the wrapped error


class ErrorKind(str, Enum):
    """Closed classification of anything that can sit in an error chain."""

    PRIMITIVE = "primitive"
    NODE = "node"
    AGGREGATE = "aggregate"


class ErrorMessage(TracedError):
    """A catalog-bound error with a rendered message and a stack trace."""

    def __init__(
        self,
        header: str,
        code: int,
        template: str,
        wrapped: ErrorLike | None = None,
        *,
        stack_skip: int = 0,
    ):
        if wrapped is not None and not isinstance(wrapped, BaseException):
            raise TypeError(f"cannot wrap {type(wrapped).__name__} in ErrorMessage")

        inherited = stack_of(wrapped)
        if inherited is not None:
            stack, origin = inherited, StackOrigin.INHERITED
        else:
            # 1 drops this __init__ frame
            stack = capture(skip=1 + stack_skip, limit=get_settings().stack_limit)
            origin = StackOrigin.CAPTURED

        self._init_parts(header, code, template, template, wrapped, stack, origin)

    def _init_parts(
        self,
        header: str,
        code: int,
        template: str,
        message: str,
        wrapped: ErrorLike | None,
        stack: StackTrace,
        origin: StackOrigin,
    ) -> None:
        super().__init__(message)
        self.header = header
        self.err_code = code
        self.template = template
        self.message = message
        self.wrapped = wrapped
        self._stack = stack
        self._stack_origin = origin
        if isinstance(wrapped, BaseException):
            self.__cause__ = wrapped

    @property
    def stack(self) -> StackTrace:
        return self._stack

    @property
    def stack_origin(self) -> StackOrigin:
        return self._stack_origin

    @property
    def code(self) -> str:
        """Combined identity, e.g. ``DAS-1001``."""
        return f"{self.header}-{self.err_code}"

    @property
    def is_absent(self) -> bool:
        return self.header == "" and self.err_code == 0

    def specify(self, *args: Any, strict: bool | None = None) -> ErrorMessage:
        """Bind ``args`` into the template, in place. Returns self.

        A placeholder/argument mismatch renders a malformed message (see
        ``faultline.core.template``) unless ``strict`` is set, either here or
        through the ``strict_specify`` setting.
        """
        if strict is None:
            strict = get_settings().strict_specify

        result = substitute(self.template, args, strict=strict)
        if result.malformed:
            logger.warning(
                "error_template_mismatch",
                code=self.code,
                template=self.template,
                problems=list(result.problems),
            )

        self.message = result.text
        self.args = (self.message,)
        return self

    def clone(self) -> ErrorMessage:
        """Independent copy sharing the stack and the wrapped reference."""
        return _rebuild(type(self), *self._parts())

    def _parts(self) -> tuple:
        return (
            self.header,
            self.err_code,
            self.template,
            self.message,
            self.wrapped,
            self._stack,
            self._stack_origin,
        )

    def __reduce__(self):
        # args holds only the rendered message, not the constructor signature
        return (_rebuild, (type(self), *self._parts()))

    def renew(self, *args: Any, strict: bool | None = None) -> ErrorMessage:
        """``clone()`` then ``specify(*args)``; the prototype is only read."""
        return self.clone().specify(*args, strict=strict)

    def error_or_nil(self) -> ErrorMessage | None:
        """None when the node carries no identity, else self."""
        if self.is_absent:
            return None
        return self

    def stack_trace(self) -> StackTrace:
        if isinstance(self.wrapped, MultiError):
            delegated = self.wrapped.stack_trace()
            if delegated is not None:
                return delegated
        return self._stack

    def unwrap(self) -> ErrorLike | None:
        return self.wrapped

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
        return f"{self.__class__.__name__}({self.code!r}, {self.message!r})"


ErrorLike = Union[ErrorMessage, MultiError, BaseException]


def _rebuild(
    cls: type[ErrorMessage],
    header: str,
    code: int,
    template: str,
    message: str,
    wrapped: ErrorLike | None,
    stack: StackTrace,
    origin: StackOrigin,
) -> ErrorMessage:
    """Restore a node without capturing a new stack (copy, pickle, clone)."""
    err = cls.__new__(cls)
    err._init_parts(header, code, template, message, wrapped, stack, origin)
    return err


def kind_of(err: ErrorLike) -> ErrorKind:
    """Classify an error value; anything that is not an exception is rejected."""
    if isinstance(err, ErrorMessage):
        return ErrorKind.NODE
    if isinstance(err, MultiError):
        return ErrorKind.AGGREGATE
    if isinstance(err, BaseException):
        return ErrorKind.PRIMITIVE
    raise TypeError(f"not an error value: {type(err).__name__}")


def error_or_nil(err: ErrorLike | None) -> ErrorLike | None:
    """Collapse ``err`` to None when it represents no error."""
    if err is None:
        return None
    if isinstance(err, (ErrorMessage, MultiError)):
        return err.error_or_nil()
    return err


__all__ = [
    "ErrorMessage",
    "ErrorLike",
    "ErrorKind",
    "StackOrigin",
    "kind_of",
    "error_or_nil",
]
