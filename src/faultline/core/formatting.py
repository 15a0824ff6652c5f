"""
Rendering of error values to text and to JSON-ready structures.

One function, ``render``, turns any error value into text. The output shape
is chosen by an explicit ``RenderMode``; ``str()`` and ``format()`` on
faultline values go through the same function.

Manifesto:
    - **Compact for logs and clients:** one line per node
    - **Verbose for diagnosis:** the full tree with stack frames
    - **Inherited stacks print once:** a wrapper whose stack came from the
      wrapped error defers to it

Architecture:
    ::

        render(err, mode)
           │
           ├─ COMPACT         "DAS-1001: failed to connect to db1: timeout"
           │                  "\\n" + compact(wrapped) when wrapped
           │
           ├─ COMPACT_QUOTED  "\\"DAS-1001: failed ...\\""
           │
           └─ VERBOSE         DAS-1002: query failed
                              DAS-1001: failed to connect to db1: timeout
                                  app/db.py:41 in connect
                                  app/main.py:12 in main

        kind_of(err):  NODE ─────── header line, wrapped, own stack if CAPTURED
                       AGGREGATE ── every child, in order
                       PRIMITIVE ── str(err), traceback if raised

Format specs accepted by ``format(err, spec)`` / f-strings:

    ==========  ===============
    spec        mode
    ==========  ===============
    ""/s/v      COMPACT
    q           COMPACT_QUOTED
    +v / +      VERBOSE
    ==========  ===============

Guardrails:
    ❌ DON'T: Build error chains with cycles
    ✅ DO: Treat rendering input as a finite tree (not checked at render time)

Tags:
    formatting, rendering, stack-trace, serialization, faultline-core

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from faultline.core.errors import ErrorKind, ErrorLike, ErrorMessage, StackOrigin, kind_of
from faultline.core.stack import stack_of


class RenderMode(str, Enum):
    """Text output modes."""

    COMPACT = "compact"
    COMPACT_QUOTED = "compact_quoted"
    VERBOSE = "verbose"

    @classmethod
    def from_format_spec(cls, spec: str) -> RenderMode:
        try:
            return _FORMAT_SPECS[spec]
        except KeyError:
            raise ValueError(f"unsupported format spec for error value: {spec!r}") from None


_FORMAT_SPECS = {
    "": RenderMode.COMPACT,
    "s": RenderMode.COMPACT,
    "v": RenderMode.COMPACT,
    "q": RenderMode.COMPACT_QUOTED,
    "+v": RenderMode.VERBOSE,
    "+": RenderMode.VERBOSE,
}


def render(err: ErrorLike, mode: RenderMode = RenderMode.COMPACT) -> str:
    """Render an error value in the given mode."""
    if mode is RenderMode.COMPACT:
        return _compact(err)
    if mode is RenderMode.COMPACT_QUOTED:
        return json.dumps(_compact(err), ensure_ascii=False)
    if mode is RenderMode.VERBOSE:
        lines: list[str] = []
        _verbose(err, lines)
        return "\n".join(lines)
    raise ValueError(f"unknown render mode: {mode!r}")


def _primitive_text(err: BaseException) -> str:
    return str(err) or type(err).__name__


def _header_line(node: ErrorMessage) -> str:
    return f"{node.code}: {node.message}"


def _compact(err: ErrorLike) -> str:
    kind = kind_of(err)
    if kind is ErrorKind.NODE:
        text = _header_line(err)
        if err.wrapped is not None:
            text += "\n" + _compact(err.wrapped)
        return text
    if kind is ErrorKind.AGGREGATE:
        return "\n".join(_compact(child) for child in err.children)
    return _primitive_text(err)


def _verbose(err: ErrorLike, lines: list[str]) -> None:
    kind = kind_of(err)
    if kind is ErrorKind.NODE:
        lines.append(_header_line(err))
        if err.wrapped is not None:
            _verbose(err.wrapped, lines)
        if err.stack_origin is StackOrigin.CAPTURED:
            lines.extend(err.stack.format_lines())
    elif kind is ErrorKind.AGGREGATE:
        for child in err.children:
            _verbose(child, lines)
    else:
        lines.append(_primitive_text(err))
        stack = stack_of(err)
        if stack is not None:
            lines.extend(stack.format_lines())


def to_dict(err: ErrorLike, include_stack: bool = False) -> dict[str, Any]:
    """JSON-ready structure for API responses and structured logs."""
    kind = kind_of(err)
    if kind is ErrorKind.NODE:
        result: dict[str, Any] = {
            "code": err.code,
            "header": err.header,
            "err_code": err.err_code,
            "message": err.message,
        }
        if err.wrapped is not None:
            result["wrapped"] = to_dict(err.wrapped, include_stack=include_stack)
        if include_stack and err.stack_origin is StackOrigin.CAPTURED:
            result["stack"] = err.stack.to_list()
        return result

    if kind is ErrorKind.AGGREGATE:
        return {
            "errors": [to_dict(child, include_stack=include_stack) for child in err.children],
        }

    result = {"type": type(err).__name__, "message": str(err)}
    if include_stack:
        stack = stack_of(err)
        if stack is not None:
            result["stack"] = stack.to_list()
    return result


__all__ = ["RenderMode", "render", "to_dict"]
