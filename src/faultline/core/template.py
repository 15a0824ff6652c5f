"""Positional placeholder binding for error message templates.

Templates use printf-style conversions (``%s``, ``%d``, ``%.2f`` ...) plus
``%v`` as an alias of ``%s``. Binding is permissive by default: a missing,
surplus or unconvertible argument yields a visibly malformed string instead
of an exception, so a bad call site still produces an error message::

    >>> substitute("x=%s y=%s", ("1",)).text
    'x=1 y=%!s(MISSING)'
    >>> substitute("n=%d", ("abc",)).text
    'n=%!d(str=abc)'
    >>> substitute("x=%s", ("1", 2)).text
    'x=1%!(EXTRA int=2)'

With ``strict=True`` the first problem raises ``TemplateArityError``.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from faultline.core.exceptions import TemplateArityError

_PLACEHOLDER = re.compile(
    r"%(?P<flags>[-+ #0]*)(?P<width>\d+)?(?:\.(?P<precision>\d+))?(?P<conv>[diouxXeEfFgGcrsav%])"
)


@dataclass(frozen=True)
class Substitution:
    """Result of binding arguments into a template."""

    text: str
    problems: tuple[str, ...] = field(default=())

    @property
    def malformed(self) -> bool:
        return bool(self.problems)


def _describe(arg: Any) -> str:
    return f"{type(arg).__name__}={arg}"


def substitute(template: str, args: Sequence[Any], strict: bool = False) -> Substitution:
    """Bind ``args`` positionally into ``template``."""
    parts: list[str] = []
    problems: list[str] = []
    pos = 0
    index = 0

    for match in _PLACEHOLDER.finditer(template):
        parts.append(template[pos:match.start()])
        pos = match.end()
        conv = match.group("conv")

        if conv == "%":
            parts.append("%")
            continue

        if index >= len(args):
            problems.append(f"missing argument for %{conv}")
            parts.append(f"%!{conv}(MISSING)")
            continue

        arg = args[index]
        index += 1
        spec = match.group(0)
        if conv == "v":
            spec = spec[:-1] + "s"
        try:
            parts.append(spec % (arg,))
        except (TypeError, ValueError, OverflowError):
            problems.append(f"cannot format {type(arg).__name__} with %{conv}")
            parts.append(f"%!{conv}({_describe(arg)})")

    parts.append(template[pos:])

    extra = args[index:]
    if extra:
        problems.append(f"{len(extra)} unused argument(s)")
        parts.append("%!(EXTRA " + ", ".join(_describe(arg) for arg in extra) + ")")

    if strict and problems:
        raise TemplateArityError(template, problems)

    return Substitution("".join(parts), tuple(problems))


def placeholder_count(template: str) -> int:
    """Number of argument-consuming placeholders in a template."""
    return sum(1 for m in _PLACEHOLDER.finditer(template) if m.group("conv") != "%")


__all__ = ["Substitution", "substitute", "placeholder_count"]
