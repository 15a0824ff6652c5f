"""Faultline's own failure modes.

These are the errors raised by the machinery itself (catalog misuse,
strict template binding), as opposed to the ``ErrorMessage`` values the
machinery produces for callers.

Tags:
    exceptions, catalog, programmer-error, faultline-core

Doc-Types:
    - API Reference
"""

from __future__ import annotations


class FaultlineError(Exception):
    """Base exception for all faultline internal errors."""


class CatalogError(FaultlineError):
    """Catalog misuse."""


class DuplicateEntryError(CatalogError):
    """A ``(header, code)`` pair was registered twice."""

    def __init__(self, header: str, code: int, existing: str):
        super().__init__(
            f"error entry {header}-{code} is already registered "
            f"with template {existing!r}"
        )
        self.header = header
        self.code = code


class UnknownEntryError(CatalogError, LookupError):
    """Lookup of a ``(header, code)`` pair that was never registered."""

    def __init__(self, header: str, code: int):
        super().__init__(f"error entry {header}-{code} is not registered")
        self.header = header
        self.code = code


class CatalogFrozenError(CatalogError):
    """Registration attempted after the initialization phase closed."""


class TemplateArityError(FaultlineError, ValueError):
    """Strict binding found placeholders and arguments that do not line up."""

    def __init__(self, template: str, problems: list[str]):
        super().__init__(
            f"cannot bind arguments into {template!r}: {'; '.join(problems)}"
        )
        self.template = template
        self.problems = problems


__all__ = [
    "FaultlineError",
    "CatalogError",
    "DuplicateEntryError",
    "UnknownEntryError",
    "CatalogFrozenError",
    "TemplateArityError",
]
