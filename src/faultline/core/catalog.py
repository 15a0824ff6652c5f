"""Error catalog: the registry of ``(header, code) -> template`` entries.

Manifesto:
    Every distinguishable failure class gets one stable identity. Entries are
    registered while the process initializes, then the catalog is frozen and
    becomes a read-only table that any thread may read without locking.

Lifecycle:
    ::

        init phase (single thread)          serving phase (any thread)
        ───────────────────────────         ──────────────────────────
        register("DAS", 1001, "...")  ──►   lookup("DAS", 1001)
        register("DAS", 1002, "...")        new("DAS", 1001, wrapped=exc)
        freeze()                            prototype("DAS", 1001).renew(...)

    - duplicate ``(header, code)``    -> DuplicateEntryError
    - register after ``freeze()``     -> CatalogFrozenError
    - lookup of an unknown pair       -> UnknownEntryError

Examples:
    >>> catalog = ErrorCatalog()
    >>> catalog.register("DAS", 1001, "failed to connect to %s: %s")
    ('DAS', 1001)
    >>> catalog.freeze()
    >>> str(catalog.new("DAS", 1001).specify("db1", "timeout"))
    'DAS-1001: failed to connect to db1: timeout'

Tags:
    catalog, registry, error-codes, faultline-core

Doc-Types:
    - API Reference
"""

from __future__ import annotations

import threading
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from faultline.core.errors import ErrorLike, ErrorMessage
from faultline.core.exceptions import (
    CatalogFrozenError,
    DuplicateEntryError,
    UnknownEntryError,
)
from faultline.core.logging import get_logger

logger = get_logger(__name__)

EntryId = tuple[str, int]


@dataclass(frozen=True)
class CatalogEntry:
    """One registered error class."""

    header: str
    code: int
    template: str

    @property
    def id(self) -> EntryId:
        return (self.header, self.code)

    @property
    def code_string(self) -> str:
        return f"{self.header}-{self.code}"

    def new(self, wrapped: ErrorLike | None = None, *, stack_skip: int = 0) -> ErrorMessage:
        """Instantiate an unspecified node bound to this entry."""
        return ErrorMessage(
            self.header, self.code, self.template, wrapped, stack_skip=1 + stack_skip
        )

    def renew(self, *args: Any, wrapped: ErrorLike | None = None) -> ErrorMessage:
        """New node with ``args`` bound into the template."""
        return self.new(wrapped, stack_skip=1).specify(*args)

    def wrap(self, err: ErrorLike, *args: Any) -> ErrorMessage:
        """Attach this entry's identity to an error produced elsewhere."""
        return self.new(err, stack_skip=1).specify(*args)


class ErrorCatalog:
    """Write-once-then-read-only table of catalog entries."""

    def __init__(self) -> None:
        self._entries: Mapping[EntryId, CatalogEntry] = {}
        self._prototypes: dict[EntryId, ErrorMessage] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, header: str, code: int, template: str) -> EntryId:
        """Register an entry. Duplicates and late registrations are rejected."""
        entry = CatalogEntry(header, code, template)
        with self._lock:
            if self._frozen:
                raise CatalogFrozenError(
                    f"cannot register {entry.code_string}: catalog is frozen"
                )
            existing = self._entries.get(entry.id)
            if existing is not None:
                raise DuplicateEntryError(header, code, existing.template)
            self._entries[entry.id] = entry

        logger.debug("error_entry_registered", code=entry.code_string, template=template)
        return entry.id

    def freeze(self) -> None:
        """Close the initialization phase. Idempotent."""
        with self._lock:
            if self._frozen:
                return
            self._entries = MappingProxyType(dict(self._entries))
            self._frozen = True

        logger.info("error_catalog_frozen", entries=len(self._entries))

    def lookup(self, header: str, code: int) -> CatalogEntry:
        try:
            return self._entries[(header, code)]
        except KeyError:
            raise UnknownEntryError(header, code) from None

    def new(
        self,
        header: str,
        code: int,
        wrapped: ErrorLike | None = None,
        *,
        stack_skip: int = 0,
    ) -> ErrorMessage:
        """Instantiate a node for a registered entry."""
        return self.lookup(header, code).new(wrapped, stack_skip=1 + stack_skip)

    def prototype(self, header: str, code: int, *, stack_skip: int = 0) -> ErrorMessage:
        """Shared read-only node for an entry; derive copies with ``renew``."""
        key = (header, code)
        proto = self._prototypes.get(key)
        if proto is None:
            entry = self.lookup(header, code)
            with self._lock:
                proto = self._prototypes.get(key)
                if proto is None:
                    proto = entry.new(stack_skip=1 + stack_skip)
                    self._prototypes[key] = proto
        return proto

    def entries(self) -> list[CatalogEntry]:
        """Entries in registration order."""
        return list(self._entries.values())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self.entries())


# Process-wide catalog
_default_catalog = ErrorCatalog()


def get_catalog() -> ErrorCatalog:
    return _default_catalog


def register(header: str, code: int, template: str) -> EntryId:
    return _default_catalog.register(header, code, template)


def lookup(header: str, code: int) -> CatalogEntry:
    return _default_catalog.lookup(header, code)


def freeze() -> None:
    _default_catalog.freeze()


def new_error(header: str, code: int, wrapped: ErrorLike | None = None) -> ErrorMessage:
    """Instantiate a node from the process-wide catalog."""
    return _default_catalog.new(header, code, wrapped, stack_skip=1)


def prototype(header: str, code: int) -> ErrorMessage:
    return _default_catalog.prototype(header, code, stack_skip=1)


def reset_default_catalog() -> None:
    """Replace the process-wide catalog with an empty one (for testing)."""
    global _default_catalog
    _default_catalog = ErrorCatalog()


__all__ = [
    "CatalogEntry",
    "EntryId",
    "ErrorCatalog",
    "get_catalog",
    "register",
    "lookup",
    "freeze",
    "new_error",
    "prototype",
    "reset_default_catalog",
]
