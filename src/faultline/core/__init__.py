"""Faultline Core -- catalog-driven, stack-aware error values.

Manifesto:
    Glue code that talks to databases, brokers and HTTP services fails in
    many places for many reasons. ``faultline.core`` gives each failure class
    a stable identity (``DAS-1001``), keeps the stack of the original failure
    through every layer of wrapping, merges sibling failures without losing
    any, and renders the result compactly for logs or verbosely for diagnosis.

Architecture::

    Layer 1 -- Primitives
        exceptions.py      faultline's own failure modes
        stack.py           StackTrace capture (capture / from_traceback)
        template.py        Permissive printf-style binding

    Layer 2 -- Error values
        multierror.py      MultiError aggregate (absent when empty)
        errors.py          ErrorMessage node (specify / clone / renew)
        catalog.py         ErrorCatalog (register, freeze, lookup)

    Layer 3 -- Output
        formatting.py      render(err, RenderMode) + to_dict
        logging.py         structlog configuration + error_fields processor
        settings.py        FaultlineSettings (pydantic-settings)

Module Map (recommended reading order)
--------------------------------------
errors.py -> catalog.py -> multierror.py -> formatting.py
"""

from faultline.core.catalog import (
    CatalogEntry,
    EntryId,
    ErrorCatalog,
    freeze,
    get_catalog,
    lookup,
    new_error,
    prototype,
    register,
)
from faultline.core.errors import (
    ErrorKind,
    ErrorLike,
    ErrorMessage,
    StackOrigin,
    error_or_nil,
    kind_of,
)
from faultline.core.exceptions import (
    CatalogError,
    CatalogFrozenError,
    DuplicateEntryError,
    FaultlineError,
    TemplateArityError,
    UnknownEntryError,
)
from faultline.core.formatting import RenderMode, render, to_dict
from faultline.core.multierror import MultiError
from faultline.core.stack import Frame, StackTrace, capture, from_traceback, stack_of

__all__ = [
    # catalog
    "CatalogEntry",
    "EntryId",
    "ErrorCatalog",
    "freeze",
    "get_catalog",
    "lookup",
    "new_error",
    "prototype",
    "register",
    # errors
    "ErrorKind",
    "ErrorLike",
    "ErrorMessage",
    "StackOrigin",
    "error_or_nil",
    "kind_of",
    # exceptions
    "CatalogError",
    "CatalogFrozenError",
    "DuplicateEntryError",
    "FaultlineError",
    "TemplateArityError",
    "UnknownEntryError",
    # formatting
    "RenderMode",
    "render",
    "to_dict",
    # aggregation
    "MultiError",
    # stack
    "Frame",
    "StackTrace",
    "capture",
    "from_traceback",
    "stack_of",
]
