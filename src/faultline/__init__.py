"""
Faultline - structured, catalog-driven error values.

- faultline.core: error nodes, aggregates, catalog, rendering
"""

__version__ = "0.1.0"

from faultline.core import *  # noqa
