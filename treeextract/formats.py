#!/usr/bin/env python
"""
Formats Module - Catalog of supported input formats

The catalog is the set of schema names the tree parser can decode. Format
identifiers are matched exactly; no case folding or aliasing is applied.
"""

from treeextract.tree_parser import TreeParser

_FORMATS = frozenset(TreeParser.SCHEMA_KWARGS)


def list_formats():
    """Return all format identifiers the tree parser can decode."""
    return _FORMATS


def is_supported(format_id):
    """Check whether a format identifier is in the catalog."""
    return isinstance(format_id, str) and format_id in _FORMATS


def describe_formats():
    """Return the format identifiers sorted, one tab-indented name per line."""
    return "\n".join(f"\t{name}" for name in sorted(_FORMATS))
