#!/usr/bin/env python
"""
Tree Parser Module - Parses multi-tree files into Newick records

This module wraps the DendroPy readers for every supported tree file format
and turns each tree found in the input into a TreeRecord holding the tree
name and its Newick representation.
"""

import logging
from xml.etree.ElementTree import ParseError as XmlParseError
from collections import namedtuple

import dendropy
from dendropy.utility.error import DataParseError

from treeextract.errors import ErrorKind, TreeParsingError, UNKNOWN_PARSE_MESSAGE

# One parsed tree: optional source name and Newick text without the terminator
TreeRecord = namedtuple('TreeRecord', ['name', 'newick'])

# Reader settings shared by the Newick and Nexus grammars
_NEXUS_FAMILY_KWARGS = {
    'preserve_underscores': True,
    'suppress_internal_node_taxa': True,
    'suppress_leaf_node_taxa': False,
    'case_sensitive_taxon_labels': False,
}


def resolve_tree_name(record, prefix, index):
    """
    Return the output name for the tree at a given position.

    Named trees keep their own name; unnamed ones are called
    ``{prefix}_{index}`` using the tree's position in the source file.
    """
    if record.name:
        return record.name
    return f"{prefix}_{index}"


class TreeParser:
    """Parses tree files of any supported format into TreeRecord lists."""

    # Schemas this parser can decode, with the reader arguments for each
    SCHEMA_KWARGS = {
        'newick': _NEXUS_FAMILY_KWARGS,
        'nexus': _NEXUS_FAMILY_KWARGS,
        'nexus/newick': _NEXUS_FAMILY_KWARGS,
        'nexml': {},
    }

    # Schemas for which an empty or whitespace-only source holds zero trees
    BLANK_MEANS_EMPTY = frozenset(['newick', 'nexus/newick'])

    def __init__(self, config=None):
        """
        Initialize the tree parser.

        Args:
            config (dict, optional): Configuration dictionary. Can include
                                    'schema' (extra reader arguments for the
                                    Newick and Nexus grammars) and
                                    'suppress_rooting' (bool, default True).
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.suppress_rooting = self.config.get('suppress_rooting', True)
        self.logger.debug(f"Tree parser initialized with suppress_rooting={self.suppress_rooting}")

    def parse_from_file(self, filepath, format_id):
        """
        Parse every tree in a file.

        Args:
            filepath (str): Path to the tree file.
            format_id (str): Schema name of the file's format.

        Returns:
            list: TreeRecord objects in source order.

        Raises:
            TreeParsingError: If the file cannot be opened or parsed.
        """
        self.logger.info(f"Parsing {format_id} trees from file: {filepath}")

        try:
            stream = open(filepath, 'r')
        except OSError as e:
            self.logger.debug(f"Failed to open tree file: {str(e)}")
            raise TreeParsingError(ErrorKind.IO, str(e)) from e

        with stream:
            return self.parse(stream, format_id)

    def parse_from_string(self, data, format_id):
        """
        Parse every tree in a string.

        Args:
            data (str): Tree file contents.
            format_id (str): Schema name of the data's format.

        Returns:
            list: TreeRecord objects in source order.
        """
        self.logger.info(f"Parsing {format_id} trees from string")
        self._check_format(format_id)
        return self._read_trees(format_id, data)

    def parse(self, stream, format_id):
        """
        Parse every tree in an open text stream.

        Args:
            stream: File-like object positioned at the start of the data.
            format_id (str): Schema name of the data's format.

        Returns:
            list: TreeRecord objects in source order.

        Raises:
            TreeParsingError: If the data cannot be decoded. The error kind is
                              PARSE for grammar errors, IO for other failures
                              with a message and UNKNOWN for anything else.
        """
        self._check_format(format_id)
        try:
            data = stream.read()
        except Exception as e:
            raise self._failure(format_id, e) from e

        return self._read_trees(format_id, data)

    def _check_format(self, format_id):
        if format_id not in self.SCHEMA_KWARGS:
            raise TreeParsingError(
                ErrorKind.CONFIGURATION,
                f"unsupported tree format: {format_id}"
            )

    def _read_trees(self, format_id, data):
        # A blank Newick source is a valid file holding no tree statements
        if format_id in self.BLANK_MEANS_EMPTY and not data.strip():
            self.logger.info("Parsed 0 trees")
            return []

        try:
            tree_list = dendropy.TreeList.get(
                data=data,
                schema=format_id,
                **self._get_schema_kwargs(format_id)
            )
            records = [self._to_record(tree) for tree in tree_list]
        except Exception as e:
            raise self._failure(format_id, e) from e

        self.logger.info(f"Parsed {len(records)} trees")
        return records

    def _failure(self, format_id, error):
        """Classify an exception raised while reading or decoding data."""
        message = str(error)

        if isinstance(error, (DataParseError, XmlParseError)):
            self.logger.debug(f"Failed to parse {format_id} data: {message}")
            return TreeParsingError(ErrorKind.PARSE, message)

        if not message:
            self.logger.debug(f"Failed to parse {format_id} data: {type(error).__name__}")
            return TreeParsingError(ErrorKind.UNKNOWN, UNKNOWN_PARSE_MESSAGE)

        self.logger.debug(f"Failed to read {format_id} data: {message}")
        return TreeParsingError(ErrorKind.IO, message)

    def _get_schema_kwargs(self, format_id):
        """
        Get the reader keyword arguments for a schema.

        Returns:
            dict: Schema-specific keyword arguments.
        """
        schema_kwargs = dict(self.SCHEMA_KWARGS[format_id])

        # NeXML carries its own labels, so the Newick/Nexus settings do not apply
        if format_id != 'nexml' and 'schema' in self.config:
            schema_kwargs.update(self.config['schema'])

        return schema_kwargs

    def _to_record(self, tree):
        """Convert a DendroPy tree into a TreeRecord."""
        newick = tree.as_string(
            schema='newick',
            suppress_rooting=self.suppress_rooting,
            unquoted_underscores=True,
        ).strip()
        if newick.endswith(';'):
            newick = newick[:-1].rstrip()

        self.logger.debug(f"Tree '{tree.label or ''}' has {len(tree.leaf_nodes())} tips")
        return TreeRecord(name=tree.label, newick=newick)
