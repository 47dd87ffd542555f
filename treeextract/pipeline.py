#!/usr/bin/env python
"""
Tree Extraction Pipeline - Main orchestration module

This module coordinates the extraction workflow: format validation, parsing
of the input file, name resolution for each tree and writing each tree to its
own Newick file.
"""

import logging
import time
from collections import namedtuple

from treeextract import formats
from treeextract.errors import (
    ErrorKind,
    ExtractionError,
    TreeParsingError,
    NO_TREES_MESSAGE,
)
from treeextract.tree_parser import TreeParser, resolve_tree_name
from treeextract.tree_writer import TreeWriter

# Parameters of a single extraction run
ExtractionRequest = namedtuple(
    'ExtractionRequest',
    ['input_path', 'format_id', 'name_prefix', 'output_dir'],
    defaults=['tree', '.']
)


class ExtractionResult(namedtuple('ExtractionResult', ['written', 'error'])):
    """Outcome of an extraction run: files written and the error, if any."""
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None

    @property
    def exit_code(self):
        return 0 if self.ok else 1


class TreeExtractionPipeline:
    """Orchestrates the complete tree extraction workflow."""

    def __init__(self, config=None):
        """
        Initialize with optional configuration.

        Args:
            config (dict, optional): Configuration options for the pipeline.
                                    The 'parser' section is passed to TreeParser.
        """
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.parser = TreeParser(config=self.config.get('parser', {}))

        self.stats = {
            'start_time': None,
            'end_time': None,
            'elapsed_time': None,
            'tree_count': None,
            'written_count': None,
        }

    def extract(self, request):
        """
        Extract every tree from the request's input file.

        Args:
            request (ExtractionRequest): What to read and how to name outputs.

        Returns:
            ExtractionResult: The written paths and an ExtractionError when the
                              run stopped early. Files written before a failed
                              write are left in place.
        """
        self.stats['start_time'] = time.time()
        self.stats['tree_count'] = None
        written = []

        if not formats.is_supported(request.format_id):
            message = (f"invalid input format: {request.format_id}\n\n"
                       f"valid formats:\n{formats.describe_formats()}")
            self.logger.debug(f"Unsupported input format: {request.format_id}")
            return self._finish(written, ExtractionError(ErrorKind.CONFIGURATION, message))

        self.logger.info(f"Loading {request.format_id} trees from {request.input_path}")
        try:
            trees = self.parser.parse_from_file(request.input_path, request.format_id)
        except TreeParsingError as e:
            return self._finish(written, e.as_error())

        self.stats['tree_count'] = len(trees)
        if not trees:
            self.logger.debug(f"No trees found in {request.input_path}")
            return self._finish(written, ExtractionError(ErrorKind.NO_TREES, NO_TREES_MESSAGE))

        writer = TreeWriter(config={'output_dir': request.output_dir})

        for index, tree in enumerate(trees):
            name = resolve_tree_name(tree, request.name_prefix, index)
            try:
                written.append(writer.write_tree(tree.newick, f"{name}.tre"))
            except OSError as e:
                self.logger.debug(f"Failed to write tree {index} ({name}): {str(e)}")
                return self._finish(written, ExtractionError(ErrorKind.IO, str(e)))

            self.logger.info(f"Wrote tree {index} to {written[-1]}")

        return self._finish(written, None)

    def _finish(self, written, error):
        self.stats['end_time'] = time.time()
        self.stats['elapsed_time'] = self.stats['end_time'] - self.stats['start_time']
        self.stats['written_count'] = len(written)

        if error is None:
            self.logger.info(f"Extracted {len(written)} trees in {self.stats['elapsed_time']:.2f} seconds")

        return ExtractionResult(written=written, error=error)
