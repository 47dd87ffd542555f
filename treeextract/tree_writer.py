#!/usr/bin/env python
"""
Tree Writer Module - Writes single Newick trees to disk
"""

import os
import errno
import logging


class TreeWriter:
    """Writes one Newick string per file, terminated with a semicolon."""

    def __init__(self, config=None):
        """
        Initialize the writer.

        Args:
            config (dict, optional): Configuration options. 'output_dir' sets the
                                    directory relative filenames are written to.
        """
        self.config = config or {}
        self.output_dir = self.config.get('output_dir', '.')
        self.logger = logging.getLogger(__name__)

    def write_tree(self, newick, filename):
        """
        Write a Newick string followed by ';' to a file.

        Existing files are truncated. No newline is appended.

        Args:
            newick (str): Newick text without the statement terminator.
            filename (str): Output file name, relative to the output directory.

        Returns:
            str: Path of the written file.

        Raises:
            OSError: If the file cannot be created or written, or if the
                     filename names a file outside the output directory.
        """
        # File names are plain names inside the output directory
        if os.path.basename(filename) != filename or (os.altsep and os.altsep in filename):
            raise OSError(errno.EINVAL, "tree file name must not contain a directory", filename)

        # Ensure output directory exists
        if self.output_dir and not os.path.exists(self.output_dir):
            os.makedirs(self.output_dir)

        output_path = os.path.join(self.output_dir, filename)
        with open(output_path, 'w') as out:
            out.write(newick)
            out.write(';')

        self.logger.debug(f"Tree written to {output_path}")
        return output_path
