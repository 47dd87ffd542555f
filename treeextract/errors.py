#!/usr/bin/env python
"""
Errors Module - Error kinds reported by the tree extraction workflow

Every failure of an extraction run is classified into one of a closed set of
kinds. The parsing adapter raises TreeParsingError; the pipeline hands
ExtractionError values back to its caller instead of raising.
"""

from collections import namedtuple
from enum import Enum


class ErrorKind(Enum):
    """Kinds of failure that terminate an extraction run."""
    CONFIGURATION = "configuration"
    PARSE = "parse"
    NO_TREES = "no-trees"
    IO = "io"
    UNKNOWN = "unknown"


# A failure returned by the pipeline
ExtractionError = namedtuple('ExtractionError', ['kind', 'message'])

NO_TREES_MESSAGE = "the file was parsed successfully, but no trees were found"
UNKNOWN_PARSE_MESSAGE = "unknown error during parsing"


class TreeParsingError(Exception):
    """Raised by the parsing adapter when an input cannot be decoded."""

    def __init__(self, kind, message):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def as_error(self):
        """Return the failure as an ExtractionError value."""
        return ExtractionError(self.kind, self.message)
