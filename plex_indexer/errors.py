"""
Error types for the Plex indexer.

InputError and ParseError abort the operation that raised them.
FilesystemError is raised per item while building a link farm, where the
generator reports it and moves on, and when an output file cannot be written.
"""


class IndexerError(Exception):
    """Base class for all indexer errors."""


class InputError(IndexerError):
    """The source could not be read, or the path list is empty or inconsistent."""


class ParseError(IndexerError, ValueError):
    """A tree diagram could not be parsed."""


class FilesystemError(IndexerError, OSError):
    """A destination directory, symbolic link or output file could not be written."""
