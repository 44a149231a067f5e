"""
Custom exception hierarchy for the download sorter.

Every per-file failure in the pipeline is one of these, so the run can
record it and move on to the next file.
"""


class DownloadSorterError(Exception):
    """Base exception for all download sorter errors."""
    pass


class FileHashError(DownloadSorterError):
    """Raised when a file cannot be read for hashing."""
    pass


class ImageDecodeError(DownloadSorterError):
    """Raised when an image file cannot be decoded."""
    pass


class FileOperationError(DownloadSorterError):
    """Raised when file move/delete operations fail."""
    pass


class FolderCreationError(DownloadSorterError):
    """Raised when a bucket folder cannot be created."""
    pass
