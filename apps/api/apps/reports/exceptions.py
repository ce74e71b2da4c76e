"""
Report generation errors.

ReportNotFound and ReportSinkError fail the whole generation. Subclasses of
RecoverableItemError are absorbed at the item that raised them.
"""


class ReportError(Exception):
    """Base class for report generation errors."""
    pass


class ReportNotFound(ReportError):
    """Referenced visit, patient or portfolio does not exist."""
    pass


class ReportSinkError(ReportError):
    """The output file could not be written."""
    pass


class RecoverableItemError(ReportError):
    """A single report element could not be rendered."""
    pass


class MissingAsset(RecoverableItemError):
    """Photo file missing/unreadable or signature image failed to embed."""
    pass


class MalformedData(RecoverableItemError):
    """Stored payload (e.g. annotation points) could not be parsed."""
    pass
