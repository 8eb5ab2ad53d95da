"""Error types raised by the labeling session and its collaborators."""

from typing import Optional


class LabelingError(Exception):
    """Base class for all labeling errors."""


class UserInputError(LabelingError):
    """
    The requested operation cannot run with the current input.

    Raised before any state is touched: no document selected, nothing
    to export, nothing to download.
    """


class CollaboratorFailure(LabelingError):
    """An external collaborator (text extraction, annotation) failed."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.cause = cause
