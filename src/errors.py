"""Exception hierarchy for sitecontext.

Query functions degrade to empty results instead of raising; only
template-authoring logic errors (pagination misuse) and render
discipline violations surface as exceptions.
"""


class SiteContextError(Exception):
    """Base class for all sitecontext errors."""


class PaginationError(SiteContextError):
    """Raised when a template paginates in a way the page driver cannot honour."""


class PaginationConflictError(PaginationError):
    """A template tried to paginate a second data set on its first page."""

    def __init__(self, message: str = "Can only paginate one set of data in a template.") -> None:
        super().__init__(message)


class InvalidPageSizeError(PaginationError, ValueError):
    """Page size passed to paginate() is not a positive integer."""


class ConcurrentRenderError(SiteContextError):
    """A page render started while another one was still using the same context."""
