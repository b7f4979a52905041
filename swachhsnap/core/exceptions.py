"""Domain errors raised below the HTTP layer."""


class SwachhSnapError(Exception):
    """Base class for domain errors."""


class InvalidTransition(SwachhSnapError):
    """A complaint lifecycle precondition was not met."""


class MediaUploadError(SwachhSnapError):
    """An image could not be uploaded; no URL was produced."""
