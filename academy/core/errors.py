# academy/core/errors.py
"""Domain exceptions raised by services and mapped to HTTP statuses by routers."""


class AcademyError(Exception):
    """Base class for all academy domain errors"""


class NotFoundError(AcademyError):
    pass


class InvalidRequestError(AcademyError, ValueError):
    pass


class ConflictError(AcademyError):
    pass


class PermissionDeniedError(AcademyError):
    pass


class UpstreamError(AcademyError):
    """The language model was unreachable or answered with something unusable"""
