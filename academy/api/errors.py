# academy/api/errors.py
from fastapi import HTTPException, status

from academy.core.errors import (
    AcademyError, NotFoundError, InvalidRequestError, ConflictError, PermissionDeniedError, UpstreamError,
)

STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidRequestError: status.HTTP_400_BAD_REQUEST,
    ConflictError: status.HTTP_409_CONFLICT,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
    UpstreamError: status.HTTP_502_BAD_GATEWAY,
}


def to_http(exc: AcademyError) -> HTTPException:
    """Translate a domain error raised by a service into an HTTPException"""
    for error_type, code in STATUS_BY_ERROR.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(exc))
