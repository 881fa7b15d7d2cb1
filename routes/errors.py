"""
Mapping from content errors to HTTP responses
"""
from fastapi import HTTPException, status

from models.errors import ContentError

STATUS_BY_KIND = {
    "validation": status.HTTP_400_BAD_REQUEST,
    "unauthorized": status.HTTP_401_UNAUTHORIZED,
    "not_found": status.HTTP_404_NOT_FOUND,
    "gateway": status.HTTP_502_BAD_GATEWAY,
}


def http_error(error: ContentError) -> HTTPException:
    return HTTPException(
        status_code=STATUS_BY_KIND.get(error.kind, status.HTTP_500_INTERNAL_SERVER_ERROR),
        detail=error.message,
    )
