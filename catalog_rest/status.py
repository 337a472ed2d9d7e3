"""HTTP status codes returned by the catalog endpoints."""

from enum import IntEnum


class StatusCode(IntEnum):
    """Status codes the adapter and error translation layer emit."""

    # Success 2xx
    OK = 200
    CREATED = 201
    NO_CONTENT = 204

    # Client error 4xx
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    UNPROCESSABLE_ENTITY = 422

    # Server error 5xx
    INTERNAL_SERVER_ERROR = 500
