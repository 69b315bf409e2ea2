"""
Unified exception hierarchy.

Every console error inherits BaseAppException and carries:
- type:        error family (validation_error / block / request_error)
- code:        machine-readable code (INVALID_TRANSITION / UPSTREAM_ERROR / ...)
- message:     human-readable text, shown as the toast description
- detail:      optional extra payload (dict / list / None)
- http_status: HTTP status returned by the console

Services and views only raise; exception_handler formats the response.
"""


class BaseAppException(Exception):
    """Base class for every console error."""

    type = 'error'
    code = 'UNKNOWN_ERROR'
    http_status = 500

    def __init__(self, message, code=None, detail=None, http_status=None):
        self.message = message
        if code is not None:
            self.code = code
        if http_status is not None:
            self.http_status = http_status
        self.detail = detail
        super().__init__(message)


class ValidationError(BaseAppException):
    """Input rejected before any upstream request is made. 400."""

    type = 'validation_error'
    code = 'VALIDATION_ERROR'
    http_status = 400


class BlockError(BaseAppException):
    """A workflow rule refuses the operation. 409, or 404 for missing entities."""

    type = 'block'
    code = 'BUSINESS_BLOCK'
    http_status = 409


class UpstreamError(BaseAppException):
    """
    The upstream platform API failed or answered non-OK.

    message holds the server-provided text when there is one, otherwise a
    generic fallback. Client errors (4xx) keep their status; everything else
    is reported as 502.
    """

    type = 'request_error'
    code = 'UPSTREAM_ERROR'
    http_status = 502
