"""
Console exception handler, set as REST_FRAMEWORK['EXCEPTION_HANDLER'].

Every error leaves the console in one shape, so the front-end needs a single
rule: a response with a "type" field failed, anything else succeeded.

{
    "type":          "validation_error" | "block" | "request_error",
    "code":          "INVALID_TRANSITION",
    "message":       "Transição de 'fechado' para 'novo' não permitida.",
    "detail":        { ... },   // optional
    "notifications": [ ... ]    // toasts reported before the failure, else one generic toast
}
"""

from django.http import JsonResponse
from rest_framework.exceptions import APIException, ParseError
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler as drf_default_handler

from .exceptions import BaseAppException
from .notifications.factory import get_notifier

# toast title when nothing more specific was reported before the failure
TOAST_TITLES = {
    'validation_error': 'Dados inválidos',
    'block': 'Operação não permitida',
    'request_error': 'Erro ao processar a solicitação',
}


def _notifications(context, error_type, message) -> list[dict]:
    # build_context() hangs the request's notifier here; plain views have none
    request = (context or {}).get('request')
    notifier = getattr(request, 'notifier', None) or get_notifier()
    pending = notifier.drain()
    if pending:
        return pending
    notifier.error(TOAST_TITLES.get(error_type, 'Erro'), message)
    return notifier.drain()


def _error_response(context, *, error_type, code, message, status, detail=None):
    body = {'type': error_type, 'code': code, 'message': message}
    if detail is not None:
        body['detail'] = detail
    notifications = _notifications(context, error_type, message)
    if notifications:
        body['notifications'] = notifications
    return JsonResponse(body, status=status)


def unified_exception_handler(exc, context):
    """
    1. BaseAppException         → its own type / code / status
    2. DRF request parsing      → validation_error, 400
    3. other DRF APIExceptions  → request_error, DRF's status
    4. anything else            → DRF default (Http404, PermissionDenied) or None
    """
    if isinstance(exc, BaseAppException):
        return _error_response(
            context,
            error_type=exc.type, code=exc.code, message=exc.message,
            status=exc.http_status, detail=exc.detail,
        )

    if isinstance(exc, DRFValidationError):
        return _error_response(
            context,
            error_type='validation_error', code='VALIDATION_ERROR',
            message='Request validation failed', status=400, detail=exc.detail,
        )

    if isinstance(exc, ParseError):
        return _error_response(
            context,
            error_type='validation_error', code='INVALID_JSON',
            message=str(exc.detail), status=400,
        )

    if isinstance(exc, APIException):
        # keeps DRF's headers (Allow, WWW-Authenticate)
        response = drf_default_handler(exc, context)
        if response is not None:
            response.data = {
                'type': 'request_error',
                'code': str(exc.default_code).upper(),
                'message': str(exc.detail),
            }
        return response

    return drf_default_handler(exc, context)
