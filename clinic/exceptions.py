"""
Error taxonomy and the project-wide DRF exception handler.

Every error leaves the API as ``{"ok": false, "error": {...}}``.
Validation problems are client errors carrying the complete list of
field violations; anything DRF does not recognise is a logged 500.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)

Violation = Dict[str, str]


class NotFound(exceptions.NotFound):
    default_code = 'not_found'

    def __init__(self, entity: str, entity_id: Any):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f'{entity} {entity_id} not found')


class ValidationFailed(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'validation failed'
    default_code = 'invalid'

    def __init__(self, violations: List[Violation], detail: Optional[str] = None):
        self.violations = list(violations)
        super().__init__(detail or self.default_detail)

    @classmethod
    def from_errors(cls, errors) -> 'ValidationFailed':
        return cls(flatten_errors(errors))


class DuplicateEntity(ValidationFailed):
    default_detail = 'duplicate entity'
    default_code = 'duplicate'


def flatten_errors(errors, prefix: str = '') -> List[Violation]:
    """Turn DRF ``serializer.errors`` into a flat list of violations.

    Nested serializer errors are reported with dotted field paths and
    non-field errors with an empty field name.
    """
    violations: List[Violation] = []
    if isinstance(errors, dict):
        for field, value in errors.items():
            name = '' if field in ('non_field_errors', 'detail') else str(field)
            path = f'{prefix}.{name}' if prefix and name else (name or prefix)
            violations.extend(flatten_errors(value, path))
    elif isinstance(errors, (list, tuple)):
        for item in errors:
            violations.extend(flatten_errors(item, prefix))
    else:
        violations.append({
            'field': prefix,
            'message': str(errors),
            'code': getattr(errors, 'code', None) or 'invalid',
        })
    return violations


def api_exception_handler(exc, context):
    if isinstance(exc, Http404):
        exc = exceptions.NotFound()
    elif isinstance(exc, exceptions.ValidationError):
        exc = ValidationFailed.from_errors(exc.detail)
    resp = drf_exception_handler(exc, context)
    if resp is None:
        request = context.get('request')
        logger.error('unhandled error on %s', getattr(request, 'path', '?'), exc_info=exc)
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    error: Dict[str, Any] = {
        'code': exc.get_codes() if isinstance(exc, exceptions.APIException) else 'api_error',
        'message': str(getattr(exc, 'detail', exc)),
    }
    if isinstance(exc, ValidationFailed):
        error['violations'] = exc.violations
    return Response({'ok': False, 'error': error}, status=resp.status_code, headers=_passthrough_headers(resp))


def _passthrough_headers(resp) -> Dict[str, str]:
    return {k: v for k, v in resp.items() if k in ('Allow', 'Retry-After', 'WWW-Authenticate')}
