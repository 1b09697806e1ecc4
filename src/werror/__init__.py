"""Canonical error values for service backends.

``werror`` models a service failure as a :class:`ServiceError` carrying an HTTP
status, a stable code, a message, sub-errors and metadata, normalizes arbitrary
failure values into that model, and renders localized messages into errors.
"""

from __future__ import annotations

from werror.constants import API_VERSION, STATUS_CLIENT_CLOSED_REQUEST
from werror.core.catalog import (
    CATALOG,
    ERR_ACCOUNT_ALREADY_EXISTS,
    ERR_ALREADY_LOGGED_IN,
    ERR_AUTHENTICATION_FAILED,
    ERR_BAD_ARGUMENT,
    ERR_BAD_REQUEST,
    ERR_CLIENT_CLOSED_REQUEST,
    ERR_CONFLICT,
    ERR_ENDPOINT_NOT_FOUND,
    ERR_FORBIDDEN,
    ERR_INSUFFICIENT_ACCOUNT_PERMISSIONS,
    ERR_INTERNAL_ERROR,
    ERR_INTERNAL_SERVER_ERROR,
    ERR_INVALID_AUTHENTICATION_INFO,
    ERR_INVALID_INPUT,
    ERR_INVALID_LOGIN_CREDENTIAL,
    ERR_INVALID_OPERATION,
    ERR_METHOD_NOT_ALLOWED,
    ERR_NOT_FOUND,
    ERR_PASSWORD_TOO_WEAK,
    ERR_PAYLOAD_TOO_LARGE,
    ERR_PRECONDITION_FAILED,
    ERR_REQUEST_ENTITY_TOO_LARGE,
    ERR_REQUEST_TIMEOUT,
    ERR_RESOURCE_ALREADY_EXISTS,
    ERR_RESOURCE_NOT_FOUND,
    ERR_SERVER_BUSY,
    ERR_SERVICE_UNAVAILABLE,
    ERR_TIMEOUT,
    ERR_TOO_MANY_REQUESTS,
    ERR_UNAUTHORIZED,
    HTTP_STATUS_TO_ERR,
    err_for_status,
)
from werror.core.conversion import to_err, to_error
from werror.core.error import (
    PlainError,
    ServiceError,
    as_error,
    is_err_of,
    is_error,
    new_base_err,
    new_base_err_from,
    new_err,
    new_err_from_error,
    unwrap,
)
from werror.i18n import (
    FatalTemplateError,
    LocaleMessage,
    LocalizedError,
    LocalizedErrorTemplate,
    TemplateBodyMissingError,
    TemplateError,
    TemplateExecutionError,
    TemplateMissingError,
    TemplateSyntaxError,
    must_new_localized_err,
    must_new_localized_template,
    new_localized_err,
    new_localized_template,
)
from werror.schema.payload import ErrorPayload

__all__ = [
    "API_VERSION",
    "CATALOG",
    "ERR_ACCOUNT_ALREADY_EXISTS",
    "ERR_ALREADY_LOGGED_IN",
    "ERR_AUTHENTICATION_FAILED",
    "ERR_BAD_ARGUMENT",
    "ERR_BAD_REQUEST",
    "ERR_CLIENT_CLOSED_REQUEST",
    "ERR_CONFLICT",
    "ERR_ENDPOINT_NOT_FOUND",
    "ERR_FORBIDDEN",
    "ERR_INSUFFICIENT_ACCOUNT_PERMISSIONS",
    "ERR_INTERNAL_ERROR",
    "ERR_INTERNAL_SERVER_ERROR",
    "ERR_INVALID_AUTHENTICATION_INFO",
    "ERR_INVALID_INPUT",
    "ERR_INVALID_LOGIN_CREDENTIAL",
    "ERR_INVALID_OPERATION",
    "ERR_METHOD_NOT_ALLOWED",
    "ERR_NOT_FOUND",
    "ERR_PASSWORD_TOO_WEAK",
    "ERR_PAYLOAD_TOO_LARGE",
    "ERR_PRECONDITION_FAILED",
    "ERR_REQUEST_ENTITY_TOO_LARGE",
    "ERR_REQUEST_TIMEOUT",
    "ERR_RESOURCE_ALREADY_EXISTS",
    "ERR_RESOURCE_NOT_FOUND",
    "ERR_SERVER_BUSY",
    "ERR_SERVICE_UNAVAILABLE",
    "ERR_TIMEOUT",
    "ERR_TOO_MANY_REQUESTS",
    "ERR_UNAUTHORIZED",
    "ErrorPayload",
    "FatalTemplateError",
    "HTTP_STATUS_TO_ERR",
    "LocaleMessage",
    "LocalizedError",
    "LocalizedErrorTemplate",
    "PlainError",
    "STATUS_CLIENT_CLOSED_REQUEST",
    "ServiceError",
    "TemplateBodyMissingError",
    "TemplateError",
    "TemplateExecutionError",
    "TemplateMissingError",
    "TemplateSyntaxError",
    "as_error",
    "err_for_status",
    "is_err_of",
    "is_error",
    "must_new_localized_err",
    "must_new_localized_template",
    "new_base_err",
    "new_base_err_from",
    "new_err",
    "new_err_from_error",
    "new_localized_err",
    "new_localized_template",
    "to_err",
    "to_error",
    "unwrap",
]
