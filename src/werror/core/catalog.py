"""Predefined base errors and the HTTP status lookup table.

The catalog is built once by :func:`build_catalog` at import time. Every entry
is frozen, so the module-level constants can be shared by any number of
threads and only ever serve as bases for new errors.

References:
https://docs.microsoft.com/en-us/rest/api/storageservices/common-rest-api-error-codes
https://docs.azure.cn/en-us/cdn/cdn-api-get-endpoint
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from http import HTTPStatus
from types import MappingProxyType

from werror.constants import STATUS_CLIENT_CLOSED_REQUEST
from werror.core.error import ServiceError, new_base_err


@dataclass(frozen=True)
class BaseErrorSpec:
    """Static description of one catalog entry."""

    status: int
    code: str
    message: str


BASE_ERROR_SPECS: tuple[BaseErrorSpec, ...] = (
    BaseErrorSpec(HTTPStatus.BAD_REQUEST, "BadRequest", "Bad request"),
    BaseErrorSpec(HTTPStatus.BAD_REQUEST, "BadArgument", "Bad argument"),
    BaseErrorSpec(
        HTTPStatus.BAD_REQUEST, "InvalidInput", "Some request inputs are not valid"
    ),
    BaseErrorSpec(
        HTTPStatus.BAD_REQUEST,
        "InvalidOperation",
        "The attempted operation is invalid",
    ),
    BaseErrorSpec(
        HTTPStatus.BAD_REQUEST,
        "PasswordTooWeak",
        "The specified password is too weak",
    ),
    BaseErrorSpec(HTTPStatus.UNAUTHORIZED, "Unauthorized", "Unauthorized"),
    BaseErrorSpec(
        HTTPStatus.UNAUTHORIZED,
        "InvalidLoginCredential",
        "The login credential is invalid",
    ),
    BaseErrorSpec(
        HTTPStatus.UNAUTHORIZED,
        "AlreadyLoggedIn",
        "User already logged in in another place",
    ),
    BaseErrorSpec(
        HTTPStatus.UNAUTHORIZED,
        "InvalidAuthenticationInfo",
        "The authentication information is invalid",
    ),
    BaseErrorSpec(HTTPStatus.FORBIDDEN, "Forbidden", "Forbidden"),
    BaseErrorSpec(
        HTTPStatus.FORBIDDEN,
        "AuthenticationFailed",
        "Server failed to authenticate the request. "
        "Make sure the authentication information is correct",
    ),
    BaseErrorSpec(
        HTTPStatus.FORBIDDEN,
        "InsufficientAccountPermissions",
        "The account being accessed does not have sufficient permissions "
        "to execute this operation",
    ),
    BaseErrorSpec(HTTPStatus.NOT_FOUND, "NotFound", "Not found"),
    BaseErrorSpec(
        HTTPStatus.NOT_FOUND,
        "EndpointNotFound",
        "The requested endpoint does not exist",
    ),
    BaseErrorSpec(
        HTTPStatus.NOT_FOUND,
        "ResourceNotFound",
        "The specified resource does not exist",
    ),
    BaseErrorSpec(
        HTTPStatus.METHOD_NOT_ALLOWED, "MethodNotAllowed", "Method not allowed"
    ),
    BaseErrorSpec(HTTPStatus.REQUEST_TIMEOUT, "Timeout", "Timeout"),
    BaseErrorSpec(HTTPStatus.REQUEST_TIMEOUT, "RequestTimeout", "Request timeout"),
    BaseErrorSpec(HTTPStatus.CONFLICT, "Conflict", "Conflict"),
    BaseErrorSpec(
        HTTPStatus.CONFLICT,
        "ResourceAlreadyExists",
        "The specified resource already exists",
    ),
    BaseErrorSpec(
        HTTPStatus.CONFLICT,
        "AccountAlreadyExists",
        "The specified account already exists",
    ),
    BaseErrorSpec(
        HTTPStatus.PRECONDITION_FAILED, "PreconditionFailed", "Precondition failed"
    ),
    BaseErrorSpec(
        HTTPStatus.REQUEST_ENTITY_TOO_LARGE, "PayloadTooLarge", "Payload too large"
    ),
    BaseErrorSpec(
        HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
        "RequestEntityTooLarge",
        "Request entity too large",
    ),
    BaseErrorSpec(
        HTTPStatus.TOO_MANY_REQUESTS, "TooManyRequests", "Too many requests"
    ),
    BaseErrorSpec(
        STATUS_CLIENT_CLOSED_REQUEST, "ClientClosedRequest", "Client closed request"
    ),
    BaseErrorSpec(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "InternalError",
        "The system encountered an internal error",
    ),
    BaseErrorSpec(
        HTTPStatus.INTERNAL_SERVER_ERROR,
        "InternalServerError",
        "The server encountered an internal error, please retry the request",
    ),
    BaseErrorSpec(
        HTTPStatus.SERVICE_UNAVAILABLE, "ServiceUnavailable", "Service unavailable"
    ),
    BaseErrorSpec(
        HTTPStatus.SERVICE_UNAVAILABLE,
        "ServerBusy",
        "The server is currently unable to receive requests. "
        "Please retry your request",
    ),
)

STATUS_REPRESENTATIVES: Mapping[int, str] = MappingProxyType(
    {
        HTTPStatus.BAD_REQUEST: "BadRequest",
        HTTPStatus.UNAUTHORIZED: "Unauthorized",
        HTTPStatus.FORBIDDEN: "Forbidden",
        HTTPStatus.NOT_FOUND: "NotFound",
        HTTPStatus.METHOD_NOT_ALLOWED: "MethodNotAllowed",
        HTTPStatus.REQUEST_TIMEOUT: "RequestTimeout",
        HTTPStatus.CONFLICT: "Conflict",
        HTTPStatus.PRECONDITION_FAILED: "PreconditionFailed",
        HTTPStatus.REQUEST_ENTITY_TOO_LARGE: "RequestEntityTooLarge",
        HTTPStatus.TOO_MANY_REQUESTS: "TooManyRequests",
        HTTPStatus.INTERNAL_SERVER_ERROR: "InternalServerError",
        HTTPStatus.SERVICE_UNAVAILABLE: "ServiceUnavailable",
    }
)


@dataclass(frozen=True)
class ErrorCatalog:
    """Read-only registry of frozen base errors."""

    by_code: Mapping[str, ServiceError]
    by_status: Mapping[int, ServiceError]

    def __getitem__(self, code: str) -> ServiceError:
        return self.by_code[code]

    def __contains__(self, code: object) -> bool:
        return code in self.by_code

    def __iter__(self) -> Iterator[ServiceError]:
        return iter(self.by_code.values())

    def __len__(self) -> int:
        return len(self.by_code)

    def get(self, code: str) -> ServiceError | None:
        return self.by_code.get(code)

    def for_status(self, status: int) -> ServiceError | None:
        """Representative base error for an HTTP status, if one is registered."""
        return self.by_status.get(int(status))


def build_catalog(
    specs: Iterable[BaseErrorSpec] = BASE_ERROR_SPECS,
    representatives: Mapping[int, str] = STATUS_REPRESENTATIVES,
) -> ErrorCatalog:
    """Construct and freeze every base error described by ``specs``."""
    by_code: dict[str, ServiceError] = {}
    for spec in specs:
        if spec.code in by_code:
            raise ValueError(f"Duplicate base error code: {spec.code}")
        by_code[spec.code] = new_base_err(spec.status, spec.code, spec.message).freeze()

    by_status: dict[int, ServiceError] = {}
    for status, code in representatives.items():
        if code not in by_code:
            raise ValueError(f"Status {int(status)} maps to unknown code: {code}")
        by_status[int(status)] = by_code[code]

    return ErrorCatalog(
        by_code=MappingProxyType(by_code),
        by_status=MappingProxyType(by_status),
    )


CATALOG = build_catalog()

ERR_BAD_REQUEST = CATALOG["BadRequest"]
ERR_BAD_ARGUMENT = CATALOG["BadArgument"]
ERR_INVALID_INPUT = CATALOG["InvalidInput"]
ERR_INVALID_OPERATION = CATALOG["InvalidOperation"]
ERR_PASSWORD_TOO_WEAK = CATALOG["PasswordTooWeak"]
ERR_UNAUTHORIZED = CATALOG["Unauthorized"]
ERR_INVALID_LOGIN_CREDENTIAL = CATALOG["InvalidLoginCredential"]
ERR_ALREADY_LOGGED_IN = CATALOG["AlreadyLoggedIn"]
ERR_INVALID_AUTHENTICATION_INFO = CATALOG["InvalidAuthenticationInfo"]
ERR_FORBIDDEN = CATALOG["Forbidden"]
ERR_AUTHENTICATION_FAILED = CATALOG["AuthenticationFailed"]
ERR_INSUFFICIENT_ACCOUNT_PERMISSIONS = CATALOG["InsufficientAccountPermissions"]
ERR_NOT_FOUND = CATALOG["NotFound"]
ERR_ENDPOINT_NOT_FOUND = CATALOG["EndpointNotFound"]
ERR_RESOURCE_NOT_FOUND = CATALOG["ResourceNotFound"]
ERR_METHOD_NOT_ALLOWED = CATALOG["MethodNotAllowed"]
ERR_TIMEOUT = CATALOG["Timeout"]
ERR_REQUEST_TIMEOUT = CATALOG["RequestTimeout"]
ERR_CONFLICT = CATALOG["Conflict"]
ERR_RESOURCE_ALREADY_EXISTS = CATALOG["ResourceAlreadyExists"]
ERR_ACCOUNT_ALREADY_EXISTS = CATALOG["AccountAlreadyExists"]
ERR_PRECONDITION_FAILED = CATALOG["PreconditionFailed"]
ERR_PAYLOAD_TOO_LARGE = CATALOG["PayloadTooLarge"]
ERR_REQUEST_ENTITY_TOO_LARGE = CATALOG["RequestEntityTooLarge"]
ERR_TOO_MANY_REQUESTS = CATALOG["TooManyRequests"]
ERR_CLIENT_CLOSED_REQUEST = CATALOG["ClientClosedRequest"]
ERR_INTERNAL_ERROR = CATALOG["InternalError"]
ERR_INTERNAL_SERVER_ERROR = CATALOG["InternalServerError"]
ERR_SERVICE_UNAVAILABLE = CATALOG["ServiceUnavailable"]
ERR_SERVER_BUSY = CATALOG["ServerBusy"]

HTTP_STATUS_TO_ERR: Mapping[int, ServiceError] = CATALOG.by_status


def err_for_status(
    status: int, default: ServiceError | None = None
) -> ServiceError | None:
    """Look up the representative base error for ``status``."""
    return CATALOG.by_status.get(int(status), default)
