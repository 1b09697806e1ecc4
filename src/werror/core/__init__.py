"""Error value model, conversions, and the predefined base-error catalog."""

from __future__ import annotations

from .catalog import (
    CATALOG,
    HTTP_STATUS_TO_ERR,
    BaseErrorSpec,
    ErrorCatalog,
    build_catalog,
    err_for_status,
)
from .conversion import to_err, to_error
from .error import (
    PlainError,
    ServiceError,
    as_error,
    is_err_of,
    is_error,
    iter_chain,
    new_base_err,
    new_base_err_from,
    new_err,
    new_err_from_error,
    unwrap,
)

__all__ = [
    "BaseErrorSpec",
    "CATALOG",
    "ErrorCatalog",
    "HTTP_STATUS_TO_ERR",
    "PlainError",
    "ServiceError",
    "as_error",
    "build_catalog",
    "err_for_status",
    "is_err_of",
    "is_error",
    "iter_chain",
    "new_base_err",
    "new_base_err_from",
    "new_err",
    "new_err_from_error",
    "to_err",
    "to_error",
    "unwrap",
]
