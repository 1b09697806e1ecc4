"""Total conversions from arbitrary values into the error model.

Neither function raises. Values whose shape is not understood collapse into
the generic internal-server-error so raw internals never reach a response body;
the original value survives only on the cause chain, for logging.
"""

from __future__ import annotations

import logging
from numbers import Number
from typing import Any

from werror.core.catalog import ERR_INTERNAL_SERVER_ERROR
from werror.core.error import PlainError, ServiceError, new_err_from_error

logger = logging.getLogger(__name__)


def is_stringable(value: Any) -> bool:
    """Report whether ``value`` renders itself as text on purpose.

    Objects whose class defines its own ``__str__`` qualify. Plain strings,
    numbers, bytes and containers only carry a value and do not; a ``str``
    subclass counts only when it overrides ``__str__`` itself.
    """
    if isinstance(value, str):
        return type(value).__str__ is not str.__str__
    if isinstance(value, (Number, bytes, bytearray)):
        return False
    return type(value).__str__ is not object.__str__


def to_error(value: Any) -> BaseException | None:
    """Convert any value into an exception.

    ``None`` stays ``None`` and exceptions pass through unchanged. An object
    whose class defines ``__str__`` becomes a :class:`PlainError` carrying its
    text. Anything else, plain strings included, is replaced by the
    internal-server-error base.
    """
    if value is None:
        return None
    if isinstance(value, BaseException):
        return value
    if is_stringable(value):
        return PlainError(str(value))
    logger.debug(
        "Collapsing unrecognized %s into %s",
        type(value).__name__,
        ERR_INTERNAL_SERVER_ERROR.code,
    )
    return ERR_INTERNAL_SERVER_ERROR


def to_err(value: Any) -> ServiceError | None:
    """Convert any value into a :class:`ServiceError`.

    Service errors pass through unchanged. Other exceptions, and any other
    value once rendered as a :class:`PlainError`, are wrapped under the
    internal-server-error base.
    """
    if value is None:
        return None
    if isinstance(value, ServiceError):
        return value
    err = value if isinstance(value, BaseException) else PlainError(str(value))
    logger.debug(
        "Wrapping %s under %s", type(value).__name__, ERR_INTERNAL_SERVER_ERROR.code
    )
    return new_err_from_error(ERR_INTERNAL_SERVER_ERROR, err)


__all__ = ["is_stringable", "to_err", "to_error"]
