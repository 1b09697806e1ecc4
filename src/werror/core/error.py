"""The canonical service error value and the helpers that walk its cause chain.

A :class:`ServiceError` carries an HTTP status, a stable machine-readable code,
a human-readable message, optional sub-errors and metadata, and an explicit
``cause``. Two service errors are "the same kind of error" when their codes
match; message, status and cause are ignored for that comparison.

Reference: https://github.com/microsoft/api-guidelines/blob/vNext/azure/Guidelines.md#handling-errors
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
import json
from typing import Any, TypeVar

from werror.schema.payload import ErrorPayload

E = TypeVar("E", bound=BaseException)


class PlainError(Exception):
    """An opaque error that carries nothing but its text."""


class ServiceError(Exception):
    """Structured error value returned (or raised) up the call stack.

    Build instances through :func:`new_base_err`, :func:`new_base_err_from`,
    :func:`new_err` and :func:`new_err_from_error` rather than directly.

    ``status`` is fixed at construction. ``code``, ``message``, ``sub_errors``
    and ``metadata`` stay writable until :meth:`freeze` is called; catalog
    base errors are frozen. No locking is done: an instance shared across
    threads must not be mutated without external synchronization.
    """

    def __init__(
        self,
        status: int,
        code: str,
        message: str,
        *,
        cause: BaseException | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self._status = int(status)
        self._code = code
        self._message = message
        self._cause = cause
        # Rendered text of the underlying chain; ``None`` defers to the cause.
        self._detail = detail
        self._sub_errors: list[ServiceError] = []
        self._metadata: dict[str, Any] | None = None
        self._frozen = False

    def __str__(self) -> str:
        detail = self._detail if self._detail is not None else str(self._cause)
        return f"{self._status}: {detail}"

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(status={self._status!r}, "
            f"code={self._code!r}, message={self._message!r})"
        )

    @property
    def status(self) -> int:
        """HTTP status code associated with this error."""
        return self._status

    @property
    def code(self) -> str:
        return self._code

    @code.setter
    def code(self, code: str) -> None:
        self._ensure_mutable()
        self._code = code

    @property
    def message(self) -> str:
        return self._message

    @message.setter
    def message(self, message: str) -> None:
        self._ensure_mutable()
        self._message = message

    @property
    def cause(self) -> BaseException | None:
        """The error this value wraps, or ``None`` for a root error."""
        return self._cause

    @property
    def sub_errors(self) -> list[ServiceError]:
        return list(self._sub_errors)

    @sub_errors.setter
    def sub_errors(self, errs: Sequence[ServiceError]) -> None:
        self._ensure_mutable()
        self._sub_errors = list(errs)

    def add_sub_errors(self, *errs: ServiceError) -> None:
        """Append ``errs`` to the current sub-errors."""
        self._ensure_mutable()
        self._sub_errors.extend(errs)

    @property
    def metadata(self) -> dict[str, Any] | None:
        return self._metadata

    @metadata.setter
    def metadata(self, meta: Mapping[str, Any] | None) -> None:
        self._ensure_mutable()
        self._metadata = dict(meta) if meta is not None else None

    def add_metadata(self, meta: Mapping[str, Any]) -> None:
        """Merge ``meta`` into the current metadata; new keys win on collision."""
        self._ensure_mutable()
        if self._metadata is None:
            self._metadata = dict(meta)
        else:
            self._metadata.update(meta)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> ServiceError:
        """Make every setter on this instance raise ``TypeError``; returns self."""
        self._frozen = True
        return self

    def _ensure_mutable(self) -> None:
        if self._frozen:
            raise TypeError(
                f"{self._code} is a frozen base error; "
                "derive a new error with new_err()"
            )

    def matches(self, target: BaseException | None) -> bool:
        """Report whether ``target`` is the same kind of error.

        A service error target matches when its code equals ours, regardless of
        how either value was built. Any other target is looked up by identity
        along the cause chain.
        """
        if isinstance(target, ServiceError):
            return target.code == self._code
        if self._cause is None or target is None:
            return False
        return is_error(self._cause, target)

    def find(self, target_type: type[E]) -> E | None:
        """Return the first error in the cause chain that is a ``target_type``."""
        if self._cause is None:
            return None
        return as_error(self._cause, target_type)

    def to_payload(self) -> ErrorPayload:
        """Build the wire body; status is left to the transport."""
        sub_errors = [err.to_payload() for err in self._sub_errors]
        metadata = (
            {str(key): value for key, value in self._metadata.items()}
            if self._metadata
            else None
        )
        return ErrorPayload(
            code=self._code,
            message=self._message,
            sub_errors=sub_errors or None,
            metadata=metadata,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_payload().to_dict()

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(
            self.to_dict(), indent=indent, ensure_ascii=False, default=str
        )


def new_base_err(status: int, code: str, message: str) -> ServiceError:
    """Create a root error with no cause, used to seed a catalog."""
    return ServiceError(status, code, message, detail=f"{code} {message}")


def new_base_err_from(base: ServiceError, code: str, message: str) -> ServiceError:
    """Derive a more specific base error from ``base``.

    Blank ``code`` or ``message`` (whitespace counts as blank) fall back to the
    base's values. The status is always the base's, and ``base`` becomes the
    cause.
    """
    if not code.strip():
        code = base.code
    if not message.strip():
        message = base.message
    return ServiceError(
        base.status,
        code,
        message,
        cause=base,
        detail=f"{base}: {code} {message}",
    )


def new_err(base: ServiceError, message: str = "", detail: str = "") -> ServiceError:
    """Create an error of ``base``'s kind with a specific message.

    ``message`` replaces the base message unless blank; a non-blank ``detail``
    is appended after ``": "``.
    """
    message = message.strip()
    if not message:
        message = base.message
    detail = detail.strip()
    if detail:
        message = f"{message}: {detail}"
    return ServiceError(
        base.status,
        base.code,
        message,
        cause=base,
        detail=f"{base}: {message}",
    )


def new_err_from_error(base: ServiceError, err: BaseException) -> ServiceError:
    """Wrap an arbitrary error under ``base``'s status and code.

    When the chain of ``err`` already holds a service error with the same code
    and message as ``base`` that value is returned as is, so equivalent errors
    are never wrapped twice.
    """
    msg_detail = str(err)
    existing = as_error(err, ServiceError)
    if existing is not None:
        if existing.code == base.code and existing.message == base.message:
            return existing
        msg_detail = existing.message
    wrapped = ServiceError(
        base.status,
        base.code,
        f"{base.message}: {msg_detail}",
        cause=err,
    )
    wrapped.__cause__ = err
    return wrapped


def unwrap(err: BaseException | None) -> BaseException | None:
    """Return the immediate cause of ``err``."""
    if err is None:
        return None
    if isinstance(err, ServiceError):
        return err.cause
    return err.__cause__


def iter_chain(err: BaseException | None) -> Iterator[BaseException]:
    """Yield ``err`` followed by each of its causes, outermost first."""
    seen: set[int] = set()
    while err is not None and id(err) not in seen:
        seen.add(id(err))
        yield err
        err = unwrap(err)


def is_error(err: BaseException | None, target: BaseException | None) -> bool:
    """Walk the chain of ``err`` looking for ``target``.

    A node matches when it is ``target`` itself. The first service error met
    on the way decides the rest through :meth:`ServiceError.matches`.
    """
    if err is None or target is None:
        return err is target
    for node in iter_chain(err):
        if node is target:
            return True
        if isinstance(node, ServiceError):
            return node.matches(target)
    return False


def as_error(err: BaseException | None, target_type: type[E]) -> E | None:
    """Return the first error in the chain of ``err`` that is a ``target_type``."""
    for node in iter_chain(err):
        if isinstance(node, target_type):
            return node
    return None


def is_err_of(err: BaseException | None, code: str) -> bool:
    """Report whether the chain of ``err`` holds a service error with ``code``.

    Only the first service error in the chain is consulted; ``False`` when
    there is none.
    """
    found = as_error(err, ServiceError)
    return found is not None and found.code == code


__all__ = [
    "PlainError",
    "ServiceError",
    "as_error",
    "is_err_of",
    "is_error",
    "iter_chain",
    "new_base_err",
    "new_base_err_from",
    "new_err",
    "new_err_from_error",
    "unwrap",
]
