from __future__ import annotations

import logging

from werror import (
    ERR_INTERNAL_SERVER_ERROR,
    ERR_NOT_FOUND,
    PlainError,
    ServiceError,
    as_error,
    is_error,
    new_err,
    to_err,
    to_error,
)
from werror.core.conversion import is_stringable


class _Ticket:
    def __init__(self, number: int) -> None:
        self.number = number

    def __str__(self) -> str:
        return f"ticket #{self.number}"


class _Opaque:
    pass


class _Label(str):
    def __str__(self) -> str:
        return f"label:{str.__str__(self)}"


def test_none_stays_none() -> None:
    assert to_error(None) is None
    assert to_err(None) is None


def test_to_error_passes_exceptions_through() -> None:
    exc = ValueError("bad value")
    assert to_error(exc) is exc
    assert to_error(ERR_NOT_FOUND) is ERR_NOT_FOUND


def test_to_error_wraps_stringable_values() -> None:
    err = to_error(_Label("disk"))
    assert isinstance(err, PlainError)
    assert str(err) == "label:disk"

    err = to_error(_Ticket(12))
    assert isinstance(err, PlainError)
    assert str(err) == "ticket #12"


def test_to_error_collapses_unrecognized_values(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="werror.core.conversion"):
        for value in (42, 3.5, b"raw", _Opaque(), object()):
            err = to_error(value)
            assert isinstance(err, ServiceError)
            assert err.code == ERR_INTERNAL_SERVER_ERROR.code
            assert is_error(err, ERR_INTERNAL_SERVER_ERROR)
    assert "Collapsing unrecognized int" in caplog.text


def test_to_error_collapses_plain_strings(caplog) -> None:
    with caplog.at_level(logging.DEBUG, logger="werror.core.conversion"):
        for value in ("disk full", ""):
            err = to_error(value)
            assert err is ERR_INTERNAL_SERVER_ERROR
            assert "disk full" not in str(err)
    assert "Collapsing unrecognized str" in caplog.text


def test_is_stringable() -> None:
    assert not is_stringable("")
    assert not is_stringable("text")
    assert is_stringable(_Label("x"))
    assert is_stringable(_Ticket(1))
    assert is_stringable(PlainError("x"))
    assert not is_stringable(7)
    assert not is_stringable(True)
    assert not is_stringable(bytearray(b"x"))
    assert not is_stringable(_Opaque())


def test_to_err_passes_service_errors_through() -> None:
    err = new_err(ERR_NOT_FOUND, "missing")
    assert to_err(err) is err


def test_to_err_wraps_exceptions_as_internal_errors() -> None:
    cause = ValueError("bad value")
    err = to_err(cause)
    assert err is not None
    assert err.code == "InternalServerError"
    assert err.status == 500
    assert err.message == (
        "The server encountered an internal error, please retry the request: "
        "bad value"
    )
    assert as_error(err, ValueError) is cause
    assert is_error(err, cause)


def test_to_err_wraps_plain_values() -> None:
    cases = (("timeout", "timeout"), (404, "404"), (_Ticket(3), "ticket #3"))
    for value, text in cases:
        err = to_err(value)
        assert err is not None
        assert is_error(err, ERR_INTERNAL_SERVER_ERROR)
        inner = as_error(err, PlainError)
        assert inner is not None
        assert str(inner) == text
        assert str(err) == f"500: {text}"


def test_to_err_keeps_internal_server_errors_unwrapped() -> None:
    assert to_err(ERR_INTERNAL_SERVER_ERROR) is ERR_INTERNAL_SERVER_ERROR
    collapsed = to_error(_Opaque())
    assert to_err(collapsed) is ERR_INTERNAL_SERVER_ERROR
