from __future__ import annotations

import pytest

from werror import (
    ERR_BAD_REQUEST,
    ERR_INTERNAL_SERVER_ERROR,
    ERR_NOT_FOUND,
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
from werror.core.error import iter_chain


def test_new_base_err_fields_and_text() -> None:
    err = new_base_err(418, "Teapot", "I am a teapot")
    assert err.status == 418
    assert err.code == "Teapot"
    assert err.message == "I am a teapot"
    assert err.cause is None
    assert err.sub_errors == []
    assert err.metadata is None
    assert str(err) == "418: Teapot I am a teapot"


def test_new_base_err_from_falls_back_on_blank_fields() -> None:
    derived = new_base_err_from(ERR_BAD_REQUEST, "  ", "")
    assert derived.status == 400
    assert derived.code == "BadRequest"
    assert derived.message == "Bad request"
    assert derived.cause is ERR_BAD_REQUEST


def test_new_base_err_from_overrides_code_and_message() -> None:
    derived = new_base_err_from(ERR_BAD_REQUEST, "EmailTaken", "Email already used")
    assert derived.status == ERR_BAD_REQUEST.status
    assert derived.code == "EmailTaken"
    assert derived.message == "Email already used"
    assert str(derived) == (
        "400: 400: BadRequest Bad request: EmailTaken Email already used"
    )
    assert not is_error(derived, ERR_BAD_REQUEST)


def test_new_err_message_and_detail() -> None:
    err = new_err(ERR_NOT_FOUND, "  User missing ", " id=7 ")
    assert err.code == "NotFound"
    assert err.status == 404
    assert err.message == "User missing: id=7"
    assert str(err) == "404: 404: NotFound Not found: User missing: id=7"


def test_new_err_blank_message_keeps_base_message() -> None:
    err = new_err(ERR_NOT_FOUND, "   ")
    assert err.message == "Not found"
    err = new_err(ERR_NOT_FOUND, "", "gone")
    assert err.message == "Not found: gone"


def test_new_err_is_its_base() -> None:
    err = new_err(ERR_BAD_REQUEST, "nope")
    assert is_error(err, ERR_BAD_REQUEST)
    assert err.matches(ERR_BAD_REQUEST)
    assert not is_error(err, ERR_NOT_FOUND)


def test_is_error_reflexive_for_every_kind_of_value() -> None:
    values = [
        ERR_BAD_REQUEST,
        new_err(ERR_BAD_REQUEST, "x"),
        new_base_err_from(ERR_BAD_REQUEST, "Custom", "Custom"),
        new_err_from_error(ERR_INTERNAL_SERVER_ERROR, PlainError("boom")),
    ]
    for err in values:
        assert err.matches(err)
        assert is_error(err, err)


def test_wrapping_matches_base_and_not_other_codes() -> None:
    cause = PlainError("inner detail")
    wrapped = new_err_from_error(ERR_BAD_REQUEST, cause)
    assert is_error(wrapped, ERR_BAD_REQUEST)
    assert not is_error(wrapped, ERR_INTERNAL_SERVER_ERROR)
    assert wrapped.message == "Bad request: inner detail"
    assert str(wrapped) == "400: inner detail"


def test_wrapping_finds_opaque_cause_by_identity() -> None:
    inner = PlainError("root cause")
    wrapped = new_err_from_error(ERR_INTERNAL_SERVER_ERROR, inner)
    assert is_error(wrapped, inner)
    assert not is_error(wrapped, PlainError("root cause"))
    assert wrapped.__cause__ is inner
    assert unwrap(wrapped) is inner


def test_distinct_instances_sharing_a_code_are_interchangeable() -> None:
    twin = new_base_err(400, "BadRequest", "Something else entirely")
    err = new_err(ERR_NOT_FOUND, "x")
    assert is_error(twin, ERR_BAD_REQUEST)
    assert ERR_BAD_REQUEST.matches(twin)
    assert not err.matches(twin)


def test_new_err_from_error_is_idempotent() -> None:
    assert new_err_from_error(ERR_BAD_REQUEST, ERR_BAD_REQUEST) is ERR_BAD_REQUEST

    twin = new_base_err(400, "BadRequest", "Bad request")
    outer = RuntimeError("while saving")
    outer.__cause__ = twin
    assert new_err_from_error(ERR_BAD_REQUEST, outer) is twin


def test_new_err_from_error_uses_inner_service_message() -> None:
    inner = new_err(ERR_NOT_FOUND, "User missing")
    outer = new_err_from_error(ERR_INTERNAL_SERVER_ERROR, inner)
    assert outer.code == "InternalServerError"
    assert outer.message == (
        "The server encountered an internal error, please retry the request: "
        "User missing"
    )
    assert str(outer) == f"500: {inner}"


def test_as_error_extracts_the_wrapped_cause_unchanged() -> None:
    class QuotaError(Exception):
        pass

    cause = QuotaError("quota exceeded")
    wrapped = new_err_from_error(ERR_BAD_REQUEST, cause)
    assert as_error(wrapped, QuotaError) is cause
    assert wrapped.find(QuotaError) is cause
    assert as_error(wrapped, ServiceError) is wrapped
    assert as_error(wrapped, KeyError) is None


def test_as_error_walks_native_cause_chain() -> None:
    inner = new_err(ERR_NOT_FOUND, "gone")
    try:
        try:
            raise inner
        except ServiceError as exc:
            raise RuntimeError("lookup failed") from exc
    except RuntimeError as outer:
        assert as_error(outer, ServiceError) is inner
        assert is_err_of(outer, "NotFound")


def test_is_err_of() -> None:
    assert not is_err_of(PlainError("plain"), "AnyCode")
    assert not is_err_of(None, "AnyCode")

    wrapped = RuntimeError("request failed")
    wrapped.__cause__ = new_base_err(400, "X", "x")
    assert is_err_of(wrapped, "X")
    assert not is_err_of(wrapped, "Y")

    outer = new_err_from_error(ERR_BAD_REQUEST, wrapped)
    assert is_err_of(outer, "BadRequest")
    assert not is_err_of(outer, "X")


def test_is_error_with_none() -> None:
    assert is_error(None, None)
    assert not is_error(None, ERR_BAD_REQUEST)
    assert not is_error(ERR_BAD_REQUEST, None)
    assert not ERR_BAD_REQUEST.matches(None)


def test_iter_chain_stops_on_cycles() -> None:
    first = RuntimeError("first")
    second = RuntimeError("second")
    first.__cause__ = second
    second.__cause__ = first
    assert list(iter_chain(first)) == [first, second]
    assert not is_error(first, PlainError("elsewhere"))


def test_sub_errors_and_metadata_are_mutable_on_derived_errors() -> None:
    err = new_err(ERR_BAD_REQUEST, "validation failed")
    field_err = new_err(ERR_BAD_REQUEST, "name is required")
    err.add_sub_errors(field_err)
    err.add_sub_errors(new_err(ERR_BAD_REQUEST, "age is negative"))
    assert [sub.message for sub in err.sub_errors] == [
        "name is required",
        "age is negative",
    ]

    err.metadata = {"field": "name"}
    err.add_metadata({"attempt": 2, "field": "age"})
    assert err.metadata == {"field": "age", "attempt": 2}

    err.sub_errors = []
    assert err.sub_errors == []


def test_sub_errors_getter_returns_a_copy() -> None:
    err = new_err(ERR_BAD_REQUEST)
    err.sub_errors.append(new_err(ERR_NOT_FOUND))
    assert err.sub_errors == []


def test_status_is_read_only() -> None:
    err = new_err(ERR_BAD_REQUEST)
    with pytest.raises(AttributeError):
        err.status = 500  # type: ignore[misc]


def test_catalog_bases_are_frozen() -> None:
    assert ERR_BAD_REQUEST.frozen
    with pytest.raises(TypeError):
        ERR_BAD_REQUEST.code = "Other"
    with pytest.raises(TypeError):
        ERR_BAD_REQUEST.add_metadata({"k": "v"})
    with pytest.raises(TypeError):
        ERR_BAD_REQUEST.add_sub_errors(new_err(ERR_NOT_FOUND))
    assert ERR_BAD_REQUEST.code == "BadRequest"
    assert ERR_BAD_REQUEST.metadata is None


def test_service_error_can_be_raised_and_caught() -> None:
    with pytest.raises(ServiceError) as exc_info:
        raise new_err(ERR_NOT_FOUND, "missing")
    assert is_error(exc_info.value, ERR_NOT_FOUND)


def test_repr_names_code_and_status() -> None:
    assert repr(ERR_NOT_FOUND) == (
        "ServiceError(status=404, code='NotFound', message='Not found')"
    )
