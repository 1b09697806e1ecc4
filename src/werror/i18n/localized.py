"""Service errors rendered from localized message templates.

A :class:`LocalizedErrorTemplate` is compiled once, typically while a service
registers its message catalog at startup, and then rendered per request into
fresh :class:`LocalizedError` values. Templates are never mutated after
compilation and renders share no state, so one template may be rendered from
any number of threads.

Every fallible operation has a ``must_`` twin that turns the failure into
:class:`FatalTemplateError`. That exception derives from ``BaseException`` so
an ordinary ``except Exception`` cannot swallow a broken catalog entry.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
import logging
from typing import Any, TypeVar

from werror.core.error import ServiceError, new_err
from werror.i18n.message import LocaleMessage
from werror.i18n.template import MessageTemplate, TemplateError, compile_template

logger = logging.getLogger(__name__)

R = TypeVar("R")

MessageLike = LocaleMessage | tuple[str, str]


class TemplateBodyMissingError(TemplateError):
    """The locale message has no template text."""

    def __init__(self, message_id: str = "") -> None:
        super().__init__(f"locale message {message_id!r} has no template text")
        self.message_id = message_id


class TemplateMissingError(TemplateError):
    """Render was attempted on a definition that holds no compiled template."""

    def __init__(self) -> None:
        super().__init__("localized error template is missing")


class FatalTemplateError(BaseException):
    """Raised by the ``must_`` helpers; signals a defect in a fixed catalog."""


class LocalizedError(ServiceError):
    """A service error rendered from a locale message.

    Besides the usual fields it keeps the originating message and the exact
    data object it was rendered with, for later inspection or logging.
    """

    def __init__(
        self,
        status: int,
        code: str,
        message: str,
        *,
        locale_message: LocaleMessage,
        rendered_data: Any = None,
        cause: BaseException | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(status, code, message, cause=cause, detail=detail)
        self._locale_message = locale_message
        self._rendered_data = rendered_data

    @classmethod
    def from_error(
        cls,
        err: ServiceError,
        locale_message: LocaleMessage,
        rendered_data: Any = None,
    ) -> LocalizedError:
        return cls(
            err.status,
            err.code,
            err.message,
            locale_message=locale_message,
            rendered_data=rendered_data,
            cause=err.cause,
            detail=err._detail,
        )

    @property
    def locale_message(self) -> LocaleMessage:
        return self._locale_message

    @property
    def rendered_data(self) -> Any:
        return self._rendered_data


def _coerce_message(message: MessageLike) -> LocaleMessage:
    if isinstance(message, LocaleMessage):
        return message
    message_id, other = message
    return LocaleMessage(id=message_id, other=other)


def _metadata_for(data: Any) -> dict[str, Any] | None:
    if data is None:
        return None
    if isinstance(data, Mapping):
        return dict(data)
    return {"data": data}


class LocalizedErrorTemplate:
    """A compiled locale message bound to the base error it specializes."""

    __slots__ = ("_base", "_locale_message", "_template")

    def __init__(
        self,
        base: ServiceError,
        locale_message: LocaleMessage,
        template: MessageTemplate | None,
    ) -> None:
        self._base = base
        self._locale_message = locale_message
        self._template = template

    @property
    def base(self) -> ServiceError:
        return self._base

    @property
    def locale_message(self) -> LocaleMessage:
        return self._locale_message

    @property
    def template(self) -> MessageTemplate | None:
        return self._template

    def render(self, data: Any = None) -> LocalizedError:
        """Execute the template with ``data`` into a new :class:`LocalizedError`.

        The message id, when not blank, replaces the base code. ``data`` is
        kept as the rendered data and copied into the metadata.
        """
        if self._template is None:
            raise TemplateMissingError()
        rendered = self._template.execute(data)
        err = new_err(self._base, rendered, "")
        if self._locale_message.id.strip():
            err.code = self._locale_message.id
        localized = LocalizedError.from_error(err, self._locale_message, data)
        localized.metadata = _metadata_for(data)
        return localized

    def must_render(self, data: Any = None) -> LocalizedError:
        return _must(self.render, data)

    def __repr__(self) -> str:
        return (
            f"LocalizedErrorTemplate(base={self._base.code!r}, "
            f"id={self._locale_message.id!r})"
        )


def new_localized_template(
    base: ServiceError, message: MessageLike
) -> LocalizedErrorTemplate:
    """Compile ``message`` into a reusable template bound to ``base``.

    Raises :class:`TemplateBodyMissingError` for empty template text and
    :class:`~werror.i18n.template.TemplateSyntaxError` for malformed text.
    """
    locale_message = _coerce_message(message)
    if locale_message.other == "":
        raise TemplateBodyMissingError(locale_message.id)
    template = compile_template(
        locale_message.id,
        locale_message.other,
        locale_message.left_delim,
        locale_message.right_delim,
    )
    logger.debug(
        "Compiled localized error template %r on base %s",
        locale_message.id,
        base.code,
    )
    return LocalizedErrorTemplate(base, locale_message, template)


def must_new_localized_template(
    base: ServiceError, message: MessageLike
) -> LocalizedErrorTemplate:
    return _must(new_localized_template, base, message)


def new_localized_err(
    base: ServiceError, message: MessageLike, data: Any = None
) -> LocalizedError:
    """Render ``message`` once without keeping a compiled template around.

    Text without any action delimiter skips compilation: it becomes the
    message verbatim, and ``data`` is still recorded as the rendered data
    (the metadata is left unset).
    """
    locale_message = _coerce_message(message)
    if locale_message.other == "":
        raise TemplateBodyMissingError(locale_message.id)

    if not locale_message.is_templated:
        code = locale_message.id if locale_message.id.strip() else base.code
        logger.debug("Static localized message %r; skipping compilation", code)
        return LocalizedError(
            base.status,
            code,
            locale_message.other,
            locale_message=locale_message,
            rendered_data=data,
            cause=base,
            detail=f"{base}: {locale_message.other}",
        )

    return new_localized_template(base, locale_message).render(data)


def must_new_localized_err(
    base: ServiceError, message: MessageLike, data: Any = None
) -> LocalizedError:
    return _must(new_localized_err, base, message, data)


def _must(fn: Callable[..., R], *args: Any) -> R:
    try:
        return fn(*args)
    except TemplateError as exc:
        logger.critical("Localized error template failure: %s", exc)
        raise FatalTemplateError(str(exc)) from exc


__all__ = [
    "FatalTemplateError",
    "LocalizedError",
    "LocalizedErrorTemplate",
    "MessageLike",
    "TemplateBodyMissingError",
    "TemplateMissingError",
    "must_new_localized_err",
    "must_new_localized_template",
    "new_localized_err",
    "new_localized_template",
]
