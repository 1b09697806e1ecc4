"""Localized error messages rendered from message templates."""

from __future__ import annotations

from .localized import (
    FatalTemplateError,
    LocalizedError,
    LocalizedErrorTemplate,
    TemplateBodyMissingError,
    TemplateMissingError,
    must_new_localized_err,
    must_new_localized_template,
    new_localized_err,
    new_localized_template,
)
from .message import LocaleMessage
from .template import (
    MessageTemplate,
    TemplateError,
    TemplateExecutionError,
    TemplateSyntaxError,
    compile_template,
)

__all__ = [
    "FatalTemplateError",
    "LocaleMessage",
    "LocalizedError",
    "LocalizedErrorTemplate",
    "MessageTemplate",
    "TemplateBodyMissingError",
    "TemplateError",
    "TemplateExecutionError",
    "TemplateMissingError",
    "TemplateSyntaxError",
    "compile_template",
    "must_new_localized_err",
    "must_new_localized_template",
    "new_localized_err",
    "new_localized_template",
]
