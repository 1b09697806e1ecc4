"""Invariant: public modules expose only their __all__ via star import."""

from __future__ import annotations

import importlib

PUBLIC_MODULES = {
    "werror.config": (
        "BuildModeReport",
        "build_mode_from_flags",
        "build_mode_from_variable",
        "detect_build_mode",
        "load_environment",
        "log_level_from_env",
    ),
    "werror.i18n": (
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
    ),
    "werror.schema": ("ErrorPayload", "TypedBaseModel"),
}


def _star_imported(module_name: str) -> set[str]:
    namespace: dict[str, object] = {"__builtins__": __builtins__}
    exec(f"from {module_name} import *", namespace)
    namespace.pop("__builtins__", None)
    return set(namespace.keys())


def test_public_star_imports_match_all() -> None:
    for module_name, expected in PUBLIC_MODULES.items():
        module = importlib.import_module(module_name)
        exports = tuple(getattr(module, "__all__", ()))
        assert exports == expected, (
            f"{module_name} __all__ changed: expected {expected}, got {exports}"
        )
        assert _star_imported(module_name) == set(expected), (
            f"{module_name} star import drifted from __all__"
        )


def test_facade_star_import_matches_all() -> None:
    for module_name in ("werror", "werror.core"):
        module = importlib.import_module(module_name)
        exports = tuple(module.__all__)
        assert len(exports) == len(set(exports)), f"{module_name} repeats names"
        assert _star_imported(module_name) == set(exports)
        for name in exports:
            assert hasattr(module, name), f"{name} missing from {module_name}"
