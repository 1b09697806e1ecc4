"""Compiler and executor for ``{{ }}`` message templates.

Localized message catalogs write placeholders as ``{{.Name}}``. This module
implements the subset of that action language such messages use:

- ``{{.}}``, ``{{.Field}}``, ``{{.Field.Sub}}``, ``{{$}}``, ``{{$.Field}}``
- string (``"..."`` or raw ````...````), number, ``true`` and ``false`` literals
- ``{{if X}}...{{else if Y}}...{{else}}...{{end}}`` and ``{{with X}}...{{end}}``
- comments ``{{/* ... */}}`` and the ``{{- `` / `` -}}`` whitespace trim markers

A template is parsed once by :func:`compile_template` and is immutable
afterwards; :meth:`MessageTemplate.execute` keeps all state on its own stack,
so one compiled template can be executed from many threads at once.
"""

from __future__ import annotations

import ast
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
import re
from typing import Any, Union

from werror.constants import DEFAULT_LEFT_DELIM, DEFAULT_RIGHT_DELIM, NO_VALUE


class TemplateError(Exception):
    """Base class for every template failure."""


class TemplateSyntaxError(TemplateError):
    """The template text could not be parsed."""

    def __init__(self, name: str, line: int, reason: str) -> None:
        super().__init__(f"template: {name}:{line}: {reason}")
        self.name = name
        self.line = line
        self.reason = reason


class TemplateExecutionError(TemplateError):
    """The template failed while being executed against some data."""


@dataclass(frozen=True)
class FieldExpr:
    from_root: bool
    path: tuple[str, ...]

    def __str__(self) -> str:
        prefix = "$" if self.from_root else ""
        if not self.path:
            return prefix or "."
        return prefix + "".join(f".{name}" for name in self.path)


@dataclass(frozen=True)
class LiteralExpr:
    value: Any

    def __str__(self) -> str:
        return repr(self.value)


Expr = Union[FieldExpr, LiteralExpr]


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class ActionNode:
    expr: Expr
    line: int


@dataclass(frozen=True)
class BranchNode:
    """``if`` or ``with`` block; ``with`` rebinds dot inside its body."""

    keyword: str
    expr: Expr
    body: tuple[Node, ...]
    else_body: tuple[Node, ...]
    line: int


Node = Union[TextNode, ActionNode, BranchNode]


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    value: Any = None


@dataclass(frozen=True)
class _Action:
    tokens: tuple[_Token, ...]
    line: int


_TOKEN_RE = re.compile(
    r"""
    (?P<space>\s+)
  | (?P<string>"(?:[^"\\\n]|\\.)*")
  | (?P<raw>`[^`]*`)
  | (?P<root>\$(?:\.[A-Za-z_][A-Za-z0-9_]*)*)
  | (?P<field>(?:\.[A-Za-z_][A-Za-z0-9_]*)+)
  | (?P<number>[-+]?(?:\d+\.\d*|\.\d+|\d+)(?:[eE][-+]?\d+)?)
  | (?P<dot>\.)
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
    """,
    re.VERBOSE,
)

_BLOCK_KEYWORDS = frozenset({"if", "with"})
_UNSUPPORTED_KEYWORDS = frozenset(
    {"range", "define", "template", "block", "break", "continue"}
)


def _tokenize(body: str, name: str, line: int) -> tuple[_Token, ...]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(body):
        match = _TOKEN_RE.match(body, pos)
        if match is None:
            raise TemplateSyntaxError(
                name, line, f"unexpected {body[pos]!r} in command"
            )
        kind = match.lastgroup or ""
        text = match.group()
        pos = match.end()
        if kind == "space":
            continue
        if kind == "string":
            try:
                value: Any = ast.literal_eval(text)
            except (SyntaxError, ValueError):
                raise TemplateSyntaxError(
                    name, line, f"invalid syntax in string {text}"
                ) from None
            tokens.append(_Token("literal", text, value))
        elif kind == "raw":
            tokens.append(_Token("literal", text, text[1:-1]))
        elif kind == "number":
            value = float(text) if any(c in text for c in ".eE") else int(text)
            tokens.append(_Token("literal", text, value))
        else:
            tokens.append(_Token(kind, text))
    return tuple(tokens)


def _find_action_end(source: str, start: int, right: str) -> int:
    """Index of the closing delimiter, skipping over quoted strings."""
    pos = start
    quote: str | None = None
    while pos < len(source):
        char = source[pos]
        if quote is not None:
            if char == "\\" and quote == '"':
                pos += 2
                continue
            if char == quote:
                quote = None
            elif char == "\n" and quote == '"':
                return -1
        elif char in ('"', "`"):
            quote = char
        elif source.startswith(right, pos):
            return pos
        pos += 1
    return -1


def _lex(
    source: str, name: str, left: str, right: str
) -> list[str | _Action]:
    """Split ``source`` into literal text and parsed actions."""
    items: list[str | _Action] = []
    pos = 0
    while True:
        start = source.find(left, pos)
        if start < 0:
            if pos < len(source):
                items.append(source[pos:])
            return items
        text = source[pos:start]
        line = source.count("\n", 0, start) + 1
        inner = start + len(left)
        if source.startswith("-", inner) and source[inner + 1 : inner + 2].isspace():
            text = text.rstrip()
            inner += 1
        if text:
            items.append(text)

        stripped = inner
        while stripped < len(source) and source[stripped].isspace():
            stripped += 1
        if source.startswith("/*", stripped):
            close = source.find("*/", stripped + 2)
            if close < 0:
                raise TemplateSyntaxError(name, line, "unclosed comment")
            end = _skip_space(source, close + 2)
            trim_right = False
            if source.startswith("-", end):
                trim_right = True
                end += 1
            if not source.startswith(right, end):
                raise TemplateSyntaxError(
                    name, line, "comment ends before closing delimiter"
                )
            body = None
        else:
            end = _find_action_end(source, inner, right)
            if end < 0:
                raise TemplateSyntaxError(name, line, "unclosed action")
            body = source[inner:end]
            trim_right = len(body) > 1 and body.endswith("-") and body[-2].isspace()
            if trim_right:
                body = body[:-1]

        pos = end + len(right)
        if trim_right:
            pos = _skip_space(source, pos)
        if body is not None:
            tokens = _tokenize(body, name, line)
            if not tokens:
                raise TemplateSyntaxError(name, line, "missing value for command")
            items.append(_Action(tokens, line))


def _skip_space(source: str, pos: int) -> int:
    while pos < len(source) and source[pos].isspace():
        pos += 1
    return pos


class _Parser:
    def __init__(self, items: Sequence[str | _Action], name: str) -> None:
        self._items = items
        self._name = name
        self._pos = 0

    def parse(self) -> tuple[Node, ...]:
        nodes, terminator = self._parse_list()
        if terminator is not None:
            keyword = terminator.tokens[0].text
            raise TemplateSyntaxError(
                self._name, terminator.line, f"unexpected {{{{{keyword}}}}}"
            )
        return nodes

    def _parse_list(self) -> tuple[tuple[Node, ...], _Action | None]:
        """Parse nodes until an ``else``/``end`` action or the end of input."""
        nodes: list[Node] = []
        while self._pos < len(self._items):
            item = self._items[self._pos]
            self._pos += 1
            if isinstance(item, str):
                nodes.append(TextNode(item))
                continue
            head = item.tokens[0]
            if head.kind == "ident" and head.text in ("else", "end"):
                return tuple(nodes), item
            if head.kind == "ident" and head.text in _BLOCK_KEYWORDS:
                nodes.append(self._parse_branch(head.text, item.tokens[1:], item.line))
                continue
            nodes.append(ActionNode(self._operand(item.tokens, item.line), item.line))
        return tuple(nodes), None

    def _parse_branch(
        self, keyword: str, tokens: Sequence[_Token], line: int
    ) -> BranchNode:
        if not tokens:
            raise TemplateSyntaxError(
                self._name, line, f"missing value for {keyword}"
            )
        expr = self._operand(tokens, line)
        body, terminator = self._parse_list()
        if terminator is None:
            raise TemplateSyntaxError(self._name, line, "unexpected EOF")
        else_body: tuple[Node, ...] = ()
        if terminator.tokens[0].text == "else":
            rest = terminator.tokens[1:]
            if rest and rest[0].kind == "ident" and rest[0].text in _BLOCK_KEYWORDS:
                # The chained branch consumes the shared {{end}}.
                chained = self._parse_branch(rest[0].text, rest[1:], terminator.line)
                else_body = (chained,)
            elif rest:
                raise TemplateSyntaxError(
                    self._name, terminator.line, "unexpected operand in else"
                )
            else:
                else_body, closing = self._parse_list()
                if closing is None:
                    raise TemplateSyntaxError(self._name, line, "unexpected EOF")
                if closing.tokens[0].text != "end" or len(closing.tokens) > 1:
                    raise TemplateSyntaxError(
                        self._name, closing.line, "expected end; found else"
                    )
        elif len(terminator.tokens) > 1:
            raise TemplateSyntaxError(
                self._name, terminator.line, "unexpected operand in end"
            )
        return BranchNode(keyword, expr, body, else_body, line)

    def _operand(self, tokens: Sequence[_Token], line: int) -> Expr:
        token = tokens[0]
        if token.kind == "ident" and token.text in _UNSUPPORTED_KEYWORDS:
            raise TemplateSyntaxError(
                self._name, line, f"unsupported action {token.text!r}"
            )
        if len(tokens) > 1:
            raise TemplateSyntaxError(
                self._name, line, f"unexpected {tokens[1].text} after operand"
            )
        if token.kind == "literal":
            return LiteralExpr(token.value)
        if token.kind == "dot":
            return FieldExpr(False, ())
        if token.kind == "field":
            return FieldExpr(False, tuple(token.text.split(".")[1:]))
        if token.kind == "root":
            return FieldExpr(True, tuple(token.text.split(".")[1:]))
        if token.text in ("true", "false"):
            return LiteralExpr(token.text == "true")
        if token.text == "nil":
            raise TemplateSyntaxError(self._name, line, "nil is not a command")
        raise TemplateSyntaxError(
            self._name, line, f"function {token.text!r} not defined"
        )


class MessageTemplate:
    """A parsed, immutable message template."""

    def __init__(self, name: str, source: str, nodes: tuple[Node, ...]) -> None:
        self._name = name
        self._source = source
        self._nodes = nodes

    @property
    def name(self) -> str:
        return self._name

    @property
    def source(self) -> str:
        return self._source

    @property
    def nodes(self) -> tuple[Node, ...]:
        return self._nodes

    def execute(self, data: Any = None) -> str:
        """Render the template against ``data``.

        Placeholders that resolve to nothing print as ``<no value>``.
        """
        out: list[str] = []
        self._walk(self._nodes, data, data, out)
        return "".join(out)

    def _walk(
        self, nodes: Sequence[Node], dot: Any, root: Any, out: list[str]
    ) -> None:
        for node in nodes:
            if isinstance(node, TextNode):
                out.append(node.text)
            elif isinstance(node, ActionNode):
                out.append(_print(self._eval(node.expr, dot, root, node.line)))
            else:
                value = self._eval(node.expr, dot, root, node.line)
                if _truth(value):
                    inner_dot = value if node.keyword == "with" else dot
                    self._walk(node.body, inner_dot, root, out)
                else:
                    self._walk(node.else_body, dot, root, out)

    def _eval(self, expr: Expr, dot: Any, root: Any, line: int) -> Any:
        if isinstance(expr, LiteralExpr):
            return expr.value
        value = root if expr.from_root else dot
        for field_name in expr.path:
            value = self._field(value, field_name, expr, line)
        return value

    def _field(self, value: Any, field_name: str, expr: FieldExpr, line: int) -> Any:
        if value is None:
            return None
        if isinstance(value, Mapping):
            return value.get(field_name)
        if field_name.startswith("_"):
            raise TemplateExecutionError(
                f"template: {self._name}:{line}: executing at <{expr}>: "
                f"{field_name} is an unexported field of type {type(value).__name__}"
            )
        try:
            resolved = getattr(value, field_name)
        except AttributeError:
            raise TemplateExecutionError(
                f"template: {self._name}:{line}: executing at <{expr}>: "
                f"can't evaluate field {field_name} in type {type(value).__name__}"
            ) from None
        if callable(resolved) and not isinstance(resolved, type):
            try:
                resolved = resolved()
            except Exception as exc:
                raise TemplateExecutionError(
                    f"template: {self._name}:{line}: executing at <{expr}>: "
                    f"error calling {field_name}: {exc}"
                ) from exc
        return resolved

    def __repr__(self) -> str:
        return f"MessageTemplate(name={self._name!r}, source={self._source!r})"


def _print(value: Any) -> str:
    if value is None:
        return NO_VALUE
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _truth(value: Any) -> bool:
    if value is None:
        return False
    try:
        return bool(value)
    except (TypeError, ValueError):
        return True


def compile_template(
    name: str,
    source: str,
    left_delim: str = DEFAULT_LEFT_DELIM,
    right_delim: str = DEFAULT_RIGHT_DELIM,
) -> MessageTemplate:
    """Parse ``source`` into a :class:`MessageTemplate` named ``name``.

    Raises :class:`TemplateSyntaxError` when the text is malformed.
    """
    left = left_delim or DEFAULT_LEFT_DELIM
    right = right_delim or DEFAULT_RIGHT_DELIM
    items = _lex(source, name, left, right)
    nodes = _Parser(items, name).parse()
    return MessageTemplate(name, source, nodes)


__all__ = [
    "ActionNode",
    "BranchNode",
    "FieldExpr",
    "LiteralExpr",
    "MessageTemplate",
    "TemplateError",
    "TemplateExecutionError",
    "TemplateSyntaxError",
    "TextNode",
    "compile_template",
]
