"""
Notation serializer for failure and shrink reporting.

Renders arbitrary object graphs as C#-style construction expressions, one
``var data = ...;`` statement per value, so a shrunk counterexample can be
read, diffed and pasted into a fixture. Output is advisory and never parsed
back in.
"""

import datetime
import enum
import math
import typing
from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, replace
from decimal import Decimal
from typing import Any

from ..utilities.constants import INDENT_UNIT, LINE_SEPARATOR, SINGLE_BINDING_NAME
from .config import NotationConfig
from .fields import find_constructor, get_fields, is_named_tuple

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\0": "\\0",
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}


@dataclass(frozen=True)
class _Context:
    """Rendering state for one nesting level."""

    indent_level: int
    config: NotationConfig
    path: frozenset[int] = frozenset()

    @property
    def indents(self) -> str:
        return INDENT_UNIT * self.indent_level

    def add_indent(self) -> "_Context":
        return replace(self, indent_level=self.indent_level + 1)

    def enter(self, obj: Any) -> "_Context":
        return replace(self, path=self.path | {id(obj)})


class NotationSerializer:
    """
    Serializer bound to one NotationConfig.

    Rendering is pure: the input graph is never mutated and rendering the
    same value twice yields identical text.
    """

    def __init__(self, config: NotationConfig | None = None):
        """
        Initialize serializer.

        Args:
            config: Rendering options, defaults to NotationConfig.default()
        """
        self.config = config or NotationConfig.default()

    def serialize(self, item: Any) -> str:
        """Render a single value as one ``var data = ...;`` statement."""
        return self.serialize_each([item])

    def serialize_each(self, objects: Iterable[Any]) -> str:
        """
        Render values one statement per line.

        A single value is bound to ``data``, several values to ``data0``,
        ``data1`` and so on, unless the create assignment is skipped.
        """
        context = _Context(0, self.config)
        items = list(objects)

        statements = []
        for index, item in enumerate(items):
            if self.config.skip_create_assignment:
                assignment = ""
            elif len(items) == 1:
                assignment = f"var {SINGLE_BINDING_NAME} = "
            else:
                assignment = f"var {SINGLE_BINDING_NAME}{index} = "
            statements.append(f"{assignment}{_render(item, context)};")

        return LINE_SEPARATOR.join(statements)


def serialize(item: Any, config: NotationConfig | None = None) -> str:
    """Render a single value; see NotationSerializer.serialize."""
    return NotationSerializer(config).serialize(item)


def serialize_each(objects: Iterable[Any], config: NotationConfig | None = None) -> str:
    """Render several values; see NotationSerializer.serialize_each."""
    return NotationSerializer(config).serialize_each(objects)


def _render(value: Any, context: _Context) -> str:
    # Order matters: bool before int, enums before str and int, datetime before date
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, enum.Enum):
        return f"{_full_type_name(type(value))}.{value.name}"
    if isinstance(value, str):
        return _quote(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, Decimal):
        return _render_decimal(value)
    if isinstance(value, float):
        return _render_float(value)
    if isinstance(value, complex):
        return f"new Complex({_render_float(value.real)}, {_render_float(value.imag)})"
    if isinstance(value, datetime.datetime):
        if value.tzinfo is not None and value.utcoffset() is not None:
            return f'DateTimeOffset.Parse("{value.isoformat()}")'
        return f'DateTime.Parse("{value.isoformat()}")'
    if isinstance(value, datetime.date):
        return f'DateTime.Parse("{value.isoformat()}")'
    if isinstance(value, type):
        return f"typeof({_type_name(value, context.config)})"

    if id(value) in context.path:
        return f"null /* cycle: {_class_name(value, context.config)} */"

    if isinstance(value, Mapping):
        return _render_mapping(value, context.enter(value))
    if isinstance(value, Collection) and not is_named_tuple(value):
        return _render_items(value, context.enter(value))
    return _render_object(value, context.enter(value))


def _render_items(items: Collection, context: _Context) -> str:
    if len(items) == 0:
        return "new[] { }"

    inner = context.add_indent()
    rendered = [f"{inner.indents}{_render(item, inner)}" for item in items]

    # No comma after the last item
    return (
        f"new[] {{{LINE_SEPARATOR}"
        f"{f',{LINE_SEPARATOR}'.join(rendered)}"
        f"{LINE_SEPARATOR}{context.indents}}}"
    )


def _render_mapping(mapping: Mapping, context: _Context) -> str:
    inner = context.add_indent()
    lines = [f"new {_class_name(mapping, context.config)}", f"{context.indents}{{"]
    for key, value in mapping.items():
        lines.append(f"{inner.indents}[{_render(key, inner)}] = {_render(value, inner)},")
    lines.append(f"{context.indents}}}")
    return LINE_SEPARATOR.join(lines)


def _render_object(obj: Any, context: _Context) -> str:
    config = context.config
    fields = get_fields(obj)
    type_name = _class_name(obj, config)
    inner = context.add_indent()

    if not config.prefer_object_initialization:
        parameters = find_constructor(obj, fields)
        if parameters is not None:
            values = {field.name: field.value for field in fields}
            arguments = []
            for name in parameters:
                rendered = _render(values[name], inner)
                arguments.append(f"{name}: {rendered}" if config.include_parameter_names else rendered)
            return f"new {type_name}({', '.join(arguments)})"

    lines = [f"new {type_name}", f"{context.indents}{{"]
    for field in fields:
        if field.value is None:
            continue
        lines.append(f"{inner.indents}{field.name} = {_render(field.value, inner)},")
    lines.append(f"{context.indents}}}")
    return LINE_SEPARATOR.join(lines)


def _quote(text: str) -> str:
    escaped = []
    for char in text:
        if char in _ESCAPES:
            escaped.append(_ESCAPES[char])
        elif ord(char) < 0x20 or ord(char) == 0x7F:
            escaped.append(f"\\u{ord(char):04x}")
        else:
            escaped.append(char)
    return f'"{"".join(escaped)}"'


def _render_decimal(value: Decimal) -> str:
    if not value.is_finite():
        return f'decimal.Parse("{value}")'
    return f"{value:f}m"


def _render_float(value: float) -> str:
    if math.isnan(value):
        return "double.NaN"
    if math.isinf(value):
        return "double.PositiveInfinity" if value > 0 else "double.NegativeInfinity"
    return repr(value)


def _full_type_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def _type_name(cls: type, config: NotationConfig) -> str:
    if config.include_full_type_names:
        return _full_type_name(cls)
    # Drop the enclosing function scope of locally defined classes
    return cls.__qualname__.rsplit("<locals>.", 1)[-1]


def _class_name(obj: Any, config: NotationConfig) -> str:
    name = _type_name(type(obj), config)

    # Instances created through a parameterized generic, e.g. Box[int](...)
    alias = getattr(obj, "__orig_class__", None)
    arguments = typing.get_args(alias) if alias is not None else ()
    if arguments:
        name = f"{name}<{', '.join(_annotation_name(arg, config) for arg in arguments)}>"
    return name


def _annotation_name(annotation: Any, config: NotationConfig) -> str:
    origin = typing.get_origin(annotation)
    if origin is not None:
        if isinstance(origin, type):
            base = _type_name(origin, config)
        else:
            base = str(origin).replace("typing.", "")
        arguments = typing.get_args(annotation)
        if not arguments:
            return base
        return f"{base}<{', '.join(_annotation_name(arg, config) for arg in arguments)}>"
    if annotation is None or annotation is type(None):
        return "None"
    if isinstance(annotation, type):
        return _type_name(annotation, config)
    return getattr(annotation, "__name__", str(annotation))
