"""
Field enumeration and constructor matching for composite values.

A composite value is described by an ordered list of named, typed fields.
Types can declare that list explicitly with a ``__notation_fields__()``
method returning ``(name, type, value)`` triples and can name the fields
their constructor takes with a ``__notation_constructor__`` tuple. Without
those declarations the description is read from dataclass fields, named
tuple fields or public attributes and properties, and the constructor is
read from the class signature.
"""

import dataclasses
import inspect
import types
import typing
from typing import Any, NamedTuple


class NotationField(NamedTuple):
    """One named, typed, readable member of a composite value."""

    name: str
    type: Any
    value: Any


def is_named_tuple(obj: Any) -> bool:
    """Check if a value is an instance of a named tuple class."""
    return isinstance(obj, tuple) and hasattr(type(obj), "_fields")


def get_fields(obj: Any) -> list[NotationField]:
    """
    Enumerate the fields of a composite value in stable declaration order.

    Args:
        obj: Composite value to describe

    Returns:
        Ordered list of fields with their declared type and current value
    """
    declared = getattr(obj, "__notation_fields__", None)
    if callable(declared):
        return [NotationField(*entry) for entry in declared()]

    hints = _resolved_hints(type(obj))

    if dataclasses.is_dataclass(obj):
        return [
            NotationField(f.name, hints.get(f.name, f.type), getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        ]

    if is_named_tuple(obj):
        return [
            NotationField(name, hints.get(name, type(value)), value)
            for name, value in zip(obj._fields, obj)
        ]

    fields = []
    for name in _public_member_names(obj):
        value = getattr(obj, name)
        fields.append(NotationField(name, hints.get(name, type(value)), value))
    return fields


def find_constructor(obj: Any, fields: list[NotationField]) -> list[str] | None:
    """
    Find constructor parameters that map one to one onto the fields.

    Every parameter must have a same-named field of a compatible type;
    fields the constructor does not take are allowed. A constructor without
    parameters never matches.

    Args:
        obj: Composite value being rendered
        fields: Fields returned by get_fields for the value

    Returns:
        Parameter names in constructor order, or None when no constructor matches
    """
    cls = type(obj)
    declared = getattr(cls, "__notation_constructor__", None)
    if declared is not None:
        parameters = [(name, Any) for name in declared]
    else:
        parameters = _constructor_parameters(cls)

    if not parameters:
        return None

    by_name = {field.name: field for field in fields}
    for name, annotation in parameters:
        field = by_name.get(name)
        if field is None or not _is_compatible(annotation, field):
            return None

    return [name for name, _ in parameters]


def _constructor_parameters(cls: type) -> list[tuple[str, Any]] | None:
    try:
        signature = inspect.signature(cls)
    except (TypeError, ValueError):
        # Builtins and extension types without introspectable signatures
        return None

    init_hints = _resolved_hints(cls.__init__)
    parameters = []
    for parameter in signature.parameters.values():
        if parameter.kind in (parameter.VAR_POSITIONAL, parameter.VAR_KEYWORD):
            continue
        parameters.append((parameter.name, init_hints.get(parameter.name, parameter.annotation)))
    return parameters


def _resolved_hints(obj: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(obj)
    except (NameError, TypeError, AttributeError):
        # Unresolvable forward references keep their raw annotations
        return dict(getattr(obj, "__annotations__", None) or {})


def _public_member_names(obj: Any) -> list[str]:
    names: list[str] = []

    instance_dict = getattr(obj, "__dict__", None)
    if isinstance(instance_dict, dict):
        names.extend(name for name in instance_dict if not name.startswith("_"))

    for klass in type(obj).__mro__:
        slots = vars(klass).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if not name.startswith("_") and name not in names and hasattr(obj, name):
                names.append(name)

    for klass in reversed(type(obj).__mro__[:-1]):
        for name, member in vars(klass).items():
            if isinstance(member, property) and not name.startswith("_") and name not in names:
                names.append(name)

    return names


def _is_compatible(annotation: Any, field: NotationField) -> bool:
    # Missing and string (unresolved) annotations cannot be checked
    if annotation is inspect.Parameter.empty or annotation is Any or isinstance(annotation, str):
        return True
    if annotation == field.type:
        return True
    return _value_matches(annotation, field.value)


def _value_matches(annotation: Any, value: Any) -> bool:
    if annotation is None or annotation is type(None):
        return value is None
    if annotation is Any:
        return True

    origin = typing.get_origin(annotation)
    if origin is typing.Union or origin is types.UnionType:
        return any(_value_matches(arg, value) for arg in typing.get_args(annotation))
    if origin is typing.Annotated:
        return _value_matches(typing.get_args(annotation)[0], value)
    if origin is typing.Literal:
        return value in typing.get_args(annotation)
    if origin is not None:
        annotation = origin

    if isinstance(annotation, type):
        return isinstance(value, annotation)
    return False
