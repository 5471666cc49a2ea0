"""
Sample types covering the shapes the notation serializer renders.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Generic, NamedTuple, TypeVar

T = TypeVar("T")


class Color(Enum):
    RED = "red"
    GREEN = "green"


class Priority(IntEnum):
    LOW = 1
    HIGH = 2


class Reading:
    """Constructor parameters match both fields."""

    def __init__(self, device_id: str, value: int):
        self.device_id = device_id
        self.value = value


class LooseReading:
    """Constructor parameter type does not match the field."""

    def __init__(self, device_id: int, value: int):
        self.device_id = str(device_id)
        self.value = value


class PartialReading:
    """Constructor takes a parameter without a same-named field."""

    def __init__(self, device_id: str, raw: int):
        self.device_id = device_id
        self.value = raw * 2


class Settings:
    """No constructor parameters, so fields render as a block."""

    def __init__(self):
        self.name = "default"
        self.comment = None
        self.retries = 3


@dataclass
class Point:
    x: int
    y: int


@dataclass
class Segment:
    start: Point
    end: Point
    label: str | None = None


@dataclass
class Tagged:
    name: str
    tags: list[str] = field(default_factory=list)


class Pair(NamedTuple):
    left: int
    right: int


class Slotted:
    __slots__ = ("code", "_hidden")

    def __init__(self, code):
        self.code = code
        self._hidden = "secret"


class Temperature:
    """Exposes its value through a property."""

    def __init__(self, celsius: float):
        self._celsius = celsius

    @property
    def celsius(self) -> float:
        return self._celsius


class Declared:
    """Declares its own field list and constructor mapping."""

    __notation_constructor__ = ("key",)

    def __init__(self, key: str, cache: dict | None = None):
        self.key = key
        self.cache = cache or {}

    def __notation_fields__(self):
        return [("key", str, self.key)]


class Box(Generic[T]):
    def __init__(self):
        self.content = None


class Node:
    def __init__(self, name: str):
        self.name = name
        self.next = None
