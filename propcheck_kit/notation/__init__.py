"""
Notation rendering for counterexamples.

Exposes the rendering options record and the serializer that turns object
graphs into construction expressions.
"""

from .config import NotationConfig
from .fields import NotationField, find_constructor, get_fields
from .serializer import NotationSerializer, serialize, serialize_each

__all__ = [
    "NotationConfig",
    "NotationField",
    "NotationSerializer",
    "find_constructor",
    "get_fields",
    "serialize",
    "serialize_each",
]
