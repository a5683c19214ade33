"""Type-name derivation shared by signatures and resolved calls.

Every type is rendered as a fully-qualified dotted name.  Array types use a
``[]`` suffix per dimension, obtained by unwrapping the component type until
a non-array type is reached::

    >>> type_name(ArrayType(ArrayType(int)))
    'int[][]'
    >>> type_name("java.lang.String")
    'java.lang.String'
"""
from __future__ import annotations

import builtins
from dataclasses import dataclass
from typing import Union

ARRAY_SUFFIX = "[]"


@dataclass(frozen=True)
class ArrayType:
    """An array whose elements are of ``component`` type."""

    component: "TypeLike"


TypeLike = Union[str, type, ArrayType]


def type_name(tp: TypeLike) -> str:
    """Return the canonical name of *tp*.

    Strings are taken to already be canonical names.  Classes from the
    ``builtins`` module are named by their bare name; everything else is
    ``module.qualname``.
    """
    if isinstance(tp, ArrayType):
        return type_name(tp.component) + ARRAY_SUFFIX
    if isinstance(tp, str):
        return tp
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", tp.__name__)
    if module is None or module == builtins.__name__:
        return qualname
    return f"{module}.{qualname}"


def type_names(types: tuple[TypeLike, ...] | list[TypeLike]) -> tuple[str, ...]:
    return tuple(type_name(t) for t in types)


def component_name(name: str) -> tuple[str, int]:
    """Split an array type name into its innermost component and dimension count."""
    dimensions = 0
    while name.endswith(ARRAY_SUFFIX):
        name = name[: -len(ARRAY_SUFFIX)]
        dimensions += 1
    return name, dimensions
