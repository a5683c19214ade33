"""Signature value types and resolved-call descriptors.

A :class:`Signature` describes one reflective operation shape and has a
single canonical textual form that doubles as the definition-file syntax and
the decision-cache key::

    method java.lang.String length
    staticMethod java.lang.Math max int int
    new java.io.File java.lang.String
    field java.awt.Point x
    staticField java.io.File separator

A :class:`ResolvedCall` is what the interceptor hands to an evaluator: the
declaring type, member name and parameter types of the member it already
selected, plus an identity-only reference to the loader that defined the
declaring type.  Signatures never see receivers or argument values.

Example
-------
>>> sig = Signature.method("java.lang.String", "*")
>>> sig.matches(ResolvedCall("java.lang.String", "trim"))
True
>>> str(sig)
'method java.lang.String *'
"""
from __future__ import annotations

import builtins
import functools
import importlib
import inspect
import logging
import sys
from dataclasses import dataclass, field
from enum import Enum

from script_sandbox.signatures.naming import TypeLike, component_name, type_name, type_names

logger = logging.getLogger(__name__)

WILDCARD = "*"


class SignatureKind(str, Enum):
    """The five operation shapes, valued by their definition-file keyword."""

    METHOD = "method"
    STATIC_METHOD = "staticMethod"
    NEW = "new"
    FIELD = "field"
    STATIC_FIELD = "staticField"

    @property
    def has_member(self) -> bool:
        return self is not SignatureKind.NEW

    @property
    def has_parameters(self) -> bool:
        return self in (SignatureKind.METHOD, SignatureKind.STATIC_METHOD, SignatureKind.NEW)

    @property
    def is_static(self) -> bool:
        return self in (SignatureKind.STATIC_METHOD, SignatureKind.STATIC_FIELD)


# ---------------------------------------------------------------------------
# ResolvedCall
# ---------------------------------------------------------------------------


def defining_loader(cls: type) -> object | None:
    """Return the loader of the module that defined *cls*, or ``None``."""
    module = sys.modules.get(getattr(cls, "__module__", ""))
    if module is None:
        return None
    spec = getattr(module, "__spec__", None)
    loader = getattr(spec, "loader", None) if spec is not None else None
    return loader if loader is not None else getattr(module, "__loader__", None)


@dataclass(frozen=True)
class ResolvedCall:
    """A member the interceptor has already resolved for one dispatch.

    Attributes
    ----------
    type_name:
        Canonical name of the declaring type.
    member_name:
        Method or field name; ``None`` for constructors.
    parameter_types:
        Canonical parameter type names, in declaration order.  Empty for
        fields.
    loader:
        The loading unit that defined the declaring type.  Compared by
        identity only and excluded from equality.
    """

    type_name: str
    member_name: str | None = None
    parameter_types: tuple[str, ...] = ()
    loader: object | None = field(default=None, compare=False, repr=False)

    @classmethod
    def of_method(cls, owner: TypeLike, name: str, *parameter_types: TypeLike) -> ResolvedCall:
        return cls(
            type_name(owner),
            name,
            type_names(parameter_types),
            loader=_loader_of(owner),
        )

    @classmethod
    def of_constructor(cls, owner: TypeLike, *parameter_types: TypeLike) -> ResolvedCall:
        return cls(type_name(owner), None, type_names(parameter_types), loader=_loader_of(owner))

    @classmethod
    def of_field(cls, owner: TypeLike, name: str) -> ResolvedCall:
        return cls(type_name(owner), name, (), loader=_loader_of(owner))

    def signature_part(self, kind: SignatureKind) -> str:
        """Canonical text of this call without the kind prefix."""
        tokens = [self.type_name]
        if kind.has_member:
            tokens.append(self.member_name or "")
        if kind.has_parameters:
            tokens.extend(self.parameter_types)
        return " ".join(tokens)

    def canonical(self, kind: SignatureKind) -> str:
        """Canonical signature text for this call viewed as a *kind* operation."""
        return f"{kind.value} {self.signature_part(kind)}"


def _loader_of(owner: TypeLike) -> object | None:
    return defining_loader(owner) if isinstance(owner, type) else None


# ---------------------------------------------------------------------------
# Signature
# ---------------------------------------------------------------------------


@functools.total_ordering
@dataclass(frozen=True, eq=False)
class Signature:
    """One entry of a definition file.

    Equality and hashing follow the canonical text together with the kind,
    so ``method a.B m`` and ``staticMethod a.B m`` are distinct.  Ordering
    compares the signature part first and the full text second; it exists
    for stable presentation and plays no role in matching.
    """

    kind: SignatureKind
    type_name: str
    member_name: str | None = None
    parameter_types: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.kind.has_member and not self.member_name:
            raise ValueError(f"{self.kind.value} signature requires a member name")
        if not self.kind.has_member and self.member_name is not None:
            raise ValueError("new signature takes no member name")
        if not self.kind.has_parameters and self.parameter_types:
            raise ValueError(f"{self.kind.value} signature takes no parameter types")
        object.__setattr__(self, "parameter_types", tuple(self.parameter_types))

    # -- constructors -------------------------------------------------------

    @classmethod
    def method(cls, owner: TypeLike, name: str, *parameter_types: TypeLike) -> Signature:
        return cls(SignatureKind.METHOD, type_name(owner), name, type_names(parameter_types))

    @classmethod
    def static_method(cls, owner: TypeLike, name: str, *parameter_types: TypeLike) -> Signature:
        return cls(SignatureKind.STATIC_METHOD, type_name(owner), name, type_names(parameter_types))

    @classmethod
    def new(cls, owner: TypeLike, *parameter_types: TypeLike) -> Signature:
        return cls(SignatureKind.NEW, type_name(owner), None, type_names(parameter_types))

    @classmethod
    def field(cls, owner: TypeLike, name: str) -> Signature:
        return cls(SignatureKind.FIELD, type_name(owner), name)

    @classmethod
    def static_field(cls, owner: TypeLike, name: str) -> Signature:
        return cls(SignatureKind.STATIC_FIELD, type_name(owner), name)

    # -- canonical form -----------------------------------------------------

    @property
    def signature_part(self) -> str:
        tokens = [self.type_name]
        if self.member_name is not None:
            tokens.append(self.member_name)
        tokens.extend(self.parameter_types)
        return " ".join(tokens)

    def __str__(self) -> str:
        return f"{self.kind.value} {self.signature_part}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.kind is other.kind and str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return (self.signature_part, str(self)) < (other.signature_part, str(other))

    @property
    def is_wildcard(self) -> bool:
        return self.member_name == WILDCARD

    # -- matching -----------------------------------------------------------

    def matches(self, call: ResolvedCall) -> bool:
        """Return True if this signature covers *call*.

        The wildcard relaxes the member name only; declaring type and
        parameter types must match exactly.
        """
        if call.type_name != self.type_name:
            return False
        if self.kind.has_member and not (
            self.member_name == WILDCARD or self.member_name == call.member_name
        ):
            return False
        if self.kind.has_parameters and call.parameter_types != self.parameter_types:
            return False
        return True

    def as_call(self) -> ResolvedCall:
        """The resolved call this signature describes exactly."""
        return ResolvedCall(self.type_name, self.member_name, self.parameter_types)

    # -- existence ----------------------------------------------------------

    def exists(self) -> bool:
        """Check reflectively whether the described member exists.

        Advisory only: used by approval tooling to flag stale entries.
        Returns ``False`` for anything that cannot be resolved.
        """
        try:
            owner = resolve_type(self.type_name)
            for name in self.parameter_types:
                resolve_type(name)
        except LookupError as exc:
            logger.warning("Cannot resolve types for %s: %s", self, exc)
            return False

        if self.kind is SignatureKind.NEW:
            return inspect.isclass(owner) and _accepts(owner, len(self.parameter_types))
        if self.kind is SignatureKind.METHOD:
            return _instance_method_exists(owner, self.member_name, len(self.parameter_types))
        if self.kind is SignatureKind.STATIC_METHOD:
            return _static_method_exists(owner, self.member_name, len(self.parameter_types))
        if self.kind is SignatureKind.FIELD:
            return _instance_field_exists(owner, self.member_name)
        return _static_field_exists(owner, self.member_name)


# ---------------------------------------------------------------------------
# Reflection helpers
# ---------------------------------------------------------------------------


def resolve_type(name: str) -> type:
    """Resolve a canonical type name to a Python class.

    Array names resolve to :class:`list` once their component resolves.
    Raises :class:`LookupError` when no such type can be imported.
    """
    component, dimensions = component_name(name)
    if dimensions:
        resolve_type(component)
        return list

    if "." not in component:
        found = getattr(builtins, component, None)
        if isinstance(found, type):
            return found
        raise LookupError(f"no builtin type named {component!r}")

    parts = component.split(".")
    for split in range(len(parts) - 1, 0, -1):
        module_name = ".".join(parts[:split])
        try:
            target: object = importlib.import_module(module_name)
        except Exception as exc:
            # Malformed names and modules that fail on import resolve to nothing.
            logger.debug("Cannot import %r while resolving %r: %s", module_name, component, exc)
            continue
        try:
            for attr in parts[split:]:
                target = getattr(target, attr)
        except AttributeError:
            break
        if isinstance(target, type):
            return target
        break
    raise LookupError(f"no importable type named {component!r}")


def _accepts(func: object, arity: int) -> bool:
    try:
        sig = inspect.signature(func)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        # C-implemented callables may not expose a signature.
        return True
    params = list(sig.parameters.values())
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return True
    positional = [
        p
        for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    ]
    required = [p for p in positional if p.default is inspect.Parameter.empty]
    return len(required) <= arity <= len(positional)


def _declared(owner: type, name: str | None) -> object | None:
    if name is None or name == WILDCARD:
        return None
    return owner.__dict__.get(name)


def _declares_instance_method(owner: type, name: str | None, arity: int) -> bool:
    member = _declared(owner, name)
    if member is None or isinstance(member, (staticmethod, classmethod)):
        return False
    if inspect.isfunction(member):
        return _accepts(member, arity + 1)
    return inspect.ismethoddescriptor(member) and _accepts(getattr(owner, name), arity + 1)


def _instance_method_exists(owner: type, name: str | None, arity: int) -> bool:
    # An override of a base instance method with the same arity must be named on the base.
    if any(
        _declares_instance_method(base, name, arity)
        for base in owner.__mro__[1:]
        if base is not object
    ):
        return False
    return _declares_instance_method(owner, name, arity)


def _static_method_exists(owner: type, name: str | None, arity: int) -> bool:
    member = _declared(owner, name)
    if isinstance(member, staticmethod):
        return _accepts(member.__func__, arity)
    if isinstance(member, classmethod):
        return _accepts(getattr(owner, name), arity)  # type: ignore[arg-type]
    return False


def _instance_field_exists(owner: type, name: str | None) -> bool:
    if name is None or name == WILDCARD:
        return False
    for klass in owner.__mro__:
        annotations = klass.__dict__.get("__annotations__", {})
        if name in annotations and "ClassVar" not in str(annotations[name]):
            return True
        slots = klass.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        if name in slots:
            return True
    return False


def _static_field_exists(owner: type, name: str | None) -> bool:
    if name is None or name == WILDCARD or not hasattr(owner, name):
        return False
    value = inspect.getattr_static(owner, name)
    return not (
        callable(value)
        or isinstance(value, (staticmethod, classmethod, property))
        or inspect.isdatadescriptor(value)
    )
