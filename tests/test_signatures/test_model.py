"""Tests for the signature model and resolved calls."""
from __future__ import annotations

import fractions
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

import pytest

from script_sandbox.signatures.model import (
    ResolvedCall,
    Signature,
    SignatureKind,
    defining_loader,
    resolve_type,
)
from script_sandbox.signatures.naming import ArrayType, component_name, type_name
from script_sandbox.signatures.parser import parse_line


@dataclass
class Point:
    x: int
    y: int
    origin: ClassVar[str] = "top-left"

    def scale(self, factor: int) -> Point:
        return Point(self.x * factor, self.y * factor)

    @staticmethod
    def parse(text: str) -> Point:
        x, y = text.split(",")
        return Point(int(x), int(y))


class Point3D(Point):
    def scale(self, factor: int) -> Point:
        return super().scale(factor)


class Shape:
    @staticmethod
    def area(side: int) -> int:
        return side * side

    def resize(self) -> Shape:
        return self


class Square(Shape):
    def area(self, side: int) -> int:  # type: ignore[override]
        return side * side

    def resize(self, factor: int) -> Shape:  # type: ignore[override]
        return self


# ---------------------------------------------------------------------------
# Naming
# ---------------------------------------------------------------------------


class TestTypeName:
    def test_string_is_passed_through(self) -> None:
        assert type_name("java.lang.String") == "java.lang.String"

    def test_builtin_uses_bare_name(self) -> None:
        assert type_name(int) == "int"

    def test_module_qualified_class(self) -> None:
        assert type_name(fractions.Fraction) == "fractions.Fraction"

    def test_array_suffix_per_dimension(self) -> None:
        assert type_name(ArrayType(ArrayType(int))) == "int[][]"

    def test_array_of_named_type(self) -> None:
        assert type_name(ArrayType("java.lang.Object")) == "java.lang.Object[]"

    def test_component_name_unwraps_dimensions(self) -> None:
        assert component_name("java.lang.Object[][]") == ("java.lang.Object", 2)
        assert component_name("int") == ("int", 0)


# ---------------------------------------------------------------------------
# Canonical text, equality and ordering
# ---------------------------------------------------------------------------


class TestCanonicalForm:
    def test_method(self) -> None:
        sig = Signature.method("java.lang.String", "substring", "int", "int")
        assert str(sig) == "method java.lang.String substring int int"

    def test_static_method_without_parameters(self) -> None:
        sig = Signature.static_method("java.lang.System", "getenv")
        assert str(sig) == "staticMethod java.lang.System getenv"

    def test_new_has_no_member_token(self) -> None:
        sig = Signature.new("java.io.File", "java.lang.String")
        assert str(sig) == "new java.io.File java.lang.String"

    def test_fields(self) -> None:
        assert str(Signature.field("java.awt.Point", "x")) == "field java.awt.Point x"
        assert (
            str(Signature.static_field("java.io.File", "separator"))
            == "staticField java.io.File separator"
        )

    def test_array_parameter(self) -> None:
        sig = Signature.new("a.Wrapper", ArrayType("java.lang.Object"))
        assert str(sig) == "new a.Wrapper java.lang.Object[]"

    def test_resolved_call_uses_same_key_space(self) -> None:
        call = ResolvedCall("java.lang.String", "substring", ("int", "int"))
        sig = Signature.method("java.lang.String", "substring", "int", "int")
        assert call.canonical(SignatureKind.METHOD) == str(sig)

    def test_constructor_key_drops_member(self) -> None:
        call = ResolvedCall.of_constructor("java.io.File", "java.lang.String")
        assert call.canonical(SignatureKind.NEW) == "new java.io.File java.lang.String"


class TestEquality:
    def test_same_text_same_kind_equal(self) -> None:
        a = Signature.method("a.B", "m", "int")
        b = Signature(SignatureKind.METHOD, "a.B", "m", ("int",))
        assert a == b
        assert hash(a) == hash(b)

    def test_instance_and_static_never_equal(self) -> None:
        assert Signature.method("a.B", "m") != Signature.static_method("a.B", "m")
        assert Signature.field("a.B", "f") != Signature.static_field("a.B", "f")

    def test_usable_in_sets(self) -> None:
        sigs = {Signature.method("a.B", "m"), Signature.method("a.B", "m")}
        assert len(sigs) == 1

    def test_not_equal_to_string(self) -> None:
        assert Signature.method("a.B", "m") != "method a.B m"


class TestOrdering:
    def test_orders_by_signature_part_first(self) -> None:
        static = Signature.static_method("a.A", "z")
        method = Signature.method("a.B", "a")
        assert sorted([method, static]) == [static, method]

    def test_ties_broken_by_full_text(self) -> None:
        method = Signature.method("a.B", "m")
        static = Signature.static_method("a.B", "m")
        assert sorted([static, method]) == [method, static]


class TestSignatureValidation:
    def test_method_requires_member(self) -> None:
        with pytest.raises(ValueError):
            Signature(SignatureKind.METHOD, "a.B")

    def test_new_rejects_member(self) -> None:
        with pytest.raises(ValueError):
            Signature(SignatureKind.NEW, "a.B", "m")

    def test_field_rejects_parameters(self) -> None:
        with pytest.raises(ValueError):
            Signature(SignatureKind.FIELD, "a.B", "f", ("int",))

    def test_is_immutable(self) -> None:
        sig = Signature.method("a.B", "m")
        with pytest.raises(AttributeError):
            sig.member_name = "n"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------


class TestMatches:
    def test_exact_method(self) -> None:
        sig = Signature.method("java.lang.String", "trim")
        assert sig.matches(ResolvedCall("java.lang.String", "trim")) is True
        assert sig.matches(ResolvedCall("java.lang.String", "strip")) is False

    def test_wildcard_matches_any_member_with_same_parameters(self) -> None:
        sig = Signature.method("java.lang.String", "*")
        assert sig.is_wildcard is True
        assert sig.matches(ResolvedCall("java.lang.String", "trim")) is True
        assert sig.matches(ResolvedCall("java.lang.String", "length")) is True

    def test_wildcard_does_not_relax_parameters(self) -> None:
        sig = Signature.method("java.lang.String", "*")
        assert sig.matches(ResolvedCall("java.lang.String", "split", ("java.lang.String",))) is False

    def test_wildcard_does_not_relax_type(self) -> None:
        sig = Signature.method("java.lang.String", "*")
        assert sig.matches(ResolvedCall("java.lang.StringBuilder", "reverse")) is False

    def test_constructor_ignores_member(self) -> None:
        sig = Signature.new("java.io.File", "java.lang.String")
        assert sig.matches(ResolvedCall("java.io.File", None, ("java.lang.String",))) is True
        assert sig.matches(ResolvedCall("java.io.File", None, ())) is False

    def test_field_wildcard(self) -> None:
        sig = Signature.field("java.awt.Point", "*")
        assert sig.matches(ResolvedCall("java.awt.Point", "x")) is True
        assert sig.matches(ResolvedCall("java.awt.Rectangle", "x")) is False

    def test_parameter_order_matters(self) -> None:
        sig = Signature.static_method("a.B", "m", "int", "long")
        assert sig.matches(ResolvedCall("a.B", "m", ("long", "int"))) is False

    def test_as_call_round_trips_through_matches(self) -> None:
        sig = Signature.static_method("java.lang.Math", "max", "int", "int")
        assert sig.matches(sig.as_call()) is True


# ---------------------------------------------------------------------------
# Resolved calls from live classes
# ---------------------------------------------------------------------------


class TestResolvedCallFactories:
    def test_of_method_names_types(self) -> None:
        call = ResolvedCall.of_method(fractions.Fraction, "limit_denominator", int)
        assert call == ResolvedCall("fractions.Fraction", "limit_denominator", ("int",))

    def test_of_method_records_loader(self) -> None:
        call = ResolvedCall.of_method(fractions.Fraction, "limit_denominator", int)
        assert call.loader is defining_loader(fractions.Fraction)
        assert call.loader is not None

    def test_loader_not_part_of_equality(self) -> None:
        a = ResolvedCall("a.B", "m", loader=object())
        b = ResolvedCall("a.B", "m", loader=object())
        assert a == b

    def test_string_owner_has_no_loader(self) -> None:
        assert ResolvedCall.of_field("java.awt.Point", "x").loader is None


# ---------------------------------------------------------------------------
# Existence
# ---------------------------------------------------------------------------


class TestResolveType:
    def test_builtin(self) -> None:
        assert resolve_type("int") is int

    def test_dotted(self) -> None:
        assert resolve_type("fractions.Fraction") is fractions.Fraction

    def test_array_of_resolvable_component(self) -> None:
        assert resolve_type("int[][]") is list

    def test_unknown_raises_lookup_error(self) -> None:
        with pytest.raises(LookupError):
            resolve_type("java.lang.String")


class TestExists:
    def test_instance_method(self) -> None:
        assert Signature.method(Point, "scale", int).exists() is True

    def test_instance_method_wrong_arity(self) -> None:
        assert Signature.method(Point, "scale", int, int).exists() is False

    def test_static_method_is_not_instance_method(self) -> None:
        assert Signature.method(Point, "parse", str).exists() is False
        assert Signature.static_method(Point, "parse", str).exists() is True

    def test_override_must_be_named_on_declaring_base(self) -> None:
        assert Signature.method(Point3D, "scale", int).exists() is False

    def test_classmethod_counts_as_static(self) -> None:
        sig = Signature.static_method(fractions.Fraction, "from_float", float)
        assert sig.exists() is True

    def test_constructor(self) -> None:
        assert Signature.new(Point, int, int).exists() is True
        assert Signature.new(Point, int).exists() is False

    def test_instance_field_from_annotations(self) -> None:
        assert Signature.field(Point, "x").exists() is True
        assert Signature.field(Point, "origin").exists() is False

    def test_static_field(self) -> None:
        assert Signature.static_field(Point, "origin").exists() is True
        assert Signature.static_field(Point, "scale").exists() is False

    def test_unresolvable_type_does_not_raise(self) -> None:
        assert Signature.method("java.lang.String", "trim").exists() is False

    def test_unresolvable_parameter_does_not_raise(self) -> None:
        assert Signature.method(Point, "scale", "no.such.Type").exists() is False

    def test_relative_module_name_does_not_raise(self) -> None:
        assert parse_line("method .foo.Bar m").exists() is False
        assert parse_line("method fractions.Fraction limit_denominator .foo.Bar").exists() is False

    def test_module_failing_on_import_does_not_raise(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "sandbox_broken_module.py").write_text(
            "raise RuntimeError(\"boom\")\n", encoding="utf-8"
        )
        monkeypatch.syspath_prepend(str(tmp_path))
        assert parse_line("method sandbox_broken_module.Thing m").exists() is False

    def test_instance_method_shadowing_base_static_method(self) -> None:
        assert Signature.method(Square, "area", int).exists() is True

    def test_instance_method_with_different_arity_than_base(self) -> None:
        assert Signature.method(Square, "resize", int).exists() is True
        assert Signature.method(Shape, "resize").exists() is True

    def test_wildcard_does_not_exist(self) -> None:
        assert Signature.method(Point, "*").exists() is False
