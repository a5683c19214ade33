"""Signature model and definition-file parsing.

Example
-------
::

    from script_sandbox.signatures import ResolvedCall, parse_line

    sig = parse_line("method java.lang.String *")
    assert sig.matches(ResolvedCall("java.lang.String", "trim"))
"""
from __future__ import annotations

from script_sandbox.signatures.model import (
    WILDCARD,
    ResolvedCall,
    Signature,
    SignatureKind,
    defining_loader,
    resolve_type,
)
from script_sandbox.signatures.naming import ArrayType, type_name
from script_sandbox.signatures.parser import (
    filter_line,
    format_signatures,
    iter_signatures,
    parse_line,
    parse_lines,
    parse_text,
)

__all__ = [
    # Model
    "WILDCARD",
    "ArrayType",
    "ResolvedCall",
    "Signature",
    "SignatureKind",
    "defining_loader",
    "resolve_type",
    "type_name",
    # Parsing
    "filter_line",
    "format_signatures",
    "iter_signatures",
    "parse_line",
    "parse_lines",
    "parse_text",
]
