"""Whitelist that allows everything defined by one specific loader.

Scripts may freely use the classes they define themselves.  The check
compares the declaring type's loader with the held loader by identity, so
two classes with the same qualified name coming from different loaders are
told apart.
"""
from __future__ import annotations

from typing import Sequence

from script_sandbox.signatures.model import ResolvedCall
from script_sandbox.whitelist import Whitelist


class LoaderWhitelist(Whitelist):
    """Permit any member whose declaring type came from ``script_loader``."""

    def __init__(self, script_loader: object) -> None:
        self._script_loader = script_loader

    def _permits(self, call: ResolvedCall) -> bool:
        return call.loader is self._script_loader

    def permits_method(
        self, call: ResolvedCall, receiver: object = None, args: Sequence[object] = ()
    ) -> bool:
        return self._permits(call)

    def permits_constructor(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return self._permits(call)

    def permits_static_method(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return self._permits(call)

    def permits_field_get(self, call: ResolvedCall, receiver: object = None) -> bool:
        return self._permits(call)

    def permits_field_set(
        self, call: ResolvedCall, receiver: object = None, value: object = None
    ) -> bool:
        return self._permits(call)

    def permits_static_field_get(self, call: ResolvedCall) -> bool:
        return self._permits(call)

    def permits_static_field_set(self, call: ResolvedCall, value: object = None) -> bool:
        return self._permits(call)
