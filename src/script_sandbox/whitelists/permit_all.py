"""Whitelist that permits the execution of all code."""
from __future__ import annotations

from typing import Sequence

from script_sandbox.signatures.model import ResolvedCall
from script_sandbox.whitelist import Whitelist


class PermitAllWhitelist(Whitelist):
    def permits_method(
        self, call: ResolvedCall, receiver: object = None, args: Sequence[object] = ()
    ) -> bool:
        return True

    def permits_constructor(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return True

    def permits_static_method(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return True

    def permits_field_get(self, call: ResolvedCall, receiver: object = None) -> bool:
        return True

    def permits_field_set(
        self, call: ResolvedCall, receiver: object = None, value: object = None
    ) -> bool:
        return True

    def permits_static_field_get(self, call: ResolvedCall) -> bool:
        return True

    def permits_static_field_set(self, call: ResolvedCall, value: object = None) -> bool:
        return True
