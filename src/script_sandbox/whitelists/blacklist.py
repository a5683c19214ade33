"""Deny-list evaluator: a static whitelist read with inverted polarity.

A Blacklist wraps a :class:`StaticWhitelist` parsed from the usual
definition grammar and answers "allowed" for everything the wrapped list
does *not* match.  Method, constructor, static method, field get and static
field get decisions are negated.

Field set and static field set are returned exactly as the wrapped
whitelist decides them.  The wrapped whitelist derives set decisions from
the corresponding get, so a listed field is readable-denied but
write-allowed here::

    bl = Blacklist.from_text("field java.io.File path")
    call = ResolvedCall("java.io.File", "path")
    bl.permits_field_get(call)   # False
    bl.permits_field_set(call)   # True

Existing deny-list files depend on this behavior.
"""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Sequence

from script_sandbox.signatures.model import ResolvedCall
from script_sandbox.whitelist import Whitelist
from script_sandbox.whitelists.static import StaticWhitelist


class Blacklist(Whitelist):
    """Negating decorator around a :class:`StaticWhitelist`.

    Parameters
    ----------
    listed:
        The whitelist whose matches are to be denied.
    """

    def __init__(self, listed: StaticWhitelist) -> None:
        self._listed = listed

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: str | None = None) -> Blacklist:
        return cls(StaticWhitelist(lines, source=source))

    @classmethod
    def from_text(cls, text: str, source: str | None = None) -> Blacklist:
        return cls(StaticWhitelist.from_text(text, source=source))

    @classmethod
    def from_path(cls, path: str | Path) -> Blacklist:
        return cls(StaticWhitelist.from_path(path))

    @property
    def listed(self) -> StaticWhitelist:
        """The wrapped whitelist."""
        return self._listed

    def permits_method(
        self, call: ResolvedCall, receiver: object = None, args: Sequence[object] = ()
    ) -> bool:
        return not self._listed.permits_method(call, receiver, args)

    def permits_constructor(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return not self._listed.permits_constructor(call, args)

    def permits_static_method(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return not self._listed.permits_static_method(call, args)

    def permits_field_get(self, call: ResolvedCall, receiver: object = None) -> bool:
        return not self._listed.permits_field_get(call, receiver)

    def permits_field_set(
        self, call: ResolvedCall, receiver: object = None, value: object = None
    ) -> bool:
        return self._listed.permits_field_set(call, receiver, value)

    def permits_static_field_get(self, call: ResolvedCall) -> bool:
        return not self._listed.permits_static_field_get(call)

    def permits_static_field_set(self, call: ResolvedCall, value: object = None) -> bool:
        return self._listed.permits_static_field_set(call, value)
