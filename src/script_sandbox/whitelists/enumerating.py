"""Whitelist that enumerates signatures and searches them.

Subclasses supply five signature sequences, one per operation kind.  A
query scans the matching sequence in insertion order and allows the call at
the first signature that matches; wildcard and exact entries have no
relative priority.  The sequences must not change after construction.

Decisions are memoized per canonical signature text.  The cache is a plain
dict filled with ``setdefault``, which is atomic, so concurrent callers need
no lock: two threads racing on the same key compute the same answer and the
first stored value wins.
"""
from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Sequence

from script_sandbox.signatures.model import ResolvedCall, Signature, SignatureKind
from script_sandbox.whitelist import Whitelist

logger = logging.getLogger(__name__)


class EnumeratingWhitelist(Whitelist):
    """First-match evaluator over per-kind signature sequences."""

    def __init__(self) -> None:
        self._permitted_cache: dict[str, bool] = {}

    @abstractmethod
    def method_signatures(self) -> Sequence[Signature]:
        """Instance method signatures."""

    @abstractmethod
    def new_signatures(self) -> Sequence[Signature]:
        """Constructor signatures."""

    @abstractmethod
    def static_method_signatures(self) -> Sequence[Signature]:
        """Static method signatures."""

    @abstractmethod
    def field_signatures(self) -> Sequence[Signature]:
        """Instance field signatures."""

    @abstractmethod
    def static_field_signatures(self) -> Sequence[Signature]:
        """Static field signatures."""

    # ------------------------------------------------------------------
    # Whitelist API
    # ------------------------------------------------------------------

    def permits_method(
        self, call: ResolvedCall, receiver: object = None, args: Sequence[object] = ()
    ) -> bool:
        return self._permits(SignatureKind.METHOD, call, self.method_signatures())

    def permits_constructor(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return self._permits(SignatureKind.NEW, call, self.new_signatures())

    def permits_static_method(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        return self._permits(SignatureKind.STATIC_METHOD, call, self.static_method_signatures())

    def permits_field_get(self, call: ResolvedCall, receiver: object = None) -> bool:
        return self._permits(SignatureKind.FIELD, call, self.field_signatures())

    def permits_field_set(
        self, call: ResolvedCall, receiver: object = None, value: object = None
    ) -> bool:
        # A field entry grants both read and write.
        return self.permits_field_get(call, receiver)

    def permits_static_field_get(self, call: ResolvedCall) -> bool:
        return self._permits(SignatureKind.STATIC_FIELD, call, self.static_field_signatures())

    def permits_static_field_set(self, call: ResolvedCall, value: object = None) -> bool:
        return self.permits_static_field_get(call)

    # ------------------------------------------------------------------
    # Cache introspection
    # ------------------------------------------------------------------

    @property
    def cache_size(self) -> int:
        """Number of memoized decisions."""
        return len(self._permitted_cache)

    def cached_decision(self, key: str) -> bool | None:
        """Return the memoized decision for a canonical key, if any."""
        return self._permitted_cache.get(key)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _permits(
        self,
        kind: SignatureKind,
        call: ResolvedCall,
        signatures: Sequence[Signature],
    ) -> bool:
        key = call.canonical(kind)
        cached = self._permitted_cache.get(key)
        if cached is not None:
            return cached

        output = any(sig.matches(call) for sig in signatures)
        logger.debug("Cache miss for %r -> %s", key, output)
        return self._permitted_cache.setdefault(key, output)
