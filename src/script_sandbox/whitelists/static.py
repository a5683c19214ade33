"""Whitelist based on a static definition source.

A StaticWhitelist is built once from definition lines (see
:mod:`script_sandbox.signatures.parser`) and sorts each signature into the
collection for its kind, keeping source order.  A malformed line aborts
construction.

The class also carries a fixed set of permanently blacklisted signatures:
calls that no definition file can make safe (process exit, global property
and environment getters, and the sandbox's own constructor wrappers).  They
are not consulted by ``permits_*``; approval tooling uses the
``is_permanently_blacklisted*`` queries to keep them out of pending-approval
lists.

Example
-------
::

    wl = StaticWhitelist.from_text(
        "method java.lang.String length\\n"
        "staticMethod java.lang.Math max int int\\n"
    )
    call = ResolvedCall("java.lang.String", "length")
    if not wl.permits_method(call):
        raise StaticWhitelist.reject_method(call)
"""
from __future__ import annotations

import importlib.resources
import logging
import urllib.request
from pathlib import Path
from typing import Iterable, Sequence

from script_sandbox.errors import RejectedAccessError
from script_sandbox.signatures.model import ResolvedCall, Signature, SignatureKind
from script_sandbox.signatures.parser import iter_signatures
from script_sandbox.whitelists.enumerating import EnumeratingWhitelist

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"

PERMANENTLY_BLACKLISTED_METHODS: tuple[str, ...] = (
    "method java.lang.Runtime exit int",
    "method java.lang.Runtime halt int",
)

PERMANENTLY_BLACKLISTED_STATIC_METHODS: tuple[str, ...] = (
    "staticMethod java.lang.System exit int",
    "staticMethod java.lang.System getProperties",
    "staticMethod java.lang.System getProperty java.lang.String",
    "staticMethod java.lang.System getProperty java.lang.String java.lang.String",
    "staticMethod java.lang.System getenv",
    "staticMethod java.lang.System getenv java.lang.String",
)

PERMANENTLY_BLACKLISTED_CONSTRUCTORS: tuple[str, ...] = (
    "new org.kohsuke.groovy.sandbox.impl.Checker$SuperConstructorWrapper java.lang.Object[]",
    "new org.kohsuke.groovy.sandbox.impl.Checker$ThisConstructorWrapper java.lang.Object[]",
)

_ALL_PERMANENTLY_BLACKLISTED: frozenset[str] = frozenset(
    PERMANENTLY_BLACKLISTED_METHODS
    + PERMANENTLY_BLACKLISTED_STATIC_METHODS
    + PERMANENTLY_BLACKLISTED_CONSTRUCTORS
)

_REJECT_TEMPLATE = (
    "Insecure call to '{detail}' you can tweak the security sandbox to allow it. "
    "Read more about this in the documentation."
)


class StaticWhitelist(EnumeratingWhitelist):
    """Allow-list holding the signatures read from one definition source.

    Parameters
    ----------
    lines:
        Definition lines; comments and blank lines are skipped.
    source:
        Identifier used in parse errors and log messages.

    Raises
    ------
    SignatureParseError
        On the first malformed line.
    """

    def __init__(self, lines: Iterable[str] = (), source: str | None = None) -> None:
        super().__init__()
        self._source = source or "<lines>"
        buckets: dict[SignatureKind, list[Signature]] = {kind: [] for kind in SignatureKind}
        for sig in iter_signatures(lines, self._source):
            buckets[sig.kind].append(sig)

        self._method_signatures = tuple(buckets[SignatureKind.METHOD])
        self._new_signatures = tuple(buckets[SignatureKind.NEW])
        self._static_method_signatures = tuple(buckets[SignatureKind.STATIC_METHOD])
        self._field_signatures = tuple(buckets[SignatureKind.FIELD])
        self._static_field_signatures = tuple(buckets[SignatureKind.STATIC_FIELD])

        logger.info(
            "Loaded %d signatures from %s "
            "(method=%d, staticMethod=%d, new=%d, field=%d, staticField=%d)",
            sum(len(bucket) for bucket in buckets.values()),
            self._source,
            len(self._method_signatures),
            len(self._static_method_signatures),
            len(self._new_signatures),
            len(self._field_signatures),
            len(self._static_field_signatures),
        )

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_text(cls, text: str, source: str | None = None) -> StaticWhitelist:
        return cls(text.splitlines(), source=source or "<text>")

    @classmethod
    def from_path(cls, path: str | Path) -> StaticWhitelist:
        """Load a definition file from disk.

        Raises
        ------
        FileNotFoundError
            If the file does not exist.
        SignatureParseError
            On the first malformed line.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Whitelist definition not found: {path}")
        with path.open("r", encoding=DEFAULT_ENCODING) as fh:
            return cls(fh.read().splitlines(), source=str(path))

    @classmethod
    def from_url(cls, url: str, timeout: float = 10.0) -> StaticWhitelist:
        """Read a definition source fully from *url*, then parse it."""
        with urllib.request.urlopen(url, timeout=timeout) as response:  # noqa: S310
            text = response.read().decode(DEFAULT_ENCODING)
        return cls.from_text(text, source=url)

    @classmethod
    def from_resource(cls, package: str, resource: str) -> StaticWhitelist:
        """Load a definition file shipped as package data."""
        ref = importlib.resources.files(package).joinpath(resource)
        text = ref.read_text(encoding=DEFAULT_ENCODING)
        return cls.from_text(text, source=f"{package}/{resource}")

    # ------------------------------------------------------------------
    # Signature collections
    # ------------------------------------------------------------------

    @property
    def source(self) -> str:
        return self._source

    def method_signatures(self) -> Sequence[Signature]:
        return self._method_signatures

    def new_signatures(self) -> Sequence[Signature]:
        return self._new_signatures

    def static_method_signatures(self) -> Sequence[Signature]:
        return self._static_method_signatures

    def field_signatures(self) -> Sequence[Signature]:
        return self._field_signatures

    def static_field_signatures(self) -> Sequence[Signature]:
        return self._static_field_signatures

    def signatures(self) -> list[Signature]:
        """All signatures in presentation order."""
        return sorted(
            self._method_signatures
            + self._static_method_signatures
            + self._new_signatures
            + self._field_signatures
            + self._static_field_signatures
        )

    @property
    def signature_count(self) -> int:
        return (
            len(self._method_signatures)
            + len(self._static_method_signatures)
            + len(self._new_signatures)
            + len(self._field_signatures)
            + len(self._static_field_signatures)
        )

    # ------------------------------------------------------------------
    # Permanent blacklist
    # ------------------------------------------------------------------

    @staticmethod
    def is_permanently_blacklisted(signature: str | Signature) -> bool:
        """Return True if *signature* must never show up for approval."""
        return str(signature) in _ALL_PERMANENTLY_BLACKLISTED

    @staticmethod
    def is_permanently_blacklisted_method(call: ResolvedCall) -> bool:
        return call.canonical(SignatureKind.METHOD) in PERMANENTLY_BLACKLISTED_METHODS

    @staticmethod
    def is_permanently_blacklisted_static_method(call: ResolvedCall) -> bool:
        return call.canonical(SignatureKind.STATIC_METHOD) in PERMANENTLY_BLACKLISTED_STATIC_METHODS

    @staticmethod
    def is_permanently_blacklisted_constructor(call: ResolvedCall) -> bool:
        return call.canonical(SignatureKind.NEW) in PERMANENTLY_BLACKLISTED_CONSTRUCTORS

    # ------------------------------------------------------------------
    # Rejections
    # ------------------------------------------------------------------

    @staticmethod
    def rejection_message(detail: str) -> str:
        """Format the user-facing message for a rejected signature."""
        return _REJECT_TEMPLATE.format(detail=detail)

    @classmethod
    def reject_method(cls, call: ResolvedCall, info: str | None = None) -> RejectedAccessError:
        return cls._reject(call.canonical(SignatureKind.METHOD), info)

    @classmethod
    def reject_static_method(cls, call: ResolvedCall) -> RejectedAccessError:
        return cls._reject(call.canonical(SignatureKind.STATIC_METHOD))

    @classmethod
    def reject_new(cls, call: ResolvedCall) -> RejectedAccessError:
        return cls._reject(call.canonical(SignatureKind.NEW))

    @classmethod
    def reject_field(cls, call: ResolvedCall) -> RejectedAccessError:
        return cls._reject(call.canonical(SignatureKind.FIELD))

    @classmethod
    def reject_static_field(cls, call: ResolvedCall) -> RejectedAccessError:
        return cls._reject(call.canonical(SignatureKind.STATIC_FIELD))

    @classmethod
    def _reject(cls, signature: str, info: str | None = None) -> RejectedAccessError:
        detail = signature if info is None else f"{signature} ({info})"
        return RejectedAccessError(signature, cls.rejection_message(detail), info)
