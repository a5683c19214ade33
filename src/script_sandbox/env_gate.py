"""Regex-gated allowance for reading one environment variable by name.

Reading the process environment is permanently blacklisted, but some
variables are harmless to expose.  An :class:`EnvReadGate` holds an ordered
list of regular expressions; the interceptor asks it about every static call
and lets an environment read through when the requested variable name fully
matches one of them, whatever the whitelist decided.  The gate only ever
adds permissions and is kept separate from the whitelists themselves.

Example
-------
::

    gate = EnvReadGate(["PATH_.*"])
    call = ResolvedCall("java.lang.System", "getenv", ("java.lang.String",))
    gate.is_allowed(call, ["PATH_HOME"])   # True
    gate.is_allowed(call, ["HOME"])        # False
"""
from __future__ import annotations

import logging
import re
from typing import Iterable, Sequence

from script_sandbox.errors import GateConfigError
from script_sandbox.signatures.model import ResolvedCall, Signature, SignatureKind

logger = logging.getLogger(__name__)

GETENV_SIGNATURE = Signature(
    SignatureKind.STATIC_METHOD, "java.lang.System", "getenv", ("java.lang.String",)
)


class EnvReadGate:
    """Allow environment reads whose variable name matches a configured pattern.

    Parameters
    ----------
    patterns:
        Regular expressions tried in order with full-match semantics.
    target:
        The single-string-parameter static call that reads the environment.

    Raises
    ------
    GateConfigError
        If a pattern does not compile.
    """

    def __init__(
        self,
        patterns: Iterable[str] = (),
        target: Signature = GETENV_SIGNATURE,
    ) -> None:
        if target.kind is not SignatureKind.STATIC_METHOD or len(target.parameter_types) != 1:
            raise ValueError(f"Environment read target must be a one-argument static method: {target}")
        self._target = target
        self._patterns: list[re.Pattern[str]] = []
        for pattern in patterns:
            try:
                self._patterns.append(re.compile(pattern))
            except re.error as exc:
                raise GateConfigError(pattern, str(exc)) from exc

    @property
    def patterns(self) -> list[str]:
        return [p.pattern for p in self._patterns]

    @property
    def target(self) -> Signature:
        return self._target

    def is_env_read(self, call: ResolvedCall) -> bool:
        """Return True if *call* is the environment-read call."""
        return call.canonical(SignatureKind.STATIC_METHOD) == str(self._target)

    def is_allowed(self, call: ResolvedCall, args: Sequence[object]) -> bool:
        """Return True if *call* reads an environment variable allowed by a pattern."""
        if not self.is_env_read(call) or len(args) != 1:
            return False
        name = args[0]
        if not isinstance(name, str):
            return False
        for pattern in self._patterns:
            if pattern.fullmatch(name):
                logger.debug("Environment read of %r allowed by %r", name, pattern.pattern)
                return True
        return False
