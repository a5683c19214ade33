"""Evaluator contract consulted by the script interceptor.

The interceptor resolves each dynamic dispatch to a concrete member, wraps
it in a :class:`~script_sandbox.signatures.ResolvedCall` and asks one of the
seven ``permits_*`` questions.  Receivers, arguments and assigned values are
passed through for forward compatibility; implementations in this package
decide on the resolved member alone.

Note that the call must name the member that is actually declared: if a
method overrides one from a supertype, the interceptor passes the supertype
declaration.  Call-site selection is not the evaluator's job.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from script_sandbox.signatures.model import ResolvedCall


class Whitelist(ABC):
    """Decides which methods, constructors and fields scripts may use."""

    @abstractmethod
    def permits_method(
        self, call: ResolvedCall, receiver: object = None, args: Sequence[object] = ()
    ) -> bool:
        """Return True to allow an instance method call.

        Parameters
        ----------
        call:
            The resolved method.
        receiver:
            ``self`` of the call.
        args:
            Zero or more arguments.
        """

    @abstractmethod
    def permits_constructor(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        """Return True to allow a constructor call."""

    @abstractmethod
    def permits_static_method(self, call: ResolvedCall, args: Sequence[object] = ()) -> bool:
        """Return True to allow a static method call."""

    @abstractmethod
    def permits_field_get(self, call: ResolvedCall, receiver: object = None) -> bool:
        """Return True to allow reading an instance field."""

    @abstractmethod
    def permits_field_set(
        self, call: ResolvedCall, receiver: object = None, value: object = None
    ) -> bool:
        """Return True to allow writing an instance field."""

    @abstractmethod
    def permits_static_field_get(self, call: ResolvedCall) -> bool:
        """Return True to allow reading a static field."""

    @abstractmethod
    def permits_static_field_set(self, call: ResolvedCall, value: object = None) -> bool:
        """Return True to allow writing a static field."""
