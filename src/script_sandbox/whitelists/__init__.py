"""Whitelist implementations.

- :class:`EnumeratingWhitelist` — first-match search with a decision cache
- :class:`StaticWhitelist`      — allow-list parsed from a definition source
- :class:`Blacklist`            — deny-list negating a static whitelist
- :class:`LoaderWhitelist`      — allow everything from one loader
- :class:`PermitAllWhitelist`   — allow everything
"""
from __future__ import annotations

from script_sandbox.whitelists.blacklist import Blacklist
from script_sandbox.whitelists.enumerating import EnumeratingWhitelist
from script_sandbox.whitelists.loader import LoaderWhitelist
from script_sandbox.whitelists.permit_all import PermitAllWhitelist
from script_sandbox.whitelists.static import (
    PERMANENTLY_BLACKLISTED_CONSTRUCTORS,
    PERMANENTLY_BLACKLISTED_METHODS,
    PERMANENTLY_BLACKLISTED_STATIC_METHODS,
    StaticWhitelist,
)

__all__ = [
    "Blacklist",
    "EnumeratingWhitelist",
    "LoaderWhitelist",
    "PERMANENTLY_BLACKLISTED_CONSTRUCTORS",
    "PERMANENTLY_BLACKLISTED_METHODS",
    "PERMANENTLY_BLACKLISTED_STATIC_METHODS",
    "PermitAllWhitelist",
    "StaticWhitelist",
]
