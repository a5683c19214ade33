"""script-sandbox — signature-based access control for sandboxed scripts.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import script_sandbox as sandbox
>>> wl = sandbox.StaticWhitelist.from_text("method java.lang.String *")
>>> wl.permits_method(sandbox.ResolvedCall("java.lang.String", "trim"))
True
>>> wl.permits_method(sandbox.ResolvedCall("java.lang.String", "split", ("java.lang.String",)))
False
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------
from script_sandbox.signatures.model import (
    ResolvedCall,
    Signature,
    SignatureKind,
    defining_loader,
)
from script_sandbox.signatures.naming import ArrayType, type_name
from script_sandbox.signatures.parser import format_signatures, parse_line, parse_lines

# ---------------------------------------------------------------------------
# Evaluators
# ---------------------------------------------------------------------------
from script_sandbox.whitelist import Whitelist
from script_sandbox.whitelists.blacklist import Blacklist
from script_sandbox.whitelists.enumerating import EnumeratingWhitelist
from script_sandbox.whitelists.loader import LoaderWhitelist
from script_sandbox.whitelists.permit_all import PermitAllWhitelist
from script_sandbox.whitelists.static import StaticWhitelist
from script_sandbox.env_gate import GETENV_SIGNATURE, EnvReadGate

# ---------------------------------------------------------------------------
# Configuration and errors
# ---------------------------------------------------------------------------
from script_sandbox.config import ConfigLoader, SandboxConfig
from script_sandbox.errors import (
    GateConfigError,
    RejectedAccessError,
    SandboxConfigError,
    SandboxError,
    SignatureParseError,
)

__all__ = [
    "__version__",
    # Signatures
    "ArrayType",
    "ResolvedCall",
    "Signature",
    "SignatureKind",
    "defining_loader",
    "format_signatures",
    "parse_line",
    "parse_lines",
    "type_name",
    # Evaluators
    "Blacklist",
    "EnumeratingWhitelist",
    "EnvReadGate",
    "GETENV_SIGNATURE",
    "LoaderWhitelist",
    "PermitAllWhitelist",
    "StaticWhitelist",
    "Whitelist",
    # Configuration and errors
    "ConfigLoader",
    "GateConfigError",
    "RejectedAccessError",
    "SandboxConfig",
    "SandboxConfigError",
    "SandboxError",
    "SignatureParseError",
]
