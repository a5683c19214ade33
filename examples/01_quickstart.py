#!/usr/bin/env python3
"""Example: Quickstart — script-sandbox

Minimal working example: load an allow-list, decide a few calls the way an
interceptor would, and build rejection messages for the ones refused.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install script-sandbox
"""
from __future__ import annotations

import script_sandbox as sandbox


def main() -> None:
    print(f"script-sandbox version: {sandbox.__version__}")

    # Step 1: Load the allow-list and a deny-list
    whitelist = sandbox.StaticWhitelist.from_text(
        "method java.lang.String *\n"
        "staticMethod java.lang.Math max int int\n"
        "field java.awt.Point x\n"
    )
    blacklist = sandbox.Blacklist.from_text("method java.io.File delete\n")
    gate = sandbox.EnvReadGate(["PATH_.*"])
    print(f"Allow-list ready: {whitelist.signature_count} signatures loaded")

    # Step 2: Decide some calls
    calls = [
        sandbox.ResolvedCall("java.lang.String", "trim"),
        sandbox.ResolvedCall("java.lang.String", "split", ("java.lang.String",)),
        sandbox.ResolvedCall("java.io.File", "delete"),
    ]
    for call in calls:
        allowed = whitelist.permits_method(call)
        print(f"  {call.canonical(sandbox.SignatureKind.METHOD)}: allowed={allowed}")
        if not allowed:
            print(f"    {sandbox.StaticWhitelist.reject_method(call)}")
        print(f"    deny-list allows: {blacklist.permits_method(call)}")

    # Step 3: The environment gate sits next to the whitelist
    getenv = sandbox.ResolvedCall("java.lang.System", "getenv", ("java.lang.String",))
    for name in ("PATH_HOME", "HOME"):
        allowed = whitelist.permits_static_method(getenv, [name]) or gate.is_allowed(getenv, [name])
        print(f"  getenv({name}): allowed={allowed}")


if __name__ == "__main__":
    main()
