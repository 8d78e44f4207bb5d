#!/usr/bin/env python3
"""Example: Quickstart — prompt-forge

Minimal working example: load the built-in records, compose an agent's
prompt, combine instructions, and run one request through the server.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install prompt-forge
"""
from __future__ import annotations

import io

import promptforge


def main() -> None:
    print(f"prompt-forge version: {promptforge.__version__}")

    # Step 1: Load records (built-in defaults when no source is given)
    snapshot = promptforge.load_snapshot()
    print(f"Loaded {snapshot!r}")

    # Step 2: Compose the default agent's full prompt
    document = promptforge.compose(snapshot, "default")
    print(f"\nComposed prompt ({len(document)} chars):")
    print(document[:200])

    # Step 3: All enabled instructions, highest priority first
    combined = promptforge.combine_instructions(snapshot)
    print(f"\nCombined instructions ({len(combined)} chars)")

    # Step 4: One JSON-RPC request through the stdio server
    writer = io.StringIO()
    promptforge.serve(
        reader=io.StringIO('{"jsonrpc":"2.0","id":1,"method":"tools/list"}\n'),
        writer=writer,
    )
    print(f"\ntools/list response: {writer.getvalue()[:120]}...")


if __name__ == "__main__":
    main()
