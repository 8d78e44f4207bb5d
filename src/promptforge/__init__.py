"""prompt-forge — serve agents, skills and instructions to AI assistants over JSON-RPC.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
::

    import promptforge

    # Load records (SQLite database, JSON/YAML file, or built-in defaults)
    snapshot = promptforge.load_snapshot("records.yaml")

    # Compose an agent's full prompt
    text = promptforge.compose(snapshot, "default")

    # All enabled instructions, highest priority first
    combined = promptforge.combine_instructions(snapshot)

    # Run the stdio server
    promptforge.serve("records.yaml")

    promptforge.__version__
    '0.1.0'
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TextIO

__version__: str = "0.1.0"

# Load the ``compose`` subpackage before ``def compose`` below so that the
# function, not the submodule, ends up bound to ``promptforge.compose``.
import promptforge.compose as _compose_pkg  # noqa: E402,F401

if TYPE_CHECKING:
    from promptforge.snapshot import Snapshot, SnapshotProvider


def _provider_for(source: "str | Path | SnapshotProvider | None") -> "SnapshotProvider":
    from promptforge.snapshot import (
        BuiltinSnapshotProvider,
        FileSnapshotProvider,
        SqliteSnapshotProvider,
    )

    if source is None:
        return BuiltinSnapshotProvider()
    if isinstance(source, (str, Path)):
        path = Path(source)
        if path.suffix.lower() in FileSnapshotProvider.SUFFIXES:
            return FileSnapshotProvider(path)
        return SqliteSnapshotProvider(path)
    return source


def load_snapshot(source: "str | Path | SnapshotProvider | None" = None) -> "Snapshot":
    """Load records into an immutable ``Snapshot``.

    Parameters
    ----------
    source:
        A ``.json``/``.yaml``/``.yml`` records file, a SQLite database
        path, any object with a ``load()`` method, or ``None`` for the
        built-in default records.

    Returns
    -------
    Snapshot
        The loaded records.

    Raises
    ------
    OSError, sqlite3.Error, ValueError, yaml.YAMLError
        If the records cannot be loaded.
    """
    from promptforge.snapshot import Snapshot

    agents, skills, instructions = _provider_for(source).load()
    return Snapshot.from_records(agents, skills, instructions)


def compose(snapshot: "Snapshot", agent: str) -> str:
    """Compose the full prompt for ``agent`` (id or case-insensitive name).

    Raises
    ------
    KeyError
        If no such agent exists in ``snapshot``.
    """
    from promptforge.compose import compose_agent

    record = snapshot.find_agent(agent)
    if record is None:
        raise KeyError(agent)
    return compose_agent(snapshot, record)


def combine_instructions(snapshot: "Snapshot") -> str:
    """Join all enabled instructions, highest priority first."""
    from promptforge.compose import combine_instructions as _combine

    return _combine(snapshot)


def serve(
    source: "str | Path | SnapshotProvider | None" = None,
    reader: TextIO | None = None,
    writer: TextIO | None = None,
) -> None:
    """Run the JSON-RPC server until ``reader`` (default stdin) is exhausted."""
    from promptforge.server import build_server

    build_server(_provider_for(source), reader=reader, writer=writer).serve_forever()


__all__ = [
    "__version__",
    "load_snapshot",
    "compose",
    "combine_instructions",
    "serve",
]
