"""CLI package.

The ``cli`` sub-package contains the Click application. Commands load
records through :mod:`promptforge.config` and reuse the same compose
and protocol code the server runs.
"""
from __future__ import annotations
