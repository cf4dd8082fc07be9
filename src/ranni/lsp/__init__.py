"""
Ranni Language Server
=====================

Lifecycle-only Language Server Protocol stub, run with ``ranni lsp``.
"""

from ranni.lsp.server import (
    SERVER_NAME,
    create_server,
    initialized,
    main,
)

__all__ = [
    "SERVER_NAME",
    "create_server",
    "initialized",
    "main",
]
