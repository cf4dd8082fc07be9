"""
Ranni Language Server
=====================

Language Server Protocol (LSP) stub for ranni, built on pygls.

Only the lifecycle is implemented: editors can start the server,
initialize it and shut it down cleanly. pygls handles the JSON-RPC
framing, the initialize/shutdown/exit requests and the process exit
code; the capabilities it advertises come from the features registered
here, so no document features are announced yet.

Lifecycle:
    initialize   (request)      -> capabilities and server info
    initialized  (notification) -> window/logMessage "server initialized!"
    shutdown     (request)      -> null
    exit         (notification) -> exit 0 after shutdown, 1 otherwise

Usage:
    # Run as standalone server
    $ ranni lsp

    # Or programmatically
    create_server().start_io()
"""

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from ranni import __version__

logger = logging.getLogger(__name__)

SERVER_NAME = "ranni"
INITIALIZED_MESSAGE = "server initialized!"


def initialized(ls: LanguageServer, params: types.InitializedParams) -> None:
    """Tell the client the server is ready."""
    logger.debug("Client finished initialization")
    ls.window_log_message(
        types.LogMessageParams(
            type=types.MessageType.Info,
            message=INITIALIZED_MESSAGE,
        )
    )


def create_server() -> LanguageServer:
    """Build a language server with the ranni handlers registered."""
    server = LanguageServer(SERVER_NAME, __version__)
    server.feature(types.INITIALIZED)(initialized)
    return server


def main() -> None:
    """Serve LSP on stdin/stdout until the client sends exit."""
    logger.info("Starting %s language server %s", SERVER_NAME, __version__)
    create_server().start_io()
