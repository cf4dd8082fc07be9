"""
Language Server Unit Tests
==========================

Tests for the server factory and the lifecycle handlers.
"""

from lsprotocol import types
from pygls.lsp.server import LanguageServer

from ranni import __version__
from ranni.lsp.server import (
    INITIALIZED_MESSAGE,
    SERVER_NAME,
    create_server,
    initialized,
)


class RecordingServer:
    """Stands in for the server object handed to feature handlers."""

    def __init__(self):
        self.log_messages = []

    def window_log_message(self, params):
        self.log_messages.append(params)


class TestCreateServer:

    def test_server_type(self):
        assert isinstance(create_server(), LanguageServer)

    def test_server_info(self):
        server = create_server()
        assert server.name == SERVER_NAME == "ranni"
        assert server.version == __version__

    def test_fresh_server_per_call(self):
        assert create_server() is not create_server()


class TestInitialized:
    """The initialized notification handler."""

    def test_logs_message(self):
        ls = RecordingServer()
        initialized(ls, types.InitializedParams())
        assert len(ls.log_messages) == 1
        params = ls.log_messages[0]
        assert params.type == types.MessageType.Info
        assert params.message == INITIALIZED_MESSAGE == "server initialized!"

    def test_message_type_is_info(self):
        ls = RecordingServer()
        initialized(ls, types.InitializedParams())
        assert int(ls.log_messages[0].type) == 3

    def test_registered_on_server(self):
        server = create_server()
        assert types.INITIALIZED in server.protocol.fm.features
