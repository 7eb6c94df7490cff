"""
Common test utilities and helpers for SongSketch relay tests.

This module provides shared fixtures, recording fakes for the connection
gateway and broadcast router, and helpers for driving the Flask-SocketIO
test client.
"""

import itertools
import pytest

# Import the main application components
from server import app, socketio as app_socketio
from socket_handlers.gateway import Connection, BroadcastRouter
from socket_handlers.room_state import ROOM_STATE_SH
from room_logic import RoomRegistry, SessionCoordinator, placeholder_policy

_sid_counter = itertools.count(1)


class RecordingConnection(Connection):
    """Connection fake that remembers its broadcast groups"""

    def __init__(self, sid=None):
        self._sid = sid or f"sid_{next(_sid_counter)}"
        self.groups = set()
        self.sent = []

    @property
    def sid(self):
        return self._sid

    def send(self, event, data=None):
        self.sent.append((event, data))

    def join(self, room_code):
        self.groups.add(room_code)

    def leave(self, room_code):
        self.groups.discard(room_code)


class RecordingRouter(BroadcastRouter):
    """
    Broadcast router fake that delivers into per-connection inboxes.

    Room membership is resolved from the connections' broadcast groups at
    the moment of the broadcast, the same way Socket.IO resolves rooms.
    """

    def __init__(self):
        self.connections = {}
        self.inbox = {}
        self.log = []

    def register(self, connection):
        self.connections[connection.sid] = connection
        self.inbox.setdefault(connection.sid, [])
        return connection

    def _deliver(self, sids, event, data):
        for sid in sids:
            self.inbox.setdefault(sid, []).append((event, data))

    def _members(self, room_code):
        return [sid for sid, conn in self.connections.items() if room_code in conn.groups]

    def to_all(self, room_code, event, data=None):
        self.log.append(('all', room_code, None, event, data))
        self._deliver(self._members(room_code), event, data)

    def to_all_except_sender(self, room_code, sender, event, data=None):
        self.log.append(('except_sender', room_code, sender.sid, event, data))
        self._deliver([sid for sid in self._members(room_code) if sid != sender.sid], event, data)

    def to_sender(self, sender, event, data=None):
        self.log.append(('sender', None, sender.sid, event, data))
        self._deliver([sender.sid], event, data)

    def events_for(self, connection, name=None):
        """Events delivered to ``connection``, optionally filtered by name"""
        events = self.inbox.get(connection.sid, [])
        if name is None:
            return list(events)
        return [data for event, data in events if event == name]

    def clear(self):
        for sid in self.inbox:
            self.inbox[sid] = []
        self.log.clear()


def event_names(received):
    """Names of the events in a Flask-SocketIO test client ``get_received()`` list"""
    return [pkt['name'] for pkt in received]


def find_event(received, name):
    """Arguments of the first received event called ``name``, or None"""
    for pkt in received:
        if pkt['name'] == name:
            return pkt['args']
    return None


def assert_single_host(room):
    """Assert the host invariant for a non-empty room"""
    hosts = [player for player in room.players if player.is_host]
    assert len(hosts) == 1, f"Expected exactly one host, got {hosts}"


@pytest.fixture
def registry():
    """Fresh registry, independent of the server's global one"""
    return RoomRegistry()


@pytest.fixture
def router():
    return RecordingRouter()


@pytest.fixture
def coordinator(registry, router):
    return SessionCoordinator(registry, router, is_correct=placeholder_policy)


@pytest.fixture
def connections(router):
    """Factory for registered recording connections"""
    def make(count=1):
        return [router.register(RecordingConnection()) for _ in range(count)]
    return make


@pytest.fixture
def relay_app():
    """Flask app configured for testing"""
    app.config['TESTING'] = True
    app.config['SECRET_KEY'] = 'test_secret_key'
    return app


@pytest.fixture
def socketio_app(relay_app):
    """SocketIO instance for testing"""
    return app_socketio


@pytest.fixture
def clean_room_state():
    """Clean the global room registry before and after each test"""
    ROOM_STATE_SH.clear()
    yield ROOM_STATE_SH
    ROOM_STATE_SH.clear()


@pytest.fixture
def sio_clients(relay_app, socketio_app, clean_room_state):
    """Factory for connected Flask-SocketIO test clients, disconnected at teardown"""
    clients = []

    def make(count=1):
        new_clients = [socketio_app.test_client(relay_app) for _ in range(count)]
        clients.extend(new_clients)
        return new_clients

    yield make

    for client in clients:
        if client.is_connected():
            client.disconnect()
