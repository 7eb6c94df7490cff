# Connection gateway and broadcast routing over Flask-SocketIO
from abc import ABC, abstractmethod

from flask import request

from util.logging_utils import debug_log

DEFAULT_NAMESPACE = '/'


class Connection(ABC):
    """One client connection as seen by the room logic."""

    @property
    @abstractmethod
    def sid(self):
        """Identity of the connection; doubles as the player ID"""

    @abstractmethod
    def send(self, event, data=None):
        """Deliver an event to this connection only"""

    @abstractmethod
    def join(self, room_code):
        """Add this connection to a room's broadcast group"""

    @abstractmethod
    def leave(self, room_code):
        """Remove this connection from a room's broadcast group"""


class BroadcastRouter(ABC):
    """
    Fans outbound events out to the connections of a room.

    Delivery is fire-and-forget: nothing waits for acknowledgement and
    nothing is retried.
    """

    @abstractmethod
    def to_all(self, room_code, event, data=None):
        """Deliver to every connection in the room"""

    @abstractmethod
    def to_all_except_sender(self, room_code, sender, event, data=None):
        """Deliver to every connection in the room except ``sender``"""

    @abstractmethod
    def to_sender(self, sender, event, data=None):
        """Deliver to ``sender`` only"""


def _emit(socketio, event, data, **kwargs):
    # Events without a payload go out with no arguments at all
    if data is None:
        socketio.emit(event, **kwargs)
    else:
        socketio.emit(event, data, **kwargs)


class SocketIOConnection(Connection):
    """Connection backed by a Socket.IO session ID"""

    def __init__(self, socketio, sid, namespace=DEFAULT_NAMESPACE):
        self.socketio = socketio
        self._sid = sid
        self.namespace = namespace

    @property
    def sid(self):
        return self._sid

    def send(self, event, data=None):
        _emit(self.socketio, event, data, to=self._sid, namespace=self.namespace)

    def join(self, room_code):
        self.socketio.server.enter_room(self._sid, room_code, namespace=self.namespace)

    def leave(self, room_code):
        self.socketio.server.leave_room(self._sid, room_code, namespace=self.namespace)

    def __repr__(self):
        return f"SocketIOConnection(sid={self._sid!r})"


class SocketIOBroadcastRouter(BroadcastRouter):
    """Broadcast router that relies on Socket.IO rooms named after room codes"""

    def __init__(self, socketio, namespace=DEFAULT_NAMESPACE):
        self.socketio = socketio
        self.namespace = namespace

    def to_all(self, room_code, event, data=None):
        debug_log(f"Broadcast {event} to room", None, room_code)
        _emit(self.socketio, event, data, to=room_code, namespace=self.namespace)

    def to_all_except_sender(self, room_code, sender, event, data=None):
        debug_log(f"Broadcast {event} to room except sender", sender.sid, room_code)
        _emit(self.socketio, event, data, to=room_code, skip_sid=sender.sid, namespace=self.namespace)

    def to_sender(self, sender, event, data=None):
        debug_log(f"Send {event} to sender", sender.sid)
        sender.send(event, data)


def current_connection(socketio):
    """Wrap the Socket.IO session of the event being handled"""
    return SocketIOConnection(socketio, request.sid, namespace=request.namespace or DEFAULT_NAMESPACE)
