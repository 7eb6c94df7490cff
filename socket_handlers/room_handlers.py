# Room management handlers for socket events
from util.logging_utils import debug_log
from .gateway import current_connection


class RoomHandlers:
    """Handles room creation, joining, and leaving operations"""

    def __init__(self, socketio, coordinator):
        self.socketio = socketio
        self.coordinator = coordinator

    def handle_create_room(self, data=None):
        """Handle room creation request; the event carries no payload"""
        connection = current_connection(self.socketio)
        room = self.coordinator.create_room(connection)
        if room is None:
            debug_log("Room creation dropped", connection.sid)

    def handle_join_room(self, room_code=None):
        """Handle room join request with the room code as payload"""
        self.coordinator.join_room(current_connection(self.socketio), room_code)

    def handle_leave_room(self, data=None):
        """Handle player leaving their room without disconnecting"""
        self.coordinator.leave_room(current_connection(self.socketio))
