# Connection handling for socket events
from flask import request
from util.logging_utils import debug_log
from .gateway import current_connection


class ConnectionHandlers:
    """Handles client connection and disconnection events"""

    def __init__(self, socketio, coordinator):
        self.socketio = socketio
        self.coordinator = coordinator

    @staticmethod
    def handle_connect(auth=None):
        """Handle new client connection"""
        debug_log("Client connecting to server", request.sid, None, {
            'connection_source': 'socket_connect'
        })

    def handle_disconnect(self, reason=None):
        """Handle client disconnect, freeing the player's seat"""
        connection = current_connection(self.socketio)

        debug_log("Client disconnecting from server", connection.sid, None, {
            'disconnect_source': 'socket_disconnect',
            'reason': str(reason) if reason else None
        })

        self.coordinator.disconnect(connection)
