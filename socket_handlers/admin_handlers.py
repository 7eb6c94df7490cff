# Administrative handlers for socket events
from flask_socketio import emit


class AdminHandlers:
    """Handles administrative actions like debugging"""

    def __init__(self, socketio, coordinator):
        self.socketio = socketio
        self.coordinator = coordinator

    def handle_debug_room_state(self, data=None):
        """Handle debug room state request"""
        rooms = self.coordinator.snapshot()
        emit('debug-info', {
            'total_rooms': len(rooms),
            'total_players': sum(room['player_count'] for room in rooms),
            'rooms': rooms
        })
