# Game action handlers for socket events
from .gateway import current_connection


class GameHandlers:
    """Handles in-game actions like drawing, choosing songs and guessing"""

    def __init__(self, socketio, coordinator):
        self.socketio = socketio
        self.coordinator = coordinator

    def handle_start_game(self, room_code=None):
        """Handle the host starting the game"""
        self.coordinator.start_game(current_connection(self.socketio), room_code)

    def handle_song_chosen(self, data=None):
        """Handle the drawer choosing a song"""
        self.coordinator.choose_song(current_connection(self.socketio), data)

    def handle_drawing_data(self, data=None):
        """Handle a stroke from the drawer"""
        self.coordinator.relay_drawing(current_connection(self.socketio), data)

    def handle_clear_canvas(self, room_code=None):
        """Handle the drawer clearing the canvas"""
        self.coordinator.clear_canvas(current_connection(self.socketio), room_code)

    def handle_submit_guess(self, data=None):
        """Handle a guess posted to the room chat"""
        self.coordinator.submit_guess(current_connection(self.socketio), data)

    def handle_request_drawing_history(self, room_code=None):
        """Handle a late joiner asking for the strokes drawn so far"""
        self.coordinator.send_drawing_history(current_connection(self.socketio), room_code)
