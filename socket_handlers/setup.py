# Setup module for registering all socket handlers
from room_logic import SessionCoordinator
from .connection_handlers import ConnectionHandlers
from .room_handlers import RoomHandlers
from .game_handlers import GameHandlers
from .admin_handlers import AdminHandlers
from .gateway import SocketIOBroadcastRouter
from .room_state import ROOM_STATE_SH


def setup_socket_handlers(socketio, registry=ROOM_STATE_SH, is_correct=None):
    """
    Register all socket event handlers with the SocketIO instance.

    Parameters
    ----------
    socketio : SocketIO
        The Flask-SocketIO instance to register handlers with
    registry : RoomRegistry, optional
        Room registry the handlers operate on, defaults to the global one
    is_correct : callable, optional
        Guess policy ``is_correct(guess, song)``, defaults to the configured one

    Returns
    -------
    SessionCoordinator
        The coordinator wired to the handlers
    """
    coordinator = SessionCoordinator(registry, SocketIOBroadcastRouter(socketio), is_correct=is_correct)

    # Initialize handler classes
    connection_handlers = ConnectionHandlers(socketio, coordinator)
    room_handlers = RoomHandlers(socketio, coordinator)
    game_handlers = GameHandlers(socketio, coordinator)
    admin_handlers = AdminHandlers(socketio, coordinator)

    # Register connection handlers
    socketio.on_event('connect', connection_handlers.handle_connect)
    socketio.on_event('disconnect', connection_handlers.handle_disconnect)

    # Register room management handlers
    socketio.on_event('create-room', room_handlers.handle_create_room)
    socketio.on_event('join-room', room_handlers.handle_join_room)
    socketio.on_event('leave-room', room_handlers.handle_leave_room)

    # Register gameplay handlers
    socketio.on_event('start-game', game_handlers.handle_start_game)
    socketio.on_event('song-chosen', game_handlers.handle_song_chosen)
    socketio.on_event('drawing-data', game_handlers.handle_drawing_data)
    socketio.on_event('clear-canvas', game_handlers.handle_clear_canvas)
    socketio.on_event('submit-guess', game_handlers.handle_submit_guess)
    socketio.on_event('request-drawing-history', game_handlers.handle_request_drawing_history)

    # Register admin handlers
    socketio.on_event('debug-room-state', admin_handlers.handle_debug_room_state)

    return coordinator
