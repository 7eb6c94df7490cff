# Socket handlers package for the SongSketch relay
# One handler class per concern, wired to Socket.IO events by setup_socket_handlers

# Export the main setup function
from .setup import setup_socket_handlers

# Import all handler modules
from .connection_handlers import ConnectionHandlers
from .room_handlers import RoomHandlers
from .game_handlers import GameHandlers
from .admin_handlers import AdminHandlers
from .gateway import (Connection, BroadcastRouter, SocketIOConnection,
                      SocketIOBroadcastRouter, current_connection)
from .room_state import ROOM_STATE_SH

__all__ = [
    'setup_socket_handlers',
    'ConnectionHandlers',
    'RoomHandlers',
    'GameHandlers',
    'AdminHandlers',
    'Connection',
    'BroadcastRouter',
    'SocketIOConnection',
    'SocketIOBroadcastRouter',
    'current_connection',
    'ROOM_STATE_SH'
]
