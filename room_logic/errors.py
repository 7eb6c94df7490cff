# Relay error types


class RelayError(Exception):
    """Base class for errors raised by the room logic"""


class RoomNotFound(RelayError):
    """Raised when an event names a room code that is not registered"""
    message = "Room not found."


class RoomFull(RelayError):
    """Raised when a join would push a room past its player limit"""
    message = "Room is full."


class RoomCodeCollision(RelayError):
    """Raised when a room is created under a code that is already registered"""


class RoomCodeExhausted(RelayError):
    """Raised when the generator cannot find a free room code"""
