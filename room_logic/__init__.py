# Room logic package for the SongSketch relay
# Rooms, the registry that owns them and the coordinator that drives them

from .errors import RelayError, RoomNotFound, RoomFull, RoomCodeCollision, RoomCodeExhausted
from .room import Room, Player, LOBBY, IN_GAME
from .registry import RoomRegistry
from .coordinator import SessionCoordinator
from .guess_policy import mask_song, placeholder_policy, song_title_policy, get_guess_policy
from .room_code import generate_room_code, generate_unique_room_code, normalize_room_code

__all__ = [
    'RelayError',
    'RoomNotFound',
    'RoomFull',
    'RoomCodeCollision',
    'RoomCodeExhausted',
    'Room',
    'Player',
    'LOBBY',
    'IN_GAME',
    'RoomRegistry',
    'SessionCoordinator',
    'mask_song',
    'placeholder_policy',
    'song_title_policy',
    'get_guess_policy',
    'generate_room_code',
    'generate_unique_room_code',
    'normalize_room_code',
]
