# Process-wide registry of relay rooms
import threading

from util.logging_utils import debug_log
from .errors import RoomCodeCollision
from .room import Room
from .room_code import generate_unique_room_code


class RoomRegistry:
    """
    Owner of every live room.

    Maps room codes to rooms and keeps a reverse index from connection ID to
    the code of the room that connection is seated in. Mapping and index
    changes are serialized by one registry lock; room state itself is guarded
    by each room's own lock. Code that holds both takes the room lock first.
    """

    def __init__(self, room_factory=Room):
        self._rooms = {}
        self._player_rooms = {}
        self._lock = threading.RLock()
        self._room_factory = room_factory

    def create(self, code=None, host_id=None):
        """
        Register a new room.

        When ``host_id`` is given the host is seated and indexed before the
        room becomes visible to lookups, so nobody can join ahead of the host.

        Parameters
        ----------
        code : str, optional
            Code to register the room under; a free code is generated when
            omitted
        host_id : str, optional
            Connection ID of the creator to seat as host

        Returns
        -------
        Room
            The newly registered room

        Raises
        ------
        RoomCodeCollision
            If ``code`` is already registered
        RoomCodeExhausted
            If no free code could be generated
        """
        with self._lock:
            if code is None:
                code = generate_unique_room_code(self.__contains__)
            elif code in self._rooms:
                raise RoomCodeCollision(f"Room code {code} is already in use")

            room = self._room_factory(code)
            if host_id is not None:
                room.add_host(host_id)
                self._player_rooms[host_id] = code
            self._rooms[code] = room
            debug_log("Room registered", None, code, {'room_count': len(self._rooms)})
            return room

    def get(self, code):
        with self._lock:
            return self._rooms.get(code)

    def delete(self, code):
        """Remove a room and every reverse-index entry pointing at it"""
        with self._lock:
            room = self._rooms.pop(code, None)
            if room is None:
                return None
            stale = [sid for sid, room_code in self._player_rooms.items() if room_code == code]
            for sid in stale:
                del self._player_rooms[sid]
            debug_log("Room deleted", None, code, {'room_count': len(self._rooms)})
            return room

    def bind(self, sid, code):
        """Record that connection ``sid`` is seated in room ``code``"""
        with self._lock:
            self._player_rooms[sid] = code

    def unbind(self, sid):
        with self._lock:
            return self._player_rooms.pop(sid, None)

    def room_code_for(self, sid):
        with self._lock:
            return self._player_rooms.get(sid)

    def rooms(self):
        with self._lock:
            return list(self._rooms.values())

    def clear(self):
        with self._lock:
            self._rooms.clear()
            self._player_rooms.clear()

    def __contains__(self, code):
        with self._lock:
            return code in self._rooms

    def __len__(self):
        with self._lock:
            return len(self._rooms)
