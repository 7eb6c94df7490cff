# Room and player state for the SongSketch relay
import threading
from datetime import datetime

from util.config import CONSTANTS
from util.logging_utils import debug_log

LOBBY = "lobby"
IN_GAME = "in-game"


class Player:
    """A seat in a room, owned by one client connection."""

    def __init__(self, player_id, name, is_host=False):
        self.id = player_id
        self.name = name
        self.is_host = is_host

    def to_dict(self):
        """Wire representation sent to clients"""
        return {'id': self.id, 'name': self.name, 'isHost': self.is_host}

    def __repr__(self):
        return f"Player(id={self.id!r}, name={self.name!r}, is_host={self.is_host})"


class Room:
    """
    State for one relay session.

    Holds the ordered player list, the drawing history used to replay the
    canvas, the phase and the song currently being drawn. All reads and
    writes of that state happen while holding ``lock``.
    """

    def __init__(self, code, max_players=CONSTANTS['MAX_PLAYERS']):
        """
        Initialize an empty room.

        Parameters
        ----------
        code : str
            Room code under which the registry stores this room
        max_players : int, optional
            Seats available in the room, default from config
        """
        self.code = code
        self.max_players = max_players
        self.players = []
        self.drawing_history = []
        self.phase = LOBBY
        self.current_song = None
        self.created_at = datetime.now()
        self.lock = threading.RLock()
        # Set once the last player leaves; a closed room is never reused
        self.closed = False

    def is_full(self):
        return len(self.players) >= self.max_players

    def is_empty(self):
        return not self.players

    def get_player(self, player_id):
        """Return the player seated by ``player_id`` or None"""
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def has_player(self, player_id):
        return self.get_player(player_id) is not None

    def add_host(self, player_id):
        """
        Seat the room creator.

        Parameters
        ----------
        player_id : str
            Connection ID of the creator

        Returns
        -------
        Player
            The new host player, named ``Player1 (Host)``
        """
        player = Player(player_id, "Player1 (Host)", is_host=True)
        self.players.append(player)
        debug_log("Host seated", player_id, self.code)
        return player

    def add_player(self, player_id):
        """
        Seat a joining player at the end of the list.

        The caller checks capacity first; names follow the seat count at
        join time, so a player joining a room of two becomes ``Player3``.

        Parameters
        ----------
        player_id : str
            Connection ID of the joining player

        Returns
        -------
        Player
            The newly seated player
        """
        player = Player(player_id, f"Player{len(self.players) + 1}")
        self.players.append(player)
        debug_log("Player seated", player_id, self.code, {'seat': len(self.players)})
        return player

    def remove_player(self, player_id):
        """
        Remove a player and hand the host role on if needed.

        When the departing player was host and others remain, the player now
        at index 0 becomes host so that exactly one host exists.

        Parameters
        ----------
        player_id : str
            Connection ID of the departing player

        Returns
        -------
        Player or None
            The removed player, or None if ``player_id`` was not seated
        """
        player = self.get_player(player_id)
        if player is None:
            return None

        self.players.remove(player)
        if player.is_host and self.players:
            self.players[0].is_host = True
            debug_log("Host role transferred", self.players[0].id, self.code,
                      {'previous_host': player_id})
        return player

    def is_host_slot(self, player_id):
        """True when ``player_id`` sits at index 0 and holds the host role"""
        return bool(self.players) and self.players[0].id == player_id and self.players[0].is_host

    def start_game(self):
        self.phase = IN_GAME

    def record_drawing(self, payload):
        self.drawing_history.append(payload)

    def clear_drawing(self):
        self.drawing_history = []

    def player_list(self):
        """Ordered wire representation of every seated player"""
        return [player.to_dict() for player in self.players]

    def snapshot(self):
        """Read-only summary used by debug views"""
        return {
            'room_code': self.code,
            'phase': self.phase,
            'players': self.player_list(),
            'player_count': len(self.players),
            'max_players': self.max_players,
            'drawing_history_length': len(self.drawing_history),
            'has_song': self.current_song is not None,
            'created_at': self.created_at.isoformat(),
        }
