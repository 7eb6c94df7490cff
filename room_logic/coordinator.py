# Session coordinator: the relay's room state machine
from contextlib import contextmanager

from util.logging_utils import debug_log, error_log
from .errors import RoomNotFound, RoomFull, RoomCodeExhausted
from .guess_policy import mask_song, classify_guess, get_guess_policy
from .room_code import normalize_room_code


class SessionCoordinator:
    """
    Applies inbound client events to room state and routes the results.

    Each event is handled as one step: validate against the room, mutate it,
    broadcast. The step runs under the room's lock and broadcasts are issued
    before the lock is released, so every recipient sees a room's events in
    the order they were processed. Only ``RoomNotFound`` and ``RoomFull``
    are reported back to clients; any other failed precondition drops the
    event without a reply.
    """

    def __init__(self, registry, router, is_correct=None):
        """
        Parameters
        ----------
        registry : RoomRegistry
            Owner of all rooms
        router : BroadcastRouter
            Outbound event delivery
        is_correct : callable, optional
            ``is_correct(guess, song) -> bool``; defaults to the configured
            guess policy
        """
        self.registry = registry
        self.router = router
        self.is_correct = is_correct or get_guess_policy()

    @contextmanager
    def _locked_room(self, room_code):
        """Yield the live room for ``room_code`` with its lock held, or None"""
        room = self.registry.get(room_code)
        if room is None:
            yield None
            return
        with room.lock:
            # The last player may have left between lookup and locking
            yield None if room.closed else room

    # --- ROOM MANAGEMENT ---

    def create_room(self, connection):
        """
        Open a new room with the sender as host.

        Returns
        -------
        Room or None
            The created room, or None if no free code was available
        """
        previous_code = self.registry.room_code_for(connection.sid)

        try:
            room = self.registry.create(host_id=connection.sid)
        except RoomCodeExhausted as e:
            error_log(f"Room creation failed: {e}", connection.sid)
            return None

        with room.lock:
            connection.join(room.code)
            self.router.to_sender(connection, 'room-created', {
                'roomCode': room.code,
                'player': room.players[0].to_dict()
            })

        debug_log("Room created", connection.sid, room.code)

        if previous_code and previous_code != room.code:
            self._vacate(connection, previous_code)
        return room

    def join_room(self, connection, room_code):
        """
        Seat the sender in an existing room.

        Failures are reported to the sender as ``error-message``.

        Returns
        -------
        Player or None
            The sender's player record, or None if the join was refused
        """
        code = normalize_room_code(room_code)
        previous_code = self.registry.room_code_for(connection.sid)

        try:
            player = self._seat_player(connection, code)
        except (RoomNotFound, RoomFull) as e:
            debug_log("Join refused", connection.sid, code, {'reason': e.message})
            self.router.to_sender(connection, 'error-message', e.message)
            return None

        if previous_code and previous_code != code:
            self._vacate(connection, previous_code)
        return player

    def _seat_player(self, connection, code):
        with self._locked_room(code) as room:
            if room is None:
                raise RoomNotFound(code)

            player = room.get_player(connection.sid)
            if player is not None:
                # Already seated here: repeat the confirmation, change nothing
                self.router.to_sender(connection, 'joined-room', {
                    'roomCode': code, 'player': player.to_dict()
                })
                return player

            if room.is_full():
                raise RoomFull(code)

            player = room.add_player(connection.sid)
            self.registry.bind(connection.sid, code)
            connection.join(code)

            self.router.to_sender(connection, 'joined-room', {
                'roomCode': code, 'player': player.to_dict()
            })
            self.router.to_all_except_sender(code, connection, 'update-lobby', room.player_list())
            return player

    def leave_room(self, connection):
        """Explicitly leave the sender's current room; same effect as disconnecting"""
        code = self.registry.room_code_for(connection.sid)
        if code is None:
            debug_log("Leave ignored - not seated in a room", connection.sid)
            return None

        player = self._vacate(connection, code)
        self.router.to_sender(connection, 'left-room', {'roomCode': code})
        return player

    def disconnect(self, connection):
        """Remove a disconnected connection's player from its room, if any"""
        code = self.registry.room_code_for(connection.sid)
        if code is None:
            debug_log("Disconnecting client was not seated in a room", connection.sid)
            return None
        return self._vacate(connection, code)

    def _vacate(self, connection, code):
        """
        Take the connection's seat in room ``code`` away.

        Deletes the room when it becomes empty; otherwise promotes a new host
        if needed and sends the remaining players the updated list.
        """
        with self._locked_room(code) as room:
            if room is None:
                return None

            player = room.remove_player(connection.sid)
            if player is None:
                return None

            if self.registry.room_code_for(connection.sid) == code:
                self.registry.unbind(connection.sid)
            connection.leave(code)

            if room.is_empty():
                room.closed = True
                self.registry.delete(code)
                debug_log("Room is empty after player left, deleting", connection.sid, code)
            else:
                self.router.to_all_except_sender(code, connection, 'player-left', room.player_list())
                debug_log("Player left room", connection.sid, code, {'remaining': len(room.players)})
            return player

    # --- GAME LOGIC ---

    def start_game(self, connection, room_code):
        """Start the game if the sender is the host in the host slot; otherwise ignore"""
        code = normalize_room_code(room_code)
        with self._locked_room(code) as room:
            if room is None or not room.is_host_slot(connection.sid):
                debug_log("Start game ignored", connection.sid, code)
                return False

            room.start_game()
            self.router.to_all(code, 'game-started')
            debug_log("Game started", connection.sid, code)
            return True

    def choose_song(self, connection, data):
        """Remember the drawer's song and show everyone else its masked form"""
        if not isinstance(data, dict):
            return False
        code = normalize_room_code(data.get('roomCode'))
        song = data.get('song')
        if not isinstance(song, str):
            return False

        with self._locked_room(code) as room:
            if room is None:
                return False
            room.current_song = song
            self.router.to_all_except_sender(code, connection, 'song-chosen-update', mask_song(song))
            return True

    def relay_drawing(self, connection, data):
        """Append a drawing payload to the room's history and pass it on verbatim"""
        if not isinstance(data, dict):
            return False
        code = normalize_room_code(data.get('roomCode'))

        with self._locked_room(code) as room:
            if room is None:
                return False
            room.record_drawing(data)
            self.router.to_all_except_sender(code, connection, 'drawing-update', data)
            return True

    def clear_canvas(self, connection, room_code):
        code = normalize_room_code(room_code)
        with self._locked_room(code) as room:
            if room is None:
                return False
            room.clear_drawing()
            self.router.to_all(code, 'canvas-cleared')
            debug_log("Canvas cleared", connection.sid, code)
            return True

    def send_drawing_history(self, connection, room_code):
        """Send the ordered drawing history to a seated player so the canvas can be replayed"""
        code = normalize_room_code(room_code)
        with self._locked_room(code) as room:
            if room is None or not room.has_player(connection.sid):
                return False
            self.router.to_sender(connection, 'drawing-history', list(room.drawing_history))
            return True

    def submit_guess(self, connection, data):
        """Post a guess to the room chat, tagged 'correct' when the guess policy accepts it"""
        if not isinstance(data, dict):
            return False
        code = normalize_room_code(data.get('roomCode'))
        guess = data.get('guess')
        player = data.get('player')
        if not isinstance(guess, str) or not isinstance(player, dict):
            return False

        with self._locked_room(code) as room:
            if room is None:
                return False
            message = {
                'user': player.get('name'),
                'text': guess,
                'type': classify_guess(guess, room.current_song, self.is_correct),
            }
            self.router.to_all(code, 'new-message', message)
            debug_log("Guess submitted", connection.sid, code, {'type': message['type']})
            return True

    # --- INSPECTION ---

    def snapshot(self):
        """Summaries of every live room, newest first"""
        rooms = []
        for room in self.registry.rooms():
            with room.lock:
                if not room.closed:
                    rooms.append(room.snapshot())

        rooms.sort(key=lambda x: x['created_at'], reverse=True)
        return rooms
