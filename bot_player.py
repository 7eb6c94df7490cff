#!/usr/bin/env python3
"""
SongSketch Bot Player
Automated client that connects to the SongSketch relay and plays along.

Bots make it possible to exercise a room without gathering four people.
A bot joins the room it is given (or creates one), starts the game once it
holds the host seat and enough players are present, draws random strokes
for a random song when it is the drawer, and throws guesses at masked songs.

Usage Examples
--------------
# Create a room and wait for others
python bot_player.py

# Fill an existing room with three bots
python bot_player.py --room ABC12 --count 3

# Connect to a remote relay
python bot_player.py --room ABC12 --host relay.example.com --port 443 --ssl
"""

import os
import argparse
import random
import time
import threading
import signal
import sys
import atexit
import socketio
from util.config import CONSTANTS
from util.logging_utils import info_log, setup_logging

# Global shutdown flag for clean exit
shutdown_event = threading.Event()

SONGS = ["Bohemian Rhapsody", "Yellow Submarine", "Purple Rain", "Hotel California", "Munbe Thirumbi"]
GUESSES = ["submarine", "rain", "hotel", "munbe", "rhapsody", "no idea"]
COLORS = ["#000000", "#e53e3e", "#3182ce", "#38a169", "#d69e2e"]


def signal_handler(signum, frame):
    """Handle Ctrl+C and other termination signals."""
    print(f"\nReceived signal {signum}, shutting down bots...")
    shutdown_event.set()
    sys.exit(0)


def random_stroke(room_code, width=800, height=600):
    """
    Build one random line segment in the payload shape the relay forwards.

    Parameters
    ----------
    room_code : str
        Room the stroke belongs to
    width, height : int
        Canvas size in pixels

    Returns
    -------
    dict
        Drawing payload including ``roomCode``
    """
    x0, y0 = random.randint(0, width), random.randint(0, height)
    return {
        'roomCode': room_code,
        'x0': x0,
        'y0': y0,
        'x1': min(width, max(0, x0 + random.randint(-60, 60))),
        'y1': min(height, max(0, y0 + random.randint(-60, 60))),
        'color': random.choice(COLORS),
        'lineWidth': random.choice([2, 4, 8]),
    }


class SongSketchBot:
    def __init__(self, name="Bot", host="localhost", port=CONSTANTS['DEFAULT_PORT'], use_ssl=False,
                 room_code=None, min_players=2, strokes_per_turn=12):
        """
        Initialize a bot player.

        Parameters
        ----------
        name : str
            Label used in log lines; the relay assigns the in-room name
        host : str
            Relay hostname or IP address
        port : int
            Relay port number
        use_ssl : bool
            Whether to use SSL/HTTPS connection
        room_code : str, optional
            Room to join; a new room is created when omitted
        min_players : int
            Players the bot waits for before starting a game it hosts
        strokes_per_turn : int
            Number of strokes drawn after choosing a song
        """
        self.name = name
        self.host = host
        self.port = port
        self.use_ssl = use_ssl
        self.target_room = room_code.upper() if room_code else None
        self.min_players = min_players
        self.strokes_per_turn = strokes_per_turn

        # Room state as reported by the relay
        self.room_code = None
        self.player = None
        self.players = []
        self.in_game = False
        self.masked_song = None
        self.strokes_seen = 0

        # Control flags
        self.running = False
        self.should_stop = False
        self.connected = False

        # Random response timing for more human-like behavior
        self.response_delay_range = (0.5, 2.0)

        self.sio = socketio.Client(reconnection=True, reconnection_attempts=5, logger=False, engineio_logger=False)
        self.setup_event_handlers()

        # Pending timers to cancel if needed
        self.pending_timers = []
        self.timers_lock = threading.Lock()

        info_log(f"Bot '{self.name}' initialized")

    @property
    def is_host(self):
        return bool(self.player and self.player.get('isHost'))

    def setup_event_handlers(self):
        """Set up Socket.IO event handlers for relay communication."""
        self.sio.on('connect', self.on_connect)
        self.sio.on('disconnect', self.on_disconnect)
        self.sio.on('room-created', self.on_room_created)
        self.sio.on('joined-room', self.on_joined_room)
        self.sio.on('error-message', self.on_error_message)
        self.sio.on('update-lobby', self.on_players_changed)
        self.sio.on('player-left', self.on_players_changed)
        self.sio.on('game-started', self.on_game_started)
        self.sio.on('song-chosen-update', self.on_song_chosen_update)
        self.sio.on('drawing-update', self.on_drawing_update)
        self.sio.on('canvas-cleared', self.on_canvas_cleared)
        self.sio.on('new-message', self.on_new_message)

    # --- Relay events ---

    def on_connect(self):
        self.connected = True
        info_log(f"{self.name} connected to relay")
        if self.target_room:
            self.schedule_action(self.safe_emit, 'join-room', self.target_room)
        else:
            self.schedule_action(self.safe_emit, 'create-room')

    def on_disconnect(self, reason=None):
        self.connected = False
        info_log(f"{self.name} disconnected from relay")
        self.cancel_pending_timers()

    def on_room_created(self, data):
        self.room_code = data['roomCode']
        self.player = data['player']
        self.players = [self.player]
        info_log(f"{self.name} created room {self.room_code}")

    def on_joined_room(self, data):
        self.room_code = data['roomCode']
        self.player = data['player']
        info_log(f"{self.name} joined room {self.room_code} as {self.player['name']}")

    def on_error_message(self, message):
        """Handle join refusals by opening a room of our own"""
        info_log(f"{self.name}: relay refused request - {message}")
        if self.room_code is None:
            self.target_room = None
            self.schedule_action(self.safe_emit, 'create-room', delay=2.0)

    def on_players_changed(self, players):
        """Track the lobby and pick up the host role if the relay handed it to us"""
        self.players = players
        if self.player:
            for player in players:
                if player['id'] == self.player['id']:
                    self.player = player
        info_log(f"{self.name}: {len(players)} players in room {self.room_code}")
        self.maybe_start_game()

    def on_game_started(self, data=None):
        self.in_game = True
        info_log(f"{self.name}: game started in room {self.room_code}")
        if self.is_host:
            self.schedule_action(self.take_drawing_turn)

    def on_song_chosen_update(self, masked):
        self.masked_song = masked
        info_log(f"{self.name}: guessing song '{masked}'")
        self.schedule_action(self.guess)

    def on_drawing_update(self, data):
        self.strokes_seen += 1

    def on_canvas_cleared(self, data=None):
        self.strokes_seen = 0

    def on_new_message(self, message):
        info_log(f"{self.name} sees [{message.get('type')}] {message.get('user')}: {message.get('text')}")

    # --- Actions ---

    def maybe_start_game(self):
        """Start the game when hosting a room with enough players"""
        if self.is_host and not self.in_game and len(self.players) >= self.min_players:
            self.schedule_action(self.safe_emit, 'start-game', self.room_code)

    def take_drawing_turn(self):
        """Choose a song, then draw a burst of random strokes"""
        song = random.choice(SONGS)
        info_log(f"{self.name}: drawing '{song}'")
        self.safe_emit('song-chosen', {'roomCode': self.room_code, 'song': song})
        self.safe_emit('clear-canvas', self.room_code)
        for _ in range(self.strokes_per_turn):
            if self.should_stop or shutdown_event.is_set():
                break
            self.safe_emit('drawing-data', random_stroke(self.room_code))

    def guess(self):
        if not self.room_code or not self.player:
            return
        self.safe_emit('submit-guess', {
            'roomCode': self.room_code,
            'guess': random.choice(GUESSES),
            'player': self.player
        })

    def safe_emit(self, event, data=None):
        """
        Safely emit Socket.IO events, only if connected.

        Parameters
        ----------
        event : str
            Event name to emit
        data : object, optional
            Payload to send with the event

        Returns
        -------
        bool
            True if emission was successful, False otherwise
        """
        if not self.connected or not self.sio.connected:
            info_log(f"{self.name}: Cannot emit '{event}' - not connected")
            self.connected = False
            return False

        try:
            if data is None:
                self.sio.emit(event)
            else:
                self.sio.emit(event, data)
            return True
        except socketio.exceptions.SocketIOError as e:
            info_log(f"{self.name}: Failed to emit '{event}' - {e}")
            return False

    def cancel_pending_timers(self):
        """Cancel all pending timers to prevent actions after disconnect."""
        with self.timers_lock:
            timers = list(self.pending_timers)
            self.pending_timers.clear()
        for timer in timers:
            if timer.is_alive():
                timer.cancel()

    def schedule_action(self, action, *args, delay=None):
        """
        Schedule a bot action with random delay for more human-like behavior.

        Parameters
        ----------
        action : callable
            Function to execute
        *args : tuple
            Arguments to pass to the action
        delay : float, optional
            Specific delay, otherwise uses random delay
        """
        if delay is None:
            delay = random.uniform(*self.response_delay_range)

        if self.should_stop or shutdown_event.is_set():
            return

        def safe_action():
            try:
                if not self.should_stop and not shutdown_event.is_set():
                    action(*args)
            finally:
                with self.timers_lock:
                    if timer in self.pending_timers:
                        self.pending_timers.remove(timer)

        timer = threading.Timer(delay, safe_action)
        with self.timers_lock:
            self.pending_timers.append(timer)
        timer.start()

    # --- Lifecycle ---

    def connect_to_server(self):
        """Connect to the relay."""
        url = f"{'https' if self.use_ssl else 'http'}://{self.host}:{self.port}"
        info_log(f"{self.name}: Connecting to {url}")
        try:
            self.sio.connect(url, wait_timeout=10)
            return True
        except socketio.exceptions.ConnectionError as e:
            info_log(f"{self.name}: Connection failed - {e}")
            return False

    def disconnect(self):
        """Disconnect from the relay."""
        self.connected = False
        self.cancel_pending_timers()
        if self.sio.connected:
            self.sio.disconnect()
            info_log(f"{self.name}: Disconnected")

    def run(self):
        """Main execution loop for the bot."""
        if not self.connect_to_server():
            info_log(f"{self.name}: Failed to start bot")
            return

        self.running = True
        try:
            while self.running and not self.should_stop and not shutdown_event.is_set():
                time.sleep(0.1)
        except KeyboardInterrupt:
            info_log(f"{self.name}: Shutting down...")
        finally:
            self.running = False
            self.should_stop = True
            self.disconnect()

    def stop(self):
        """Stop the bot gracefully."""
        self.should_stop = True
        self.running = False
        self.disconnect()


def main():
    """Main entry point with command line argument parsing."""
    parser = argparse.ArgumentParser(description='SongSketch Bot Player')
    parser.add_argument('--name', default=f"Bot {random.randint(1000, 9999)}",
                        help='Bot label used in logs')
    parser.add_argument('--room', default=None,
                        help='Room code to join; creates a room when omitted')
    parser.add_argument('--host', default='localhost',
                        help='Relay hostname')
    parser.add_argument('--port', type=int, default=int(os.environ.get('PORT', CONSTANTS['DEFAULT_PORT'])),
                        help='Relay port')
    parser.add_argument('--ssl', action='store_true',
                        help='Use SSL/HTTPS connection')
    parser.add_argument('--count', type=int, default=1,
                        help='Number of bots to spawn')
    parser.add_argument('--min-players', type=int, default=2,
                        help='Players a hosting bot waits for before starting')

    args = parser.parse_args()

    setup_logging(file_root='bot_player')
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    if args.count == 1:
        bot = SongSketchBot(args.name, args.host, args.port, args.ssl, args.room, args.min_players)
        bot.run()
        return

    info_log(f"Spawning {args.count} bots...")
    bots = []
    threads = []

    def cleanup_bots():
        """Clean up all bots."""
        shutdown_event.set()
        for b in bots:
            b.stop()

    atexit.register(cleanup_bots)

    for i in range(args.count):
        bot = SongSketchBot(f"{args.name} {i + 1}", args.host, args.port, args.ssl, args.room, args.min_players)
        bots.append(bot)

        thread = threading.Thread(target=bot.run)
        threads.append(thread)
        thread.start()

        # Small delay so bots take seats in order
        time.sleep(0.5)

    try:
        while not shutdown_event.is_set() and any(t.is_alive() for t in threads):
            time.sleep(0.1)
    except KeyboardInterrupt:
        shutdown_event.set()
    finally:
        cleanup_bots()
        for thread in threads:
            thread.join(timeout=2.0)


if __name__ == "__main__":
    main()
