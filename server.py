#!/usr/bin/env python3
"""
SongSketch Relay - Multiplayer Draw-and-Guess Session Server
Players gather in rooms of up to four, one draws a song title and the others guess it.

This is the main entry point for the SongSketch relay server.

Debug Mode
----------
Set DEBUG_MODE=true (the default) to log every relay event:
- Room creation, joins, leaves and host transfers
- Broadcasts with their room and fan-out mode
- Ignored events such as a non-host trying to start the game

Set LOG_TO_FILE=false to keep logs on the console only.
Set GUESS_POLICY=song_title to check guesses against the chosen song instead
of the placeholder answer.
"""

import os
from flask import Flask
from flask_socketio import SocketIO

# Import our modular components
from util.config import CONSTANTS, get_public_config
from util.logging_utils import setup_logging
from socket_handlers import setup_socket_handlers

# Initialize Flask app
app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'songsketch_relay_secret_key')

# Initialize Socket.IO; each client's events are handled in arrival order
socketio = SocketIO(app, cors_allowed_origins=os.environ.get('CORS_ORIGINS', '*'), async_handlers=False)

# Set up logging
logger = setup_logging(file_root='server')

# Set up Socket.IO event handlers
coordinator = setup_socket_handlers(socketio)


@app.route('/')
def index():
    """Service banner for anyone opening the relay URL directly"""
    return {'message': 'SongSketch relay is running', 'socket_path': '/socket.io'}


@app.route('/health')
def health_check():
    """
    Health check endpoint for monitoring and load balancers.

    Returns
    -------
    dict
        Simple health status response
    """
    return {'status': 'healthy', 'service': 'songsketch_relay', 'rooms': len(coordinator.registry)}


@app.route('/util/config.json')
def serve_config():
    """Serve the client-facing part of the configuration"""
    return get_public_config()


@app.route('/api/rooms')
def list_rooms():
    """List live rooms for debugging"""
    rooms = coordinator.snapshot()
    return {'rooms': rooms, 'count': len(rooms)}


if __name__ == '__main__':
    port = int(os.environ.get('PORT', CONSTANTS['DEFAULT_PORT']))

    logger.info(f"Starting SongSketch relay on port {port}")
    logger.info(f"Debug mode: {'enabled' if CONSTANTS['debug_mode'] else 'disabled'}")
    logger.info(f"Guess policy: {CONSTANTS['GUESS_POLICY']}")
    logger.info(f"Relay will be available at http://localhost:{port}")

    # Start the server
    socketio.run(
        app,
        host='0.0.0.0',
        port=port,
        debug=CONSTANTS['debug_mode'],
        allow_unsafe_werkzeug=os.getenv('WERKZEUG_ALLOW_ASYNC_UNSAFE', 'false').lower() == 'true',
        use_reloader=os.getenv('USE_RELOADER', 'true').lower() == 'true'
    )
