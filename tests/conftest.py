"""
Pytest configuration and shared fixtures for SongSketch relay tests.

This file makes fixtures available to all test modules in the tests directory.
"""
import os

# Keep test runs from writing log files; must happen before util.config loads
os.environ.setdefault('LOG_TO_FILE', 'false')

# Import all fixtures from test_common to make them available globally
from .test_common import (  # noqa: E402
    registry,
    router,
    coordinator,
    connections,
    relay_app,
    socketio_app,
    clean_room_state,
    sio_clients
)
