# Configuration and constants for the SongSketch relay server
import os
import json

# Get the absolute path of the config.json file
config_path = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'config.json')

with open(config_path) as f:
    CONFIG = json.load(f)

# Relay Constants
CONSTANTS = {**CONFIG, **{
    'debug_mode': os.environ.get('DEBUG_MODE', 'true').lower() == 'true',
    'log_to_file': os.environ.get('LOG_TO_FILE', 'true').lower() == 'true',
    'GUESS_POLICY': os.environ.get('GUESS_POLICY', CONFIG['GUESS_POLICY']).lower(),
}}


def get_public_config():
    """
    Get the subset of configuration that is safe to hand to clients.

    Returns
    -------
    dict
        Room size and room code format the web client needs to validate
        input before sending it to the relay.
    """
    return {
        'MAX_PLAYERS': CONSTANTS['MAX_PLAYERS'],
        'ROOM_CODE_LENGTH': CONSTANTS['ROOM_CODE_LENGTH'],
        'ROOM_CODE_ALPHABET': CONSTANTS['ROOM_CODE_ALPHABET'],
    }
