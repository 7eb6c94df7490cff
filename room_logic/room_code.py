# Room code generation for the SongSketch relay
import random

from util.config import CONSTANTS
from .errors import RoomCodeExhausted


def generate_room_code(length=CONSTANTS['ROOM_CODE_LENGTH'], alphabet=CONSTANTS['ROOM_CODE_ALPHABET']):
    """
    Generate a short, human-shareable room code.

    Codes are labels, not secrets: the module-level ``random`` generator is
    used and uniqueness is not guaranteed.

    Parameters
    ----------
    length : int, optional
        Number of characters in the code
    alphabet : str, optional
        Characters the code is drawn from

    Returns
    -------
    str
        Uppercase alphanumeric room code
    """
    return ''.join(random.choice(alphabet) for _ in range(length))


def generate_unique_room_code(is_taken, max_attempts=CONSTANTS['ROOM_CODE_MAX_ATTEMPTS']):
    """
    Generate a room code that ``is_taken`` rejects for none of the attempts.

    Parameters
    ----------
    is_taken : callable
        Predicate returning True when a code is already in use
    max_attempts : int, optional
        Number of codes to try before giving up

    Returns
    -------
    str
        A room code not currently in use

    Raises
    ------
    RoomCodeExhausted
        If every generated code collided
    """
    for _ in range(max_attempts):
        code = generate_room_code()
        if not is_taken(code):
            return code
    raise RoomCodeExhausted(f"No free room code after {max_attempts} attempts")


def normalize_room_code(value):
    """Uppercase and strip an inbound room code; anything but a string becomes ''."""
    if not isinstance(value, str):
        return ''
    return value.strip().upper()
