# Song masking and guess checking policies
import re

from util.config import CONSTANTS

_NON_WHITESPACE = re.compile(r'\S')


def mask_song(song):
    """
    Hide a song title from the players who have to guess it.

    Every non-whitespace character becomes ``_`` so the guessers still see
    the word lengths and spacing, e.g. ``"A CAT"`` becomes ``"_ ___"``.

    Parameters
    ----------
    song : str
        The song title chosen by the drawer

    Returns
    -------
    str
        Masked title of the same length
    """
    return _NON_WHITESPACE.sub('_', song)


def placeholder_policy(guess, song=None, answer=CONSTANTS['PLACEHOLDER_ANSWER']):
    """
    Stand-in answer check: a guess is correct when it contains a fixed word.

    The chosen song is ignored. Swap in ``song_title_policy`` or any other
    ``is_correct(guess, song)`` callable for real game rules.
    """
    return answer.lower() in guess.lower()


def song_title_policy(guess, song):
    """A guess is correct when it matches the chosen song, ignoring case and outer spaces"""
    if not song:
        return False
    return guess.strip().lower() == song.strip().lower()


GUESS_POLICIES = {
    'placeholder': placeholder_policy,
    'song_title': song_title_policy,
}


def get_guess_policy(name=None):
    """
    Look up a guess policy by name.

    Parameters
    ----------
    name : str, optional
        Policy name, defaults to the configured ``GUESS_POLICY``

    Returns
    -------
    callable
        ``is_correct(guess, song) -> bool``

    Raises
    ------
    ValueError
        If no policy is registered under ``name``
    """
    name = name or CONSTANTS['GUESS_POLICY']
    try:
        return GUESS_POLICIES[name]
    except KeyError:
        raise ValueError(f"Unknown guess policy: {name}") from None


def classify_guess(guess, song, is_correct=placeholder_policy):
    """Return the chat message type for a guess: 'correct' or 'normal'"""
    return "correct" if is_correct(guess, song) else "normal"
