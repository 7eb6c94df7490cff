# Logging utilities for the SongSketch relay server
import logging
import os
from datetime import datetime
from util.config import CONSTANTS


def setup_logging(file_root='relay'):
    """
    Configure logging for the application.

    Parameters
    ----------
    file_root : str
        Prefix of the log file written under ``logs/``

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    handlers = [logging.StreamHandler()]

    if CONSTANTS['log_to_file']:
        log_folder = os.path.join(os.getcwd(), 'logs')
        os.makedirs(log_folder, exist_ok=True)
        log_file_path = os.path.join(log_folder, f'{file_root}_{datetime.now():%Y-%m-%d_%H%M%S}.log')
        handlers.append(logging.FileHandler(log_file_path, encoding='utf-8'))

    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=handlers
    )

    logger = logging.getLogger(__name__)

    if CONSTANTS['debug_mode']:
        logger.info("DEBUG MODE ENABLED - All relay events will be logged")
    else:
        logger.info("Debug mode disabled - Set DEBUG_MODE=true to enable detailed logging")

    return logger


def debug_log(message, player_id=None, room_id=None, extra_data=None):
    """
    Log debug information if debug mode is enabled.

    Parameters
    ----------
    message : str
        The debug message to log
    player_id : str, optional
        Player (connection) ID associated with the action
    room_id : str, optional
        Room code associated with the action
    extra_data : dict, optional
        Additional data to include in the log
    """
    if CONSTANTS['debug_mode']:
        log_parts = []

        if room_id:
            log_parts.append(f"Room: {room_id}")
        if player_id:
            log_parts.append(f"Player: {player_id}")
        log_parts.append(message)
        if extra_data:
            log_parts.append(f"Data: {extra_data}")

        logger = logging.getLogger(__name__)
        logger.info(" | ".join(log_parts))


def info_log(message):
    """
    Log information regardless of debug mode.

    Parameters
    ----------
    message : str
        The message to log
    """
    logger = logging.getLogger(__name__)
    logger.info(message)


def error_log(message, player_id=None, room_id=None):
    """Log an error with optional player and room context, even outside debug mode"""
    log_parts = []
    if room_id:
        log_parts.append(f"Room: {room_id}")
    if player_id:
        log_parts.append(f"Player: {player_id}")
    log_parts.append(message)

    logger = logging.getLogger(__name__)
    logger.error(" | ".join(log_parts))
