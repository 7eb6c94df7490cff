"""
Unit tests for the room logic building blocks.

Covers room code generation, the Room entity's seating and host rules,
the registry's lifecycle and reverse index, and the song masking and
guess policies.
"""

import pytest
from unittest.mock import patch

from room_logic import (Room, RoomRegistry, RoomCodeCollision, RoomCodeExhausted, LOBBY, IN_GAME,
                        generate_room_code, generate_unique_room_code, normalize_room_code,
                        mask_song, placeholder_policy, song_title_policy, get_guess_policy)
from room_logic.guess_policy import classify_guess
from util.config import CONSTANTS
from .test_common import assert_single_host


class TestRoomCodes:
    """Test room code generation and normalization"""

    def test_codes_use_configured_alphabet_and_length(self):
        """Generated codes are short uppercase alphanumerics"""
        for _ in range(200):
            code = generate_room_code()
            assert len(code) == CONSTANTS['ROOM_CODE_LENGTH'] == 5
            assert all(ch in CONSTANTS['ROOM_CODE_ALPHABET'] for ch in code)
            assert code == code.upper()

    def test_unique_code_retries_on_collision(self):
        """A taken code is skipped in favour of the next candidate"""
        with patch('room_logic.room_code.generate_room_code', side_effect=['AAAAA', 'AAAAA', 'BBBBB']):
            code = generate_unique_room_code(lambda c: c == 'AAAAA')
        assert code == 'BBBBB'

    def test_unique_code_gives_up_after_max_attempts(self):
        with patch('room_logic.room_code.generate_room_code', return_value='AAAAA'):
            with pytest.raises(RoomCodeExhausted):
                generate_unique_room_code(lambda c: True, max_attempts=3)

    def test_normalize_room_code(self):
        assert normalize_room_code(' ab1cd ') == 'AB1CD'
        assert normalize_room_code(None) == ''
        assert normalize_room_code(12345) == ''


class TestRoom:
    """Test seating, host transfer and drawing history on a single room"""

    def test_host_and_joiner_names(self):
        room = Room('ROOM1')
        host = room.add_host('h')
        second = room.add_player('a')
        third = room.add_player('b')

        assert host.name == "Player1 (Host)" and host.is_host
        assert second.name == "Player2" and not second.is_host
        assert third.name == "Player3"
        assert [p.id for p in room.players] == ['h', 'a', 'b']

    def test_player_wire_format(self):
        room = Room('ROOM1')
        room.add_host('h')
        assert room.player_list() == [{'id': 'h', 'name': 'Player1 (Host)', 'isHost': True}]

    def test_capacity(self):
        room = Room('ROOM1')
        room.add_host('h')
        for sid in ('a', 'b', 'c'):
            assert not room.is_full()
            room.add_player(sid)
        assert room.is_full()
        assert room.max_players == 4

    def test_host_removal_promotes_index_zero(self):
        """Given [H, A, B], removing H makes A host and leaves B alone"""
        room = Room('ROOM1')
        room.add_host('h')
        room.add_player('a')
        room.add_player('b')

        removed = room.remove_player('h')

        assert removed.id == 'h'
        assert room.players[0].id == 'a' and room.players[0].is_host
        assert not room.players[1].is_host
        assert_single_host(room)

    def test_non_host_removal_keeps_host(self):
        room = Room('ROOM1')
        room.add_host('h')
        room.add_player('a')
        room.add_player('b')

        room.remove_player('a')

        assert [p.id for p in room.players] == ['h', 'b']
        assert_single_host(room)
        assert room.players[0].is_host and room.players[0].id == 'h'

    def test_remove_unknown_player(self):
        room = Room('ROOM1')
        room.add_host('h')
        assert room.remove_player('nobody') is None
        assert len(room.players) == 1

    def test_host_slot(self):
        room = Room('ROOM1')
        room.add_host('h')
        room.add_player('a')
        assert room.is_host_slot('h')
        assert not room.is_host_slot('a')

    def test_drawing_history_append_and_clear(self):
        room = Room('ROOM1')
        room.record_drawing({'x': 1})
        room.record_drawing({'x': 2})
        assert room.drawing_history == [{'x': 1}, {'x': 2}]

        room.clear_drawing()
        assert room.drawing_history == []

        room.record_drawing({'x': 3})
        assert room.drawing_history == [{'x': 3}]

    def test_phase_transition(self):
        room = Room('ROOM1')
        assert room.phase == LOBBY
        room.start_game()
        assert room.phase == IN_GAME


class TestRoomRegistry:
    """Test the registry lifecycle and reverse index"""

    def test_create_generates_code(self, registry):
        room = registry.create()
        assert room.code in registry
        assert registry.get(room.code) is room
        assert len(registry) == 1

    def test_create_seats_host_and_indexes_it(self, registry):
        room = registry.create(host_id='h')
        assert room.players[0].id == 'h'
        assert registry.room_code_for('h') == room.code

    def test_create_with_existing_code_is_detected(self, registry):
        """The registry never silently overwrites an existing room"""
        first = registry.create('ABCDE')
        with pytest.raises(RoomCodeCollision):
            registry.create('ABCDE')
        assert registry.get('ABCDE') is first

    def test_generated_code_skips_taken_codes(self, registry):
        registry.create('AAAAA')
        with patch('room_logic.room_code.generate_room_code', side_effect=['AAAAA', 'CCCCC']):
            room = registry.create()
        assert room.code == 'CCCCC'
        assert len(registry) == 2

    def test_delete_drops_reverse_index_entries(self, registry):
        room = registry.create(host_id='h')
        registry.bind('a', room.code)

        registry.delete(room.code)

        assert room.code not in registry
        assert registry.room_code_for('h') is None
        assert registry.room_code_for('a') is None
        assert registry.delete(room.code) is None

    def test_bind_and_unbind(self, registry):
        registry.bind('a', 'ROOM1')
        assert registry.room_code_for('a') == 'ROOM1'
        assert registry.unbind('a') == 'ROOM1'
        assert registry.room_code_for('a') is None

    def test_custom_room_factory(self):
        registry = RoomRegistry(room_factory=lambda code: Room(code, max_players=2))
        assert registry.create().max_players == 2


class TestGuessPolicy:
    """Test song masking and guess classification"""

    def test_mask_preserves_whitespace_and_length(self):
        assert mask_song("A CAT") == "_ ___"
        assert mask_song("  two  words ") == "  ___  _____ "
        assert mask_song("tab\there") == "___\t____"
        assert mask_song("") == ""

    def test_mask_hides_punctuation_and_digits(self):
        masked = mask_song("99 Luftballons!")
        assert masked == "__ ____________"
        assert len(masked) == len("99 Luftballons!")

    def test_placeholder_policy_ignores_song(self):
        assert placeholder_policy("I think it's MUNBE", song="Anything")
        assert placeholder_policy("munbe", song=None)
        assert not placeholder_policy("Purple Rain", song="Purple Rain")

    def test_song_title_policy(self):
        assert song_title_policy("  purple rain ", "Purple Rain")
        assert not song_title_policy("purple", "Purple Rain")
        assert not song_title_policy("anything", None)

    def test_classify_guess(self):
        assert classify_guess("munbe!", None) == "correct"
        assert classify_guess("hello", None) == "normal"
        assert classify_guess("Purple Rain", "purple rain", song_title_policy) == "correct"

    def test_get_guess_policy(self):
        assert get_guess_policy('placeholder') is placeholder_policy
        assert get_guess_policy('song_title') is song_title_policy
        with pytest.raises(ValueError):
            get_guess_policy('psychic')
