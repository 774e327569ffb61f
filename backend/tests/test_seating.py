"""Tests for seat rotation and first-to-act selection."""

import pytest

from pokerhand.domain import Player
from pokerhand.errors import InvalidConfigurationError
from pokerhand.seating import compute_seat_order


def _make_players(positions) -> list[Player]:
    """Players whose id is 100 + position, so ids and seats are easy to read."""
    return [
        Player(f"Player{pos}", pos, 2000, game_id=1, player_id=100 + pos)
        for pos in positions
    ]


class TestRotation:
    def test_four_seats_btn_1_bb_3(self):
        players = _make_players([1, 2, 3, 4])
        order = compute_seat_order(players, btn_player_id=101, bb_player_id=103)
        assert [hp.position for hp in order.participants] == [1, 2, 3, 4]
        assert [hp.rotation_order for hp in order.participants] == [0, 1, 2, 3]
        assert order.first_to_act.position == 4
        assert order.first_to_act.rotation_order == 3

    def test_input_order_does_not_matter(self):
        players = _make_players([3, 1, 4, 2])
        order = compute_seat_order(players, 101, 103)
        assert [hp.position for hp in order.participants] == [1, 2, 3, 4]

    def test_button_mid_table_wraps(self):
        players = _make_players([1, 2, 3, 4, 5])
        order = compute_seat_order(players, btn_player_id=104, bb_player_id=101)
        assert [hp.position for hp in order.participants] == [4, 5, 1, 2, 3]
        assert order.first_to_act.position == 2

    def test_first_to_act_wraps_to_button(self):
        # BB in the last rotation slot: next to act is the button
        players = _make_players([1, 2, 3])
        order = compute_seat_order(players, btn_player_id=101, bb_player_id=103)
        assert order.first_to_act.player_id == 101

    def test_gap_in_positions_skips_empty_seat(self):
        players = _make_players([1, 2, 4, 6])
        order = compute_seat_order(players, btn_player_id=104, bb_player_id=101)
        assert [(hp.position, hp.rotation_order) for hp in order.participants] == [
            (4, 0), (6, 1), (1, 2), (2, 3),
        ]
        assert order.first_to_act.position == 2

    def test_participants_sortable(self):
        players = _make_players([1, 2, 3, 4])
        order = compute_seat_order(players, 102, 104)
        shuffled = list(reversed(order.participants))
        assert sorted(shuffled) == order.participants


class TestShortHanded:
    def test_heads_up_button_acts_first(self):
        players = _make_players([1, 2])
        order = compute_seat_order(players, btn_player_id=101, bb_player_id=102)
        assert [hp.rotation_order for hp in order.participants] == [0, 1]
        assert order.first_to_act.player_id == 101

    def test_single_player(self):
        players = _make_players([5])
        order = compute_seat_order(players, 105, 105)
        assert len(order.participants) == 1
        assert order.first_to_act.player_id == 105
        assert order.first_to_act.rotation_order == 0


class TestInvalidConfiguration:
    def test_empty_roster(self):
        with pytest.raises(InvalidConfigurationError):
            compute_seat_order([], 1, 2)

    def test_button_not_seated(self):
        with pytest.raises(InvalidConfigurationError, match="Button"):
            compute_seat_order(_make_players([1, 2, 3]), 999, 103)

    def test_big_blind_not_seated(self):
        with pytest.raises(InvalidConfigurationError, match="Big blind"):
            compute_seat_order(_make_players([1, 2, 3]), 101, None)

    def test_duplicate_positions(self):
        players = _make_players([1, 2, 3])
        players[2].position = 2
        with pytest.raises(InvalidConfigurationError):
            compute_seat_order(players, 101, 102)

    def test_button_and_big_blind_same_player(self):
        with pytest.raises(InvalidConfigurationError):
            compute_seat_order(_make_players([1, 2, 3]), 101, 101)
