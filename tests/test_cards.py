from __future__ import annotations

import pytest

from jaffre.game.cards import (
    BROWN_ZERO,
    DECK_SIZE,
    HAND_SIZE,
    RED_ZERO,
    Card,
    Color,
    card_points,
    make_deck,
    parse_color,
)


def test_deck_has_32_unique_cards() -> None:
    deck = make_deck()
    assert len(deck) == DECK_SIZE == 32
    assert len(set(deck)) == 32
    assert HAND_SIZE == 8


def test_card_value_out_of_range_raises() -> None:
    with pytest.raises(ValueError):
        Card(Color.RED, 8)
    with pytest.raises(ValueError):
        Card(Color.RED, -1)


def test_card_key_and_short_label() -> None:
    assert RED_ZERO.key == "red-0"
    assert Card(Color.BLUE, 7).short() == "U7"
    assert repr(Card(Color.GREEN, 3)) == "Card(G3)"


def test_special_cards() -> None:
    assert RED_ZERO.is_red_zero() and RED_ZERO.is_special()
    assert BROWN_ZERO.is_brown_zero() and BROWN_ZERO.is_special()
    assert not Card(Color.GREEN, 0).is_special()


def test_card_points() -> None:
    assert card_points(RED_ZERO) == 5
    assert card_points(BROWN_ZERO) == -3
    assert card_points(Card(Color.RED, 7)) == 0


def test_parse_color() -> None:
    assert parse_color(" Red ") == Color.RED
    assert parse_color("blue") == Color.BLUE
    with pytest.raises(ValueError):
        parse_color("purple")
