"""Tests for hand analysis and bid tiers."""
from __future__ import annotations

import random

import pytest

from jaffre.bot.hand import HandQuality, analyze_hand, bid_for_tricks
from jaffre.game.cards import Card, Color, make_deck

R = Color.RED
B = Color.BROWN
G = Color.GREEN
U = Color.BLUE


def C(color, value):
    return Card(color, value)


class FixedRandom(random.Random):
    """Random source whose ``random()`` always returns *value*."""

    def __init__(self, value: float) -> None:
        self.value = value
        super().__init__(0)

    def random(self) -> float:
        return self.value


def _tier(estimated: int) -> HandQuality:
    if estimated >= 11:
        return HandQuality.EXCEPTIONAL
    if estimated >= 9:
        return HandQuality.STRONG
    if estimated >= 7:
        return HandQuality.NORMAL
    return HandQuality.WEAK


# ---------------------------------------------------------------------------
#  Counts and flags
# ---------------------------------------------------------------------------


class TestCounts:
    def test_reference_hand(self):
        # 2 trumps worth 9, four greens with the 7, red 0 covered by red 6.
        hand = [C(U, 4), C(U, 5), C(G, 7), C(G, 1), C(G, 2), C(G, 3), C(R, 0), C(R, 6)]
        a = analyze_hand(hand, U, FixedRandom(0.99))
        assert a.trump_count == 2
        assert a.trump_strength == 9
        assert a.high_cards == 3
        assert a.has_red_zero and not a.has_brown_zero
        assert a.can_control_red_zero
        assert a.longest_color == G and a.longest_count == 4
        assert a.has_four_of_color
        assert a.suit_control[G] and a.suit_control[R] and not a.suit_control[U]
        # 2 (trumps) + 0.5 (red 6) + 0.8 (green 7) + 0.5 (long green) + 0.5 (red 0)
        assert a.trick_estimate == pytest.approx(4.3)
        assert a.estimated_tricks == 4
        assert a.hand_quality == HandQuality.WEAK
        assert a.recommended_bet == 7
        assert not a.should_bet_without_trump   # only 3 high cards

    def test_trump_ignored_when_not_declared(self):
        hand = [C(U, 4), C(U, 5), C(U, 6)]
        a = analyze_hand(hand, None, FixedRandom(0.99))
        assert a.trump_count == 0
        assert a.trump_strength == 0

    def test_longest_color_prefers_first_on_tie(self):
        hand = [C(G, 1), C(G, 2), C(R, 1), C(R, 2)]
        a = analyze_hand(hand, None, FixedRandom(0.99))
        assert a.longest_color == R

    def test_suit_control_needs_two_cards(self):
        a = analyze_hand([C(G, 7)], None, FixedRandom(0.99))
        assert not a.suit_control[G]
        a = analyze_hand([C(G, 6), C(G, 0)], None, FixedRandom(0.99))
        assert a.suit_control[G]


class TestRedZeroControl:
    def test_held_and_protected_by_red_high_card(self):
        assert analyze_hand([C(R, 0), C(R, 5)], None).can_control_red_zero

    def test_held_and_protected_by_two_trumps(self):
        assert analyze_hand([C(R, 0), C(U, 1), C(U, 2)], U).can_control_red_zero

    def test_held_unprotected(self):
        assert not analyze_hand([C(R, 0), C(R, 4), C(U, 7)], U).can_control_red_zero

    def test_capturable_with_red_seven(self):
        assert analyze_hand([C(R, 7), C(G, 1)], None).can_control_red_zero

    def test_capturable_with_high_trump(self):
        assert analyze_hand([C(G, 1), C(U, 5)], U).can_control_red_zero
        assert not analyze_hand([C(G, 1), C(U, 4)], U).can_control_red_zero
        assert not analyze_hand([C(G, 1), C(U, 5)], None).can_control_red_zero


class TestBrownZeroVulnerability:
    def test_always_vulnerable_when_held(self):
        assert analyze_hand([C(B, 0), C(B, 7)], None).vulnerable_to_brown_zero

    def test_only_low_browns(self):
        assert analyze_hand([C(B, 1), C(B, 3), C(G, 7)], None).vulnerable_to_brown_zero

    def test_a_high_brown_absorbs_it(self):
        assert not analyze_hand([C(B, 1), C(B, 4)], None).vulnerable_to_brown_zero

    def test_no_browns(self):
        assert not analyze_hand([C(G, 1), C(R, 4)], None).vulnerable_to_brown_zero


# ---------------------------------------------------------------------------
#  Trick estimate
# ---------------------------------------------------------------------------


class TestEstimate:
    def test_trump_contribution_is_capped(self):
        hand = [C(G, 1), C(G, 2), C(G, 3), C(G, 4)]
        a = analyze_hand(hand, G, FixedRandom(0.99))
        assert a.trick_estimate == pytest.approx(3.0)

    def test_strong_trump_bonus(self):
        hand = [C(G, 7), C(G, 6), C(G, 2)]     # strength 15
        a = analyze_hand(hand, G, FixedRandom(0.99))
        assert a.trick_estimate == pytest.approx(4.0)

    def test_six_counts_only_without_seven(self):
        a = analyze_hand([C(R, 7), C(R, 6)], None, FixedRandom(0.99))
        assert a.trick_estimate == pytest.approx(0.8)
        a = analyze_hand([C(R, 6)], None, FixedRandom(0.99))
        assert a.trick_estimate == pytest.approx(0.5)

    def test_brown_zero_penalty_rounds_half_up(self):
        a = analyze_hand([C(B, 0), C(G, 7)], None, FixedRandom(0.99))
        assert a.trick_estimate == pytest.approx(0.5)
        assert a.estimated_tricks == 1

    def test_normal_tier_hand(self):
        hand = [C(G, 7), C(G, 6), C(G, 5), C(R, 7), C(R, 0), C(B, 7), C(U, 7), C(U, 6)]
        # 3 trumps + 1 strong bonus + 3 side sevens + covered red 0 = 6.9
        a = analyze_hand(hand, G, FixedRandom(0.0))
        assert a.trick_estimate == pytest.approx(6.9)
        assert a.estimated_tricks == 7
        assert a.hand_quality == HandQuality.NORMAL
        assert a.recommended_bet == 8
        a = analyze_hand(hand, G, FixedRandom(0.99))
        assert a.recommended_bet == 7


# ---------------------------------------------------------------------------
#  Bid tiers
# ---------------------------------------------------------------------------


class TestBidTiers:
    @pytest.mark.parametrize(
        "tricks, low, high, quality, upgrade",
        [
            (12, 11, 12, HandQuality.EXCEPTIONAL, 0.3),
            (11, 11, 12, HandQuality.EXCEPTIONAL, 0.3),
            (10, 9, 10, HandQuality.STRONG, 0.4),
            (9, 9, 10, HandQuality.STRONG, 0.4),
            (8, 7, 8, HandQuality.NORMAL, 0.6),
            (7, 7, 8, HandQuality.NORMAL, 0.6),
        ],
    )
    def test_tier_and_upgrade_chance(self, tricks, low, high, quality, upgrade):
        assert bid_for_tricks(tricks, FixedRandom(upgrade - 0.01)) == (high, quality)
        assert bid_for_tricks(tricks, FixedRandom(upgrade)) == (low, quality)

    @pytest.mark.parametrize("tricks", [0, 3, 6])
    def test_weak_always_bets_seven(self, tricks):
        assert bid_for_tricks(tricks, FixedRandom(0.0)) == (7, HandQuality.WEAK)

    def test_random_hands_stay_in_range_and_match_tier(self):
        rng = random.Random(11)
        for _ in range(300):
            deck = make_deck()
            rng.shuffle(deck)
            trump = rng.choice([None, R, B, G, U])
            a = analyze_hand(deck[:8], trump, rng)
            assert 7 <= a.recommended_bet <= 12
            assert a.hand_quality == _tier(a.estimated_tricks)


class TestWithoutTrump:
    def test_long_controlled_suit_with_high_cards(self):
        hand = [C(G, 7), C(G, 6), C(G, 5), C(G, 1), C(R, 7), C(U, 7), C(U, 2), C(R, 1)]
        assert analyze_hand(hand, None).should_bet_without_trump

    def test_brown_zero_blocks_it(self):
        hand = [C(G, 7), C(G, 6), C(G, 5), C(G, 1), C(R, 7), C(U, 7), C(U, 2), C(B, 0)]
        assert not analyze_hand(hand, None).should_bet_without_trump

    def test_long_suit_without_control(self):
        hand = [C(G, 5), C(G, 4), C(G, 3), C(G, 1), C(R, 7), C(U, 7), C(B, 7), C(R, 5)]
        assert not analyze_hand(hand, None).should_bet_without_trump
