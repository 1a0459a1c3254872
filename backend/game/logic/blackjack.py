"""
Blackjack: ten hands against the dealer from one shared daily shoe.

The six-deck shoe is shuffled once from the seed. Every hand deals two cards
to the player and two to the dealer, applies the player's recorded decisions
(a hand with no recorded decisions stands), then the dealer draws to 17.

Scoring per hand (bet is 1, or 2 after a double):
- player bust: -5 x bet
- win: +10 x bet, +5 for a two-card 21, then the win streak grows by one and
  its new length is added as a bonus
- push: +2
- loss: -5 x bet
Anything but a win resets the streak.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from game.logic.enums import ActionType, HandDecision
from game.logic.rng import fisher_yates_shuffle, sub_stream
from game.logic.transcript import first_indexed, payload_of
from game.logic.types import SimulationResult

if TYPE_CHECKING:
    from collections.abc import Sequence

    from game.logic.types import RunAction

SUITS = ("S", "H", "D", "C")
RANKS = ("A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K")
DECKS = 6
HANDS_PER_RUN = 10
BLACKJACK = 21
DEALER_STANDS_AT = 17

WIN_POINTS = 10
NATURAL_BONUS = 5
PUSH_POINTS = 2
LOSS_POINTS = 5


class ShoeExhaustedError(Exception):
    """No cards left to deal."""


class Shoe:
    """Ordered, shuffled cards dealt from the front."""

    def __init__(self, cards: list[str]) -> None:
        self._cards = cards
        self._next = 0

    @property
    def remaining(self) -> int:
        return len(self._cards) - self._next

    def deal(self) -> str:
        if self._next >= len(self._cards):
            raise ShoeExhaustedError
        card = self._cards[self._next]
        self._next += 1
        return card


def make_shoe(seed: str) -> list[str]:
    """Six standard decks shuffled once with Fisher-Yates."""
    deck = [f"{rank}{suit}" for suit in SUITS for rank in RANKS]
    return fisher_yates_shuffle(deck * DECKS, sub_stream(seed, "shoe"))


def card_value(card: str) -> int:
    rank = card[:-1]
    if rank == "A":
        return 11
    if rank in ("K", "Q", "J"):
        return 10
    return int(rank)


def hand_value(hand: Sequence[str]) -> int:
    """Best total, counting aces as 1 while the hand would otherwise bust."""
    total = sum(card_value(card) for card in hand)
    aces = sum(1 for card in hand if card.startswith("A"))
    while total > BLACKJACK and aces > 0:
        total -= 10
        aces -= 1
    return total


@dataclass(frozen=True)
class HandOutcome:
    outcome: str  # "bust" | "win" | "push" | "loss"
    delta: int
    streak: int


def settle_hand(player_total: int, dealer_total: int, *, natural: bool, bet: int, streak: int) -> HandOutcome:
    """Score one finished hand and return the updated win streak."""
    if player_total > BLACKJACK:
        return HandOutcome("bust", -LOSS_POINTS * bet, 0)
    if dealer_total > BLACKJACK or player_total > dealer_total:
        streak += 1
        delta = WIN_POINTS * bet + (NATURAL_BONUS if natural else 0) + streak
        return HandOutcome("win", delta, streak)
    if player_total == dealer_total:
        return HandOutcome("push", PUSH_POINTS, 0)
    return HandOutcome("loss", -LOSS_POINTS * bet, 0)


def _decisions_for(action: RunAction | None) -> list[str]:
    if action is None:
        return []
    decisions = payload_of(action).get("decisions")
    if not isinstance(decisions, list):
        return []
    return [d for d in decisions if isinstance(d, str)]


def _play_player(shoe: Shoe, hand: list[str], decisions: list[str]) -> int:
    """Apply decisions to the player's hand and return the bet multiplier."""
    bet = 1
    for decision in decisions:
        if hand_value(hand) > BLACKJACK:
            break
        if decision == HandDecision.HIT:
            hand.append(shoe.deal())
        elif decision == HandDecision.DOUBLE:
            if len(hand) != 2:  # noqa: PLR2004
                continue
            bet = 2
            hand.append(shoe.deal())
            break
        elif decision == HandDecision.STAND:
            break
    return bet


def simulate_blackjack(seed: str, transcript: Sequence[RunAction]) -> SimulationResult:
    shoe = Shoe(make_shoe(seed))
    hand_actions = first_indexed(transcript, ActionType.HAND, "hand", HANDS_PER_RUN)
    score = 0
    streak = 0
    hands: list[dict] = []
    shoe_exhausted = False

    for hand_index in range(HANDS_PER_RUN):
        try:
            player = [shoe.deal(), shoe.deal()]
            dealer = [shoe.deal(), shoe.deal()]
            bet = _play_player(shoe, player, _decisions_for(hand_actions.get(hand_index)))
            while hand_value(dealer) < DEALER_STANDS_AT:
                dealer.append(shoe.deal())
        except ShoeExhaustedError:
            shoe_exhausted = True
            break

        player_total = hand_value(player)
        dealer_total = hand_value(dealer)
        result = settle_hand(
            player_total,
            dealer_total,
            natural=player_total == BLACKJACK and len(player) == 2,  # noqa: PLR2004
            bet=bet,
            streak=streak,
        )
        streak = result.streak
        score += result.delta
        hands.append(
            {
                "hand": hand_index,
                "player": player,
                "dealer": dealer,
                "player_total": player_total,
                "dealer_total": dealer_total,
                "bet": bet,
                "outcome": result.outcome,
                "delta": result.delta,
                "streak": streak,
            },
        )

    return SimulationResult(
        score=score,
        details={"hands": hands, "shoe_exhausted": shoe_exhausted},
    )
