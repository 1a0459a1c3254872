import pytest

from game.logic.enums import GameId
from game.service.rewards import RewardPolicy, coins_for_score


class FakeRunRepo:
    def __init__(self, awarded: int) -> None:
        self.awarded = awarded
        self.calls: list[tuple[str, str, str]] = []

    async def get_awarded_coins(self, player_id: str, game_id: str, date: str) -> int:
        self.calls.append((player_id, game_id, date))
        return self.awarded


class TestCoinsForScore:
    def test_two_coins_per_point(self):
        assert coins_for_score(18, cap=400, already=0) == 36

    def test_fractional_scores_floor(self):
        assert coins_for_score(1.99, cap=500, already=0) == 3

    def test_negative_score_earns_nothing(self):
        assert coins_for_score(-25, cap=300, already=0) == 0

    def test_capped_by_remaining_allowance(self):
        assert coins_for_score(100, cap=300, already=250) == 50

    def test_cap_already_reached(self):
        assert coins_for_score(100, cap=300, already=300) == 0
        assert coins_for_score(100, cap=300, already=400) == 0

    def test_running_total_never_exceeds_cap(self):
        cap = 350
        total = 0
        for score in [40, 90, 0, 75, 200, 3.5]:
            coins = coins_for_score(score, cap=cap, already=total)
            assert coins >= 0
            total += coins
            assert total <= cap
        assert total == cap


class TestRewardPolicy:
    async def test_award_uses_game_cap(self):
        repo = FakeRunRepo(awarded=480)
        policy = RewardPolicy(repo)
        assert await policy.award("p1", GameId.CRASH, 50, "2025-06-01") == 20
        assert repo.calls == [("p1", "crash", "2025-06-01")]

    @pytest.mark.parametrize(("game_id", "cap"), [(GameId.MINES, 400), (GameId.ROULETTE, 300)])
    async def test_award_up_to_cap(self, game_id, cap):
        policy = RewardPolicy(FakeRunRepo(awarded=0))
        assert await policy.award("p1", game_id, 10_000, "2025-06-01") == cap
