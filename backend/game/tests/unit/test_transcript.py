import math

import pytest

from game.logic.transcript import as_int, as_number, first_indexed, round_half_up
from game.logic.types import RunAction, parse_transcript
from game.tests.helpers.runs import action


class TestAsInt:
    @pytest.mark.parametrize(("value", "expected"), [(3, 3), (3.0, 3), (-1, -1)])
    def test_accepts_integers(self, value, expected):
        assert as_int(value) == expected

    @pytest.mark.parametrize("value", [True, False, 3.5, "3", None, math.inf, math.nan, [1]])
    def test_rejects_non_integers(self, value):
        assert as_int(value) is None

    def test_bounds(self):
        assert as_int(5, low=0, high=5) == 5
        assert as_int(6, low=0, high=5) is None
        assert as_int(-1, low=0) is None


class TestAsNumber:
    def test_accepts_finite(self):
        assert as_number(2) == 2.0
        assert as_number(0.25) == 0.25

    @pytest.mark.parametrize("value", [True, "1", None, math.inf, -math.inf, math.nan])
    def test_rejects(self, value):
        assert as_number(value) is None


class TestFirstIndexed:
    def test_keeps_first_per_index(self):
        first = action("spin", spin=0, tag="a")
        transcript = [first, action("spin", spin=0, tag="b"), action("spin", spin=9), action("spin", spin=10)]
        found = first_indexed(transcript, "spin", "spin", 10)
        assert found[0] is first
        assert set(found) == {0, 9}


class TestRoundHalfUp:
    @pytest.mark.parametrize(("value", "expected"), [(17.5, 18), (12.5, 13), (12.49, 12), (-0.5, 0)])
    def test_rounds(self, value, expected):
        assert round_half_up(value) == expected


class TestParseTranscript:
    def test_drops_malformed_entries(self):
        raw = [
            {"at": 1, "type": "reveal", "payload": {"index": 2}},
            {"type": ""},
            {"at": "soon", "type": "bank"},
            "bank",
            {"type": "bank", "extra": True},
        ]
        parsed = parse_transcript(raw)
        assert [a.type for a in parsed] == ["reveal", "bank"]
        assert parsed[0].payload == {"index": 2}

    def test_non_list_is_empty(self):
        assert parse_transcript({"type": "bank"}) == []
        assert parse_transcript(None) == []

    def test_defaults(self):
        parsed = RunAction.model_validate({"type": "bank"})
        assert parsed.at == 0.0
        assert parsed.payload is None
