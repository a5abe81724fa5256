"""テスト用の乱数源と設定"""

from pachinko_simulator.config import Continuation, ContinuationMode, SimulationConfig
from pachinko_simulator.session import DayResult


class ScriptedRandom:
    """決められた値を順に返す乱数源。使い切ったら default / low を返す"""

    def __init__(self, randoms=(), integers=(), default=0.999999):
        self.randoms = list(randoms)
        self.ints = list(integers)
        self.default = default

    def random(self):
        return self.randoms.pop(0) if self.randoms else self.default

    def integers(self, low, high):
        value = self.ints.pop(0) if self.ints else low
        assert low <= value < high
        return value


def make_config(**overrides) -> SimulationConfig:
    values = dict(
        bet_unit_yen=4,
        daily_budget_yen=1000,
        days=1,
        base_hit_probability=1 / 319,
        bonus_entry_probability=0.6,
        bonus_hit_probability=1 / 60,
        continuation=Continuation(ContinuationMode.ST, 0.8),
        time_limited_spins=100,
    )
    values.update(overrides)
    return SimulationConfig(**values)


def make_day(profit_yen=0, streaks=(), spins=100, payout_progress=(), profit_progress=()) -> DayResult:
    return DayResult(
        balls_per_spin=4,
        spins=spins,
        total_hits=sum(streaks),
        normal_hits=len(streaks),
        bonus_hits=sum(streaks) - len(streaks),
        bonus_entries=0,
        time_limited_entries=0,
        streaks=tuple(streaks),
        max_streak=max(streaks) if streaks else 0,
        payout_balls=0,
        profit_yen=profit_yen,
        payout_progress=tuple(payout_progress),
        profit_progress=tuple(profit_progress),
    )
