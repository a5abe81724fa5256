"""
1日の稼働シミュレーション
Session simulator

通常 → 確変(ST/ループ) → 時短 の状態遷移を1回転ずつ抽選し、
当たり数・連チャン・出玉推移を集計する。
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple

from .config import DEFAULT_POLICY, SessionPolicy, SimulationConfig


class State(Enum):
    """遊技状態"""
    NORMAL = "通常"
    BONUS = "確変"
    TIME_LIMITED = "時短"


@dataclass(frozen=True)
class DayResult:
    """1日の稼働結果"""
    balls_per_spin: int                 # この日の1回転あたり消費玉
    spins: int                          # 総回転数
    total_hits: int                     # 総当たり回数
    normal_hits: int                    # 通常当たり（通常・時短中）
    bonus_hits: int                     # 確変当たり
    bonus_entries: int                  # 確変突入回数
    time_limited_entries: int           # 時短突入回数
    streaks: Tuple[int, ...]            # 各連チャンの長さ（発生順）
    max_streak: int                     # 最大連チャン数
    payout_balls: int                   # 総出玉
    profit_yen: int                     # 収支（円）
    payout_progress: Tuple[int, ...]    # 出玉推移（サンプリング）
    profit_progress: Tuple[int, ...]    # 収支推移（サンプリング）

    @property
    def misses(self) -> int:
        return self.spins - self.total_hits

    @property
    def streak_count(self) -> int:
        return len(self.streaks)


def spins_for_day(config: SimulationConfig, balls_per_spin: int) -> int:
    """予算と消費玉から1日の回転数を求める"""
    return math.floor(config.balls_per_day * (1 / balls_per_spin))


def simulate_day(
    config: SimulationConfig,
    rng,
    policy: SessionPolicy = DEFAULT_POLICY,
) -> DayResult:
    """
    1日分の稼働をシミュレート

    Args:
        config: 検証済みの設定
        rng: 乱数源（numpy.random.Generator 互換: random() と integers(low, high)）
        policy: 出玉テーブル・消費玉・サンプリング上限

    Returns:
        DayResult: 1日の稼働結果

    推移データは spins // sampling_budget 回転ごと（最低1回転）と最終回転で記録する。
    そのため点数は sampling_budget 前後で、最大でも 2 * sampling_budget 点以内に収まる。
    """
    if not isinstance(config, SimulationConfig):
        raise TypeError(f"simulate_day requires a SimulationConfig, got {type(config).__name__}")

    # 回転効率は日ごとに抽選
    choices = policy.balls_per_spin_choices
    balls_per_spin = choices[int(rng.integers(0, len(choices)))]
    spins = spins_for_day(config, balls_per_spin)
    cadence = max(1, spins // policy.sampling_budget)

    payout_table = policy.payout_balls
    jitan_spins = config.time_limited_spins
    investment = config.daily_budget_yen

    state = State.NORMAL
    jitan_left = 0
    streak = 0
    total_hits = 0
    normal_hits = 0
    bonus_hits = 0
    bonus_entries = 0
    jitan_entries = 0
    payout = 0
    streaks: List[int] = []
    payout_progress: List[int] = []
    profit_progress: List[int] = []

    for spin in range(1, spins + 1):
        hit_prob = config.bonus_hit_probability if state is State.BONUS else config.base_hit_probability

        if rng.random() < hit_prob:
            total_hits += 1
            payout += payout_table[int(rng.integers(0, len(payout_table)))]
            streak += 1

            if state is State.BONUS:
                bonus_hits += 1
                stay = rng.random() < config.continuation_rate
            else:
                # 時短中の当たりも通常当たりとして数える
                normal_hits += 1
                stay = rng.random() < config.bonus_entry_probability
                if stay:
                    bonus_entries += 1

            if stay:
                state = State.BONUS
            elif jitan_spins > 0:
                jitan_entries += 1
                state = State.TIME_LIMITED
                jitan_left = jitan_spins
            else:
                state = State.NORMAL
                streaks.append(streak)
                streak = 0
        elif state is State.TIME_LIMITED:
            jitan_left -= 1
            if jitan_left <= 0:
                state = State.NORMAL
                streaks.append(streak)
                streak = 0

        if spin % cadence == 0 or spin == spins:
            payout_progress.append(payout)
            profit_progress.append(payout * config.bet_unit_yen - investment)

    # 営業終了時に継続中の連チャンを確定
    if streak > 0:
        streaks.append(streak)

    return DayResult(
        balls_per_spin=balls_per_spin,
        spins=spins,
        total_hits=total_hits,
        normal_hits=normal_hits,
        bonus_hits=bonus_hits,
        bonus_entries=bonus_entries,
        time_limited_entries=jitan_entries,
        streaks=tuple(streaks),
        max_streak=max(streaks) if streaks else 0,
        payout_balls=payout,
        profit_yen=payout * config.bet_unit_yen - investment,
        payout_progress=tuple(payout_progress),
        profit_progress=tuple(profit_progress),
    )
