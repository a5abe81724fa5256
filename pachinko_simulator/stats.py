"""
統計集計
Statistics aggregator

最小/最大/平均/中央値/最頻値/合計、連チャンヒストグラム、
出玉・収支推移の時点ごとの統計を計算する。
空の入力に対してはすべて 0 を返す（表示側で分岐しないため）。
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

import numpy as np

from .session import DayResult

Number = float

# 集計表に並べる指標（DayResult の属性名, 表示名）
DAY_METRICS = (
    ("spins", "総回転数"),
    ("total_hits", "総当たり数"),
    ("bonus_entries", "確変突入数"),
    ("time_limited_entries", "時短突入数"),
    ("max_streak", "最大連チャン"),
    ("payout_balls", "総出玉"),
    ("profit_yen", "収支(円)"),
)


def stat_min(values: Sequence[Number]) -> Number:
    return min(values) if len(values) else 0


def stat_max(values: Sequence[Number]) -> Number:
    return max(values) if len(values) else 0


def total(values: Sequence[Number]) -> Number:
    return sum(values)


def mean(values: Sequence[Number]) -> Number:
    return float(np.mean(values)) if len(values) else 0


def median(values: Sequence[Number]) -> Number:
    """中央値（偶数個なら中央2値の平均）"""
    return float(np.median(values)) if len(values) else 0


def mode(values: Sequence[Number]) -> Number:
    """最頻値。同数の場合は入力順で先に最多に達した値"""
    if not len(values):
        return 0
    freq: Dict[Number, int] = {}
    best, best_count = values[0], 0
    for value in values:
        count = freq.get(value, 0) + 1
        freq[value] = count
        if count > best_count:
            best, best_count = value, count
    return best


@dataclass(frozen=True)
class MultiStats:
    """1系列の統計値まとめ"""
    min: Number = 0
    max: Number = 0
    mean: Number = 0
    sum: Number = 0
    median: Number = 0
    mode: Number = 0


def multi_stats(values: Sequence[Number]) -> MultiStats:
    """複数統計を一度に計算（個別に計算した場合と同じ値）"""
    if not len(values):
        return MultiStats()
    return MultiStats(
        min=min(values),
        max=max(values),
        mean=mean(values),
        sum=sum(values),
        median=median(values),
        mode=mode(values),
    )


@dataclass(frozen=True)
class StreakHistogram:
    """連チャン数の分布（counts[i] は i+1 連の件数）"""
    labels: List[str]
    counts: List[int]


def streak_histogram(streaks: Sequence[int]) -> StreakHistogram:
    longest = max(streaks) if len(streaks) else 0
    counts = [0] * longest
    for length in streaks:
        if length > 0:
            counts[length - 1] += 1
    return StreakHistogram(labels=[f"{i + 1}連" for i in range(longest)], counts=counts)


@dataclass(frozen=True)
class SeriesPoint:
    """推移グラフ1点分の統計（その時点のデータを持つ日だけで計算）"""
    mean: Number
    min: Number
    median: Number
    mode: Number
    samples: int


def series_stats(series_list: Sequence[Sequence[Number]]) -> List[SeriesPoint]:
    """
    日ごとの推移データを時点ごとに集計

    長さが足りない日はその時点では欠損扱い（0 ではない）。
    """
    longest = max((len(series) for series in series_list), default=0)
    points = []
    for i in range(longest):
        values = [series[i] for series in series_list if i < len(series)]
        points.append(SeriesPoint(
            mean=mean(values),
            min=stat_min(values),
            median=median(values),
            mode=mode(values),
            samples=len(values),
        ))
    return points


@dataclass
class BatchSummary:
    """全日分の集計結果（表示層に渡す）"""
    days: int
    metrics: Dict[str, MultiStats] = field(default_factory=dict)
    streak_stats: MultiStats = field(default_factory=MultiStats)
    histogram: Optional[StreakHistogram] = None
    normal_hits: int = 0
    bonus_hits: int = 0
    misses: int = 0
    bonus_entries: int = 0
    time_limited_entries: int = 0
    payout_series: List[SeriesPoint] = field(default_factory=list)
    profit_series: List[SeriesPoint] = field(default_factory=list)


def summarize(results: Sequence[DayResult]) -> BatchSummary:
    """DayResultのリストから集計表・分布・推移統計を作る"""
    all_streaks = [length for r in results for length in r.streaks]
    return BatchSummary(
        days=len(results),
        metrics={key: multi_stats([getattr(r, key) for r in results]) for key, _ in DAY_METRICS},
        streak_stats=multi_stats(all_streaks),
        histogram=streak_histogram(all_streaks),
        normal_hits=sum(r.normal_hits for r in results),
        bonus_hits=sum(r.bonus_hits for r in results),
        misses=sum(r.misses for r in results),
        bonus_entries=sum(r.bonus_entries for r in results),
        time_limited_entries=sum(r.time_limited_entries for r in results),
        payout_series=series_stats([r.payout_progress for r in results]),
        profit_series=series_stats([r.profit_progress for r in results]),
    )
