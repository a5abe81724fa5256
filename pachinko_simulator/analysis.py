"""
収支分析
Bankroll analysis: win rate, profit distribution, drought and convergence
"""

from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
from scipy import stats

from .session import DayResult


# 収支分布の区分（下限, 上限, 表示名）
PROFIT_BRACKETS: List[Tuple[float, float, str]] = [
    (-np.inf, -80000, "8万負け以上"),
    (-80000, -50000, "5〜8万負け"),
    (-50000, -30000, "3〜5万負け"),
    (-30000, -10000, "1〜3万負け"),
    (-10000, 0, "1万負け以内"),
    (0, 10000, "1万勝ち以内"),
    (10000, 30000, "1〜3万勝ち"),
    (30000, 50000, "3〜5万勝ち"),
    (50000, 80000, "5〜8万勝ち"),
    (80000, 150000, "8〜15万勝ち"),
    (150000, np.inf, "15万勝ち以上"),
]

HAMARI_MARKS = (500, 700, 1000, 1200, 1500, 2000)
CONVERGENCE_TARGETS = (60, 70, 80, 90, 95, 99)


def _profits(results: Sequence[DayResult]) -> np.ndarray:
    return np.array([r.profit_yen for r in results], dtype=float)


def win_rate(results: Sequence[DayResult]) -> float:
    """勝率（収支がプラスの日の割合, %）"""
    if not results:
        return 0.0
    profits = _profits(results)
    return float(np.sum(profits > 0) / len(profits) * 100)


def profit_std(results: Sequence[DayResult]) -> float:
    """1日あたり収支の標準偏差（円）"""
    if not results:
        return 0.0
    return float(np.std(_profits(results)))


def profit_distribution(results: Sequence[DayResult]) -> List[Tuple[str, float]]:
    """収支区分ごとの割合（%）"""
    if not results:
        return [(label, 0.0) for _, _, label in PROFIT_BRACKETS]
    profits = _profits(results)
    distribution = []
    for low, high, label in PROFIT_BRACKETS:
        count = np.sum((profits >= low) & (profits < high))
        distribution.append((label, float(count / len(profits) * 100)))
    return distribution


def hamari_probability(prob: float, spins: int) -> float:
    """
    ハマり確率を計算

    Args:
        prob: 1回転あたりの当選確率
        spins: 回転数

    Returns:
        spins 回転連続で当たらない確率
    """
    if not 0 < prob <= 1:
        raise ValueError("prob must be in (0, 1]")
    if spins < 0:
        raise ValueError("spins must be non-negative")
    return (1 - prob) ** spins


def hamari_table(prob: float, marks: Sequence[int] = HAMARI_MARKS) -> List[Tuple[int, float]]:
    return [(spins, hamari_probability(prob, spins)) for spins in marks]


def convergence_days(
    mean_profit: float,
    std_profit: float,
    targets: Sequence[int] = CONVERGENCE_TARGETS,
) -> Dict[int, Optional[float]]:
    """
    通算収支がプラスになる確率が目標勝率に届くまでの稼働日数

    n日間の通算収支を正規分布で近似し、P(通算 > 0) >= 目標 となる n を求める。
    期待値が 0 以下なら到達しないので None。
    """
    days: Dict[int, Optional[float]] = {}
    for target in targets:
        if mean_profit <= 0:
            days[target] = None
            continue
        z = stats.norm.ppf(target / 100)
        sqrt_n = z * std_profit / mean_profit
        days[target] = float(max(sqrt_n, 0.0) ** 2)
    return days
