"""
シミュレーション設定
Simulation configuration and policy tables

入力値の選択肢・出玉テーブルなどのポリシー定数と、
1回の実行で共有される不変の設定オブジェクトを定義する。
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple


# 入力値の選択肢（フロントエンドと共通）
BET_UNIT_CHOICES: Tuple[int, ...] = (1, 4)                          # 1玉あたりの貸玉料金（円）
BASE_HIT_DENOMINATORS: Tuple[int, ...] = (319, 199, 99)             # 大当り確率 1/x
BONUS_ENTRY_PERCENTS: Tuple[int, ...] = (50, 60, 70, 80)            # 確変突入率（%）
BONUS_HIT_DENOMINATORS: Tuple[int, ...] = (30, 40, 50, 60, 70, 80, 90)  # 確変中大当り確率 1/y
BUDGET_RANGE: Tuple[int, int] = (100, 1_000_000)                    # 1日の予算（円）
DAYS_RANGE: Tuple[int, int] = (1, 1000)                             # 稼働日数
TIME_LIMITED_RANGE: Tuple[int, int] = (10, 1000)                    # 時短回転数（0=時短なし）
CONTINUATION_PERCENT_RANGE: Tuple[int, int] = (1, 100)              # 継続率（%）

# 抽選テーブル
PAYOUT_BALLS: Tuple[int, ...] = (400, 600, 1000, 1500)  # 1回の大当り出玉（発）
BALLS_PER_SPIN_CHOICES: Tuple[int, ...] = (4, 5, 6)     # 1回転あたりの消費玉（日ごとに抽選）
SAMPLING_BUDGET = 1000                                  # 推移グラフのサンプル上限


@dataclass(frozen=True)
class SessionPolicy:
    """1日の抽選に使うテーブル"""
    payout_balls: Tuple[int, ...] = PAYOUT_BALLS
    balls_per_spin_choices: Tuple[int, ...] = BALLS_PER_SPIN_CHOICES
    sampling_budget: int = SAMPLING_BUDGET

    def __post_init__(self):
        if not self.payout_balls:
            raise ValueError("payout_balls must not be empty")
        if not self.balls_per_spin_choices or min(self.balls_per_spin_choices) < 1:
            raise ValueError("balls_per_spin_choices must be positive integers")
        if self.sampling_budget < 1:
            raise ValueError("sampling_budget must be at least 1")


DEFAULT_POLICY = SessionPolicy()


class ContinuationMode(Enum):
    """確変の継続方式"""
    ST = "ST"
    LOOP = "ループ"


@dataclass(frozen=True)
class Continuation:
    """確変の継続方式と継続率（どちらか一方のみを保持）"""
    mode: ContinuationMode
    rate: float

    def __post_init__(self):
        if not isinstance(self.mode, ContinuationMode):
            raise ValueError(f"unknown continuation mode: {self.mode!r}")
        if not 0 < self.rate <= 1:
            raise ValueError("continuation rate must be in (0, 1]")


def _check_probability(name: str, value: float):
    if not 0 < value <= 1:
        raise ValueError(f"{name} must be in (0, 1], got {value!r}")


@dataclass(frozen=True)
class SimulationConfig:
    """
    検証済みのシミュレーション設定

    Validatorで一度だけ生成し、以後は変更しない。
    値の構造的な矛盾（負の予算や範囲外の確率）は生成時に ValueError となる。
    """
    bet_unit_yen: int               # 1玉の料金（円）
    daily_budget_yen: int           # 1日の予算（円）
    days: int                       # 稼働日数
    base_hit_probability: float     # 通常時大当り確率
    bonus_entry_probability: float  # 確変突入率
    bonus_hit_probability: float    # 確変中大当り確率
    continuation: Continuation      # 継続方式（ST/ループ）と継続率
    time_limited_spins: int = 0     # 時短回転数（0=時短なし）

    def __post_init__(self):
        for name in ("bet_unit_yen", "daily_budget_yen", "days"):
            value = getattr(self, name)
            if not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        _check_probability("base_hit_probability", self.base_hit_probability)
        _check_probability("bonus_entry_probability", self.bonus_entry_probability)
        _check_probability("bonus_hit_probability", self.bonus_hit_probability)
        if not isinstance(self.continuation, Continuation):
            raise ValueError("continuation must be a Continuation")
        if not isinstance(self.time_limited_spins, int) or self.time_limited_spins < 0:
            raise ValueError("time_limited_spins must be a non-negative integer")

    @property
    def continuation_mode(self) -> ContinuationMode:
        return self.continuation.mode

    @property
    def continuation_rate(self) -> float:
        return self.continuation.rate

    @property
    def balls_per_day(self) -> int:
        """1日の予算で借りられる玉数"""
        return self.daily_budget_yen // self.bet_unit_yen

    def describe(self) -> Dict[str, str]:
        """表示用の設定一覧"""
        return {
            "貸玉料金": f"{self.bet_unit_yen}円",
            "1日の予算": f"{self.daily_budget_yen:,}円",
            "稼働日数": f"{self.days:,}日",
            "大当り確率": f"1/{1 / self.base_hit_probability:.0f}",
            "確変突入率": f"{self.bonus_entry_probability * 100:.0f}%",
            "確変中大当り確率": f"1/{1 / self.bonus_hit_probability:.0f}",
            "継続方式": self.continuation_mode.value,
            "継続率": f"{self.continuation_rate * 100:.0f}%",
            "時短回転数": f"{self.time_limited_spins}回転" if self.time_limited_spins else "なし",
        }
