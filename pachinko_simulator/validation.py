"""
入力バリデーション
Configuration validator

フォームやコマンドラインから受け取った生の値を検証し、
SimulationConfig を生成する。違反した場合は最も具体的なルールを
ConfigValidationError.kind として返す。
"""

import math
from enum import Enum
from typing import Any, Mapping, Optional

from .config import (
    BASE_HIT_DENOMINATORS,
    BET_UNIT_CHOICES,
    BONUS_ENTRY_PERCENTS,
    BONUS_HIT_DENOMINATORS,
    BUDGET_RANGE,
    CONTINUATION_PERCENT_RANGE,
    DAYS_RANGE,
    TIME_LIMITED_RANGE,
    Continuation,
    ContinuationMode,
    SimulationConfig,
)


class ValidationFailure(Enum):
    """検証エラーの種別（優先度順）"""
    MISSING_FIELD = "MissingField"
    BOTH_CONTINUATION_MODES_SET = "BothContinuationModesSet"
    NO_CONTINUATION_MODE_SET = "NoContinuationModeSet"
    OUT_OF_RANGE = "OutOfRange"


MESSAGES = {
    ValidationFailure.MISSING_FIELD: "入力エラーがあります。全ての項目を確認してください。",
    ValidationFailure.BOTH_CONTINUATION_MODES_SET:
        "継続率(ST)と継続率(ループ型)は同時に選択できません。どちらか一方のみ選択してください。",
    ValidationFailure.NO_CONTINUATION_MODE_SET:
        "継続率はSTまたはループ型のどちらか一方を選択してください。",
    ValidationFailure.OUT_OF_RANGE: "入力値が範囲外です。全ての項目を確認してください。",
}


class ConfigValidationError(ValueError):
    """入力値が不正でシミュレーションを開始できない"""

    def __init__(self, kind: ValidationFailure, detail: str = ""):
        self.kind = kind
        self.detail = detail
        super().__init__(MESSAGES[kind])


def _parse_int(value: Any) -> Optional[int]:
    """整数として解釈する（小数は切り捨て）。解釈できなければ None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _in_range(value: int, bounds) -> bool:
    low, high = bounds
    return low <= value <= high


def validate_config(
    bet_unit_yen: Any,
    daily_budget_yen: Any,
    days: Any,
    base_hit_denominator: Any,
    bonus_entry_percent: Any,
    bonus_hit_denominator: Any,
    time_limited_spins: Any,
    st_rate_percent: Any = None,
    loop_rate_percent: Any = None,
) -> SimulationConfig:
    """
    生の入力値を検証して SimulationConfig を返す

    Args:
        bet_unit_yen: 1玉の料金（円）
        daily_budget_yen: 1日の予算（円）
        days: 稼働日数
        base_hit_denominator: 大当り確率の分母（1/x の x）
        bonus_entry_percent: 確変突入率（%）
        bonus_hit_denominator: 確変中大当り確率の分母
        time_limited_spins: 時短回転数（0=時短なし）
        st_rate_percent: ST継続率（%）。ループと排他
        loop_rate_percent: ループ継続率（%）。STと排他

    Returns:
        SimulationConfig

    Raises:
        ConfigValidationError: 検証に失敗した場合
    """
    required = {
        "bet_unit_yen": _parse_int(bet_unit_yen),
        "daily_budget_yen": _parse_int(daily_budget_yen),
        "days": _parse_int(days),
        "base_hit_denominator": _parse_int(base_hit_denominator),
        "bonus_entry_percent": _parse_int(bonus_entry_percent),
        "bonus_hit_denominator": _parse_int(bonus_hit_denominator),
        "time_limited_spins": _parse_int(time_limited_spins),
    }
    missing = [name for name, value in required.items() if value is None]
    if missing:
        raise ConfigValidationError(ValidationFailure.MISSING_FIELD, ", ".join(missing))

    # 0・空欄は未選択扱い
    st = _parse_int(st_rate_percent) or None
    loop = _parse_int(loop_rate_percent) or None
    if st is not None and loop is not None:
        raise ConfigValidationError(ValidationFailure.BOTH_CONTINUATION_MODES_SET)
    if st is None and loop is None:
        raise ConfigValidationError(ValidationFailure.NO_CONTINUATION_MODE_SET)

    mode = ContinuationMode.ST if st is not None else ContinuationMode.LOOP
    rate_percent = st if st is not None else loop
    jitan = required["time_limited_spins"]

    in_range = (
        required["bet_unit_yen"] in BET_UNIT_CHOICES
        and _in_range(required["daily_budget_yen"], BUDGET_RANGE)
        and _in_range(required["days"], DAYS_RANGE)
        and required["base_hit_denominator"] in BASE_HIT_DENOMINATORS
        and required["bonus_entry_percent"] in BONUS_ENTRY_PERCENTS
        and required["bonus_hit_denominator"] in BONUS_HIT_DENOMINATORS
        and (jitan == 0 or _in_range(jitan, TIME_LIMITED_RANGE))
        and _in_range(rate_percent, CONTINUATION_PERCENT_RANGE)
    )
    if not in_range:
        raise ConfigValidationError(ValidationFailure.OUT_OF_RANGE)

    return SimulationConfig(
        bet_unit_yen=required["bet_unit_yen"],
        daily_budget_yen=required["daily_budget_yen"],
        days=required["days"],
        base_hit_probability=1 / required["base_hit_denominator"],
        bonus_entry_probability=required["bonus_entry_percent"] / 100,
        bonus_hit_probability=1 / required["bonus_hit_denominator"],
        continuation=Continuation(mode, rate_percent / 100),
        time_limited_spins=jitan,
    )


def validate_mapping(raw: Mapping[str, Any]) -> SimulationConfig:
    """辞書形式の入力（フォーム値など）を検証する。キーは validate_config の引数名"""
    return validate_config(
        raw.get("bet_unit_yen"),
        raw.get("daily_budget_yen"),
        raw.get("days"),
        raw.get("base_hit_denominator"),
        raw.get("bonus_entry_percent"),
        raw.get("bonus_hit_denominator"),
        raw.get("time_limited_spins"),
        st_rate_percent=raw.get("st_rate_percent"),
        loop_rate_percent=raw.get("loop_rate_percent"),
    )


def validate_base_hit_denominator(base_hit_denominator: Any) -> float:
    """大当り確率の分母だけを検証して確率を返す（ハマり確率の計算用）"""
    denominator = _parse_int(base_hit_denominator)
    if denominator is None:
        raise ConfigValidationError(ValidationFailure.MISSING_FIELD, "base_hit_denominator")
    if denominator not in BASE_HIT_DENOMINATORS:
        raise ConfigValidationError(ValidationFailure.OUT_OF_RANGE)
    return 1 / denominator
