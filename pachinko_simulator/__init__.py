"""
パチンコ シミュレーター
Pachinko play-session simulator

通常・確変(ST/ループ)・時短の状態遷移を持つ1日の稼働を
複数日シミュレートし、連チャン分布や収支推移を集計する。
"""

from .batch import iter_batches, run_simulation
from .config import (
    DEFAULT_POLICY,
    Continuation,
    ContinuationMode,
    SessionPolicy,
    SimulationConfig,
)
from .session import DayResult, State, simulate_day
from .stats import BatchSummary, MultiStats, multi_stats, streak_histogram, summarize
from .validation import ConfigValidationError, ValidationFailure, validate_config, validate_mapping

__version__ = "0.1.0"
