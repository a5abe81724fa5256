"""
複数日のシミュレーション実行
Batch runner
"""

import logging
from typing import Callable, Iterator, List, Optional

import numpy as np

from .config import DEFAULT_POLICY, SessionPolicy, SimulationConfig
from .session import DayResult, simulate_day

logger = logging.getLogger(__name__)

# 入力上限(1,000日)と同じ値。フロントエンドの分割条件をそのまま残している
LARGE_RUN_DAYS = 1000       # これを超えると分割実行
LARGE_RUN_CHUNK = 100       # 分割実行時の1チャンクの日数
PROGRESS_LOG_DAYS = 100     # これを超えると進捗をINFOで出す
DETAIL_LOG_DAYS = 10        # これ以下なら1日ごとの結果をログに出す


def day_generators(days: int, seed: Optional[int] = None) -> List[np.random.Generator]:
    """日ごとに独立した乱数生成器を作る（同じseedなら同じ系列）"""
    children = np.random.SeedSequence(seed).spawn(days)
    return [np.random.default_rng(child) for child in children]


def default_chunk_size(days: int) -> int:
    return LARGE_RUN_CHUNK if days > LARGE_RUN_DAYS else days


def iter_batches(
    config: SimulationConfig,
    seed: Optional[int] = None,
    chunk_size: Optional[int] = None,
    policy: SessionPolicy = DEFAULT_POLICY,
) -> Iterator[List[DayResult]]:
    """
    稼働日をチャンク単位で実行し、チャンクごとの結果を返すジェネレータ

    チャンクの区切りは実行のタイミングにのみ影響し、
    結果の値や順序は変わらない。
    """
    if chunk_size is None:
        chunk_size = default_chunk_size(config.days)
    if chunk_size < 1:
        raise ValueError("chunk_size must be at least 1")

    generators = day_generators(config.days, seed)
    for start in range(0, config.days, chunk_size):
        end = min(start + chunk_size, config.days)
        chunk = []
        for day in range(start, end):
            result = simulate_day(config, generators[day], policy)
            if config.days <= DETAIL_LOG_DAYS:
                logger.debug(
                    "day %d: spins=%d hits=%d (normal=%d bonus=%d) entries=%d/%d "
                    "max_streak=%d payout=%d profit=%+d",
                    day + 1, result.spins, result.total_hits, result.normal_hits,
                    result.bonus_hits, result.bonus_entries, result.time_limited_entries,
                    result.max_streak, result.payout_balls, result.profit_yen,
                )
            chunk.append(result)
        yield chunk


def run_simulation(
    config: SimulationConfig,
    seed: Optional[int] = None,
    chunk_size: Optional[int] = None,
    progress: Optional[Callable[[int, int], None]] = None,
    policy: SessionPolicy = DEFAULT_POLICY,
) -> List[DayResult]:
    """
    設定された日数ぶんシミュレーションを実行

    Args:
        config: 検証済みの設定
        seed: 乱数シード（None なら毎回異なる結果）
        chunk_size: 1チャンクの日数（None なら日数に応じて自動）
        progress: チャンク完了ごとに (完了日数, 総日数) で呼ばれる
        policy: 抽選テーブル

    Returns:
        DayResultのリスト（実行順）
    """
    logger.debug("simulating %d days (seed=%s)", config.days, seed)
    results: List[DayResult] = []
    level = logging.INFO if config.days > PROGRESS_LOG_DAYS else logging.DEBUG
    for chunk in iter_batches(config, seed=seed, chunk_size=chunk_size, policy=policy):
        results.extend(chunk)
        done = len(results)
        logger.log(level, "処理中... %d%% (%d/%d日)", round(done / config.days * 100), done, config.days)
        if progress is not None:
            progress(done, config.days)
    return results
