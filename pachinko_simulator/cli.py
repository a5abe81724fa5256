"""
コマンドライン
Command line front end
"""

import argparse
import logging
import sys
from typing import List, Optional

from .batch import run_simulation
from .config import (
    BASE_HIT_DENOMINATORS,
    BET_UNIT_CHOICES,
    BONUS_ENTRY_PERCENTS,
    BONUS_HIT_DENOMINATORS,
)
from .report import print_config, print_day_details, print_hamari, print_series, print_summary
from .stats import summarize
from .validation import ConfigValidationError, validate_base_hit_denominator, validate_config

logger = logging.getLogger(__name__)


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"整数を指定してください: {value}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"1以上を指定してください: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="パチンコ シミュレーター")
    parser.add_argument("--mode", choices=["single", "hamari"], default="single",
                        help="実行モード（hamari は --hit-prob のみ使用）")
    parser.add_argument("--bet", default=4,
                        help=f"1玉の料金（円）{list(BET_UNIT_CHOICES)}")
    parser.add_argument("--budget", default=10000,
                        help="1日の予算（円, 100〜1,000,000）")
    parser.add_argument("--days", default=30,
                        help="稼働日数（1〜1,000）")
    parser.add_argument("--hit-prob", default=319,
                        help=f"大当り確率の分母 {list(BASE_HIT_DENOMINATORS)}")
    parser.add_argument("--bonus-entry", default=60,
                        help=f"確変突入率（%%）{list(BONUS_ENTRY_PERCENTS)}")
    parser.add_argument("--bonus-hit-prob", default=60,
                        help=f"確変中大当り確率の分母 {list(BONUS_HIT_DENOMINATORS)}")
    parser.add_argument("--st", default=None,
                        help="ST継続率（%%）。--loop と同時指定不可")
    parser.add_argument("--loop", default=None,
                        help="ループ継続率（%%）。--st と同時指定不可")
    parser.add_argument("--time-limited", default=100,
                        help="時短回転数（0=なし, 10〜1,000）")
    parser.add_argument("--seed", type=int, default=None,
                        help="乱数シード（再現用）")
    parser.add_argument("--chunk-size", type=positive_int, default=None,
                        help="1チャンクあたりの日数")
    parser.add_argument("--detail", "-d", action="store_true",
                        help="各日の結果を強制表示")
    parser.add_argument("--no-detail", action="store_true",
                        help="各日の結果を非表示")
    parser.add_argument("--series", action="store_true",
                        help="出玉・収支推移の統計を表示")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="進捗・各日の結果をログに出力")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        if args.mode == "hamari":
            print_hamari(validate_base_hit_denominator(args.hit_prob))
            return 0
        config = validate_config(
            args.bet, args.budget, args.days, args.hit_prob, args.bonus_entry,
            args.bonus_hit_prob, args.time_limited,
            st_rate_percent=args.st, loop_rate_percent=args.loop,
        )
    except ConfigValidationError as e:
        logger.debug("validation failed: %s %s", e.kind.value, e.detail)
        print(f"エラー: {e}", file=sys.stderr)
        return 2

    print_config(config)
    results = run_simulation(config, seed=args.seed, chunk_size=args.chunk_size)
    summary = summarize(results)
    print_summary(summary, results)

    if args.series:
        print_series("出玉推移", summary.payout_series)
        print_series("収支推移", summary.profit_series)

    # 各日の結果: --detail で強制表示、--no-detail で非表示、それ以外は10日以下で自動表示
    show_detail = args.detail or (config.days <= 10 and not args.no_detail)
    if show_detail:
        print_day_details(results)
    return 0
