"""
結果表示（テキスト）
Text presentation of simulation results
"""

from typing import Sequence

from .analysis import (
    convergence_days,
    hamari_table,
    profit_distribution,
    profit_std,
    win_rate,
)
from .config import SimulationConfig
from .session import DayResult
from .stats import DAY_METRICS, BatchSummary, SeriesPoint


def print_config(config: SimulationConfig):
    """入力値の一覧を表示"""
    print("=" * 60)
    print("パチンコ シミュレーション 入力値")
    print("=" * 60)
    for label, value in config.describe().items():
        print(f"  {label:<10}: {value}")


def print_summary(summary: BatchSummary, results: Sequence[DayResult]):
    """集計サマリーを表示"""
    print(f"\n【集計サマリー】（{summary.days:,}日）")
    print(f"  {'指標':<10} {'最小':>10} {'最大':>10} {'平均':>12} {'中央値':>10} {'最頻値':>10} {'合計':>12}")
    print("  " + "-" * 82)
    for key, label in DAY_METRICS:
        s = summary.metrics[key]
        print(f"  {label:<10} {s.min:>10,} {s.max:>10,} {s.mean:>12,.2f} "
              f"{s.median:>10,} {s.mode:>10,} {s.sum:>12,}")
    print(f"  {'連チャン数(平均)':<10} {summary.streak_stats.mean:>56,.2f} {summary.streak_stats.sum:>12,}")

    total_spins = summary.normal_hits + summary.bonus_hits + summary.misses
    print(f"\n  当たり種別:")
    for label, count in (("通常当たり", summary.normal_hits),
                         ("確変当たり", summary.bonus_hits),
                         ("ハズレ", summary.misses)):
        pct = count / total_spins * 100 if total_spins else 0
        print(f"    {label:<8}: {count:>10,}回 ({pct:.2f}%)")
    print(f"\n  突入回数: 確変 {summary.bonus_entries:,}回 / 時短 {summary.time_limited_entries:,}回")

    hist = summary.histogram
    if hist and hist.counts:
        streak_total = sum(hist.counts)
        print(f"\n  連チャン分布:")
        for label, count in zip(hist.labels, hist.counts):
            pct = count / streak_total * 100
            if pct >= 0.5:
                bar = "█" * int(pct / 2)
                print(f"    {label:>5}: {count:>7,}件 {pct:5.1f}% {bar}")

    print_analysis(results)


def print_analysis(results: Sequence[DayResult]):
    """勝率・収支分布・収束日数を表示"""
    if not results:
        return
    rate = win_rate(results)
    std = profit_std(results)
    avg = sum(r.profit_yen for r in results) / len(results)

    print(f"\n【収支】")
    print(f"  勝率: {rate:.1f}%")
    print(f"  平均収支: {avg:+,.0f}円")
    print(f"  標準偏差: {std:,.0f}円")

    print(f"\n  収支分布:")
    for label, pct in profit_distribution(results):
        if pct >= 0.5:
            bar = "█" * int(pct / 2)
            print(f"    {label:<12}: {pct:5.1f}% {bar}")

    print(f"\n  勝率収束に必要な稼働日数:")
    for target, days in convergence_days(avg, std).items():
        text = "到達しない" if days is None else f"{days:,.0f}日"
        print(f"    {target}%: {text}")


def print_day_details(results: Sequence[DayResult]):
    """各日の結果を表示（少数日数用）"""
    for i, r in enumerate(results, 1):
        print(f"\n{'=' * 50}")
        print(f"【{i}日目】収支: {r.profit_yen:+,}円")
        print(f"{'=' * 50}")
        print(f"  回転数: {r.spins:,}回転（{r.balls_per_spin}玉/回転）")
        print(f"  当たり: {r.total_hits}回（通常 {r.normal_hits} / 確変 {r.bonus_hits}）")
        print(f"  突入: 確変 {r.bonus_entries}回 / 時短 {r.time_limited_entries}回")
        if r.streaks:
            chains = ", ".join(f"{c}連" for c in r.streaks)
            print(f"  連チャン: {chains}（最大{r.max_streak}連）")
        else:
            print("  当たりなし")
        print(f"  総出玉: {r.payout_balls:,}発")


def print_series(title: str, points: Sequence[SeriesPoint], rows: int = 10):
    """推移統計を間引いて表示"""
    if not points:
        return
    step = max(1, len(points) // rows)
    print(f"\n【{title}】")
    print(f"  {'点':>6} {'平均':>12} {'最小':>10} {'中央値':>10} {'最頻値':>10} {'日数':>6}")
    indices = list(range(0, len(points), step))
    if indices[-1] != len(points) - 1:
        indices.append(len(points) - 1)
    for i in indices:
        p = points[i]
        print(f"  {i + 1:>6} {p.mean:>12,.1f} {p.min:>10,} {p.median:>10,} {p.mode:>10,} {p.samples:>6}")


def print_hamari(prob: float):
    """ハマり確率の表を表示"""
    print("=" * 40)
    print(f"ハマり確率（1/{1 / prob:.0f}）")
    print("=" * 40)
    print(f"\n{'回転数':<10} {'確率':>15}")
    print("-" * 40)
    for spins, p in hamari_table(prob):
        print(f"{spins}回転{'':<4} {p * 100:>14.2f}%")
