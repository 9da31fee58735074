from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emojiclicker.report import SimulationReport

SUFFIXES = [
    "", "K", "M", "B", "T", "Qa", "Qi", "Sx", "Sp", "Oc", "No", "Dc",
    "UDc", "DDc", "TDc", "QaDc", "QiDc", "SxDc", "SpDc", "OcDc", "NoDc", "Vg",
]


def fmt_num(n: float, sci: bool = False) -> str:
    """Short human form: 999, 1.50 K, 12.3 M, 456 B."""
    if n == math.inf:
        return "∞"
    if math.isnan(n):
        return "0"
    if n < 0:
        return "-" + fmt_num(-n, sci)
    if n < 1000:
        return f"{n:.1f}" if n < 10 else str(math.floor(n))
    if sci and n >= 1e66:
        return f"{n:.3e}"
    i = 0
    v = float(n)
    while v >= 1000 and i < len(SUFFIXES) - 1:
        v /= 1000
        i += 1
    if v < 10:
        head = f"{v:.2f}"
    elif v < 100:
        head = f"{v:.1f}"
    else:
        head = str(math.floor(v))
    return f"{head} {SUFFIXES[i]}"


def fmt_time(seconds: float) -> str:
    s = max(0.0, seconds)
    if s < 60:
        return f"{math.floor(s)}s"
    if s < 3600:
        return f"{math.floor(s / 60)}m {math.floor(s % 60)}s"
    return f"{math.floor(s / 3600)}h {math.floor((s % 3600) / 60)}m"


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 30 + " Emoji Clicker Simulation Report " + "=" * 30)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Result: {report.outcome} at {fmt_time(report.total_time)}")
    lines.append(f"Final: {fmt_num(report.final_currency)} emojis, {fmt_num(report.final_rate)} EPS")
    lines.append(f"Best EPS: {fmt_num(report.best_rate)}  Clicks: {report.total_clicks}")
    lines.append("")

    if report.achievements:
        lines.append(f"ACHIEVEMENTS ({len(report.achievements)}):")
        for a in report.achievements:
            lines.append(f"  * {a.achievement_id:.<30s} {fmt_time(a.time)}")
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")
    lines.append("")

    if report.golden:
        lines.append(f"EVENTS: {len(report.golden)} claimed")
        lines.append("")

    if report.reboots:
        lines.append("REBOOTS:")
        for r in report.reboots:
            lines.append(f"  * {fmt_time(r.time)}: +{r.gain} Aura after {fmt_time(r.run_duration)}")
        lines.append("")

    return "\n".join(lines)
