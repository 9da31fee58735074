from __future__ import annotations

import csv
import json
from pathlib import Path

from emojiclicker.report import SimulationReport


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export simulation data as CSV files.

    Creates three files:
      - {path}_snapshots.csv
      - {path}_purchases.csv
      - {path}_achievements.csv
    """
    base = str(path)

    with open(f"{base}_snapshots.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "currency", "rate", "total_earned"])
        for s in report.snapshots:
            writer.writerow([s.time, s.currency, s.rate, s.total_earned])

    with open(f"{base}_purchases.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "kind", "item_id", "quantity", "cost", "currency_after"])
        for p in report.purchases:
            writer.writerow([p.time, p.kind, p.item_id, p.quantity, p.cost, p.currency_after])

    with open(f"{base}_achievements.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "achievement_id"])
        for a in report.achievements:
            writer.writerow([a.time, a.achievement_id])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export full simulation report as JSON."""
    data = {
        "strategy": report.strategy_description,
        "outcome": report.outcome,
        "total_time": report.total_time,
        "final_currency": report.final_currency,
        "final_rate": report.final_rate,
        "best_rate": report.best_rate,
        "total_clicks": report.total_clicks,
        "prestige": report.prestige,
        "achievement_times": report.achievement_times,
        "purchase_count": len(report.purchases),
        "purchases_per_minute": report.purchases_per_minute,
        "max_purchase_gap": report.max_purchase_gap,
        "mean_purchase_gap": report.mean_purchase_gap,
        "purchases": [
            {
                "time": p.time,
                "kind": p.kind,
                "item_id": p.item_id,
                "quantity": p.quantity,
                "cost": p.cost,
            }
            for p in report.purchases
        ],
        "reboots": [
            {"time": r.time, "gain": r.gain, "run_duration": r.run_duration}
            for r in report.reboots
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
