from __future__ import annotations

from emojiclicker.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Draw currency, EPS, purchases and achievement pacing in four panels.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install emojiclicker[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"Emoji Clicker Simulation: {report.strategy_description}", fontsize=14)

    # 1. Currency over time (log scale)
    ax1 = axes[0][0]
    series = report.currency_series()
    if series:
        times, values = zip(*series)
        ax1.plot(times, [max(v, 1e-10) for v in values])
    ax1.set_yscale("log")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Emojis")
    ax1.set_title("Currency")
    ax1.grid(True, alpha=0.3)

    # 2. EPS over time, reboots marked
    ax2 = axes[0][1]
    series = report.rate_series()
    if series:
        times, rates = zip(*series)
        ax2.plot(times, rates)
    for r in report.reboots:
        ax2.axvline(r.time, color="purple", linestyle=":", alpha=0.6)
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("EPS")
    ax2.set_title("Production Rate")
    ax2.grid(True, alpha=0.3)

    # 3. Purchase timeline
    ax3 = axes[1][0]
    if report.purchases:
        items = [p.item_id for p in report.purchases]
        item_ids = sorted(set(items))
        y_map = {e: i for i, e in enumerate(item_ids)}
        ax3.scatter([p.time for p in report.purchases], [y_map[e] for e in items], s=10, alpha=0.6)
        ax3.set_yticks(range(len(item_ids)))
        ax3.set_yticklabels(item_ids, fontsize=6)
        ax3.set_xlabel("Time (s)")
        ax3.set_title("Purchase Timeline")
        ax3.grid(True, alpha=0.3)

    # 4. Cumulative achievements
    ax4 = axes[1][1]
    if report.achievements:
        times = sorted(a.time for a in report.achievements)
        ax4.step(times, range(1, len(times) + 1), where="post")
        ax4.set_xlabel("Time (s)")
        ax4.set_ylabel("Earned")
        ax4.set_title("Achievements")
        ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
