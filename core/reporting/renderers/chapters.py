from pathlib import Path
from typing import List

import matplotlib.pyplot as plt
from matplotlib import ticker

from core.services.allocation import ChapterTotals

_PALETTE = [
    "#4f46e5", "#059669", "#d97706", "#e11d48", "#0891b2",
    "#7c3aed", "#ea580c", "#2563eb", "#0d9488", "#c026d3",
]


def _to_int32(value: int) -> int:
    return ((value + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def chapter_color(chapter: str) -> str:
    """
    Stable colour per chapter name (same name, same colour, every run).

    Only the shifted term wraps to 32 bits; the running hash itself is left
    unbounded, so the index matches the web dashboard's chapter colours.
    """
    value = 0
    for ch in chapter:
        value = ord(ch) + (_to_int32(_to_int32(value) << 5) - value)
    return _PALETTE[abs(value) % len(_PALETTE)]


class ChapterBudgetChartRenderer:
    def render(self, chapters: List[ChapterTotals], output_path: Path) -> Path:
        if not chapters:
            raise ValueError("No chapters available for budget chart")

        names = [c.chapter for c in chapters]
        budgets = [c.total_budget for c in chapters]
        consumed = [c.consumption for c in chapters]

        fig, ax = plt.subplots(figsize=(12, max(2.5, 0.7 * len(chapters) + 1.5)))

        for i, c in enumerate(chapters):
            ax.barh(i, budgets[i], height=0.5, color="#e2e8f0", edgecolor="black", linewidth=0.6)
            if c.utilization_level == "over":
                color = "#e11d48"
            elif c.utilization_level == "warning":
                color = "#f59e0b"
            else:
                color = chapter_color(c.chapter)
            ax.barh(i, consumed[i], height=0.3, color=color)

        ax.set_yticks(range(len(names)))
        ax.set_yticklabels(names, fontsize=9)
        ax.invert_yaxis()
        ax.xaxis.set_major_formatter(ticker.StrMethodFormatter("{x:,.0f}"))

        ax.set_title("Chapter budget: allocation vs consumption")
        ax.grid(True, axis="x", linestyle=":", linewidth=0.5)

        fig.tight_layout()
        fig.savefig(output_path, dpi=150)
        plt.close(fig)

        return output_path
