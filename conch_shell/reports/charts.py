"""Bar chart PNGs for the MBO graph listener.

One bar per component type, or one bar per vendor with that vendor's
failures summed across types. Bars are ordered by label.
"""

import io
import threading
from dataclasses import dataclass

from conch_shell.reports.aggregates import DatacenterReport

# pyplot keeps global figure state; listener requests render from worker threads.
_PYPLOT_LOCK = threading.Lock()


class EmptyChartError(ValueError):
    """Nothing to plot."""


@dataclass
class ChartValue:
    label: str
    value: int


def type_count_values(dc: DatacenterReport) -> list[ChartValue]:
    return [
        ChartValue(label=f"{name} : {data.count}", value=data.count)
        for name, data in sorted(dc.times_by_type.items())
    ]


def vendor_count_values(dc: DatacenterReport) -> list[ChartValue]:
    values = []
    for vendor, by_type in sorted(dc.times_by_vendor_and_type.items()):
        count = sum(data.count for data in by_type.values())
        values.append(ChartValue(label=f"{vendor} : {count}", value=count))
    return values


def render_bar_chart(values: list[ChartValue], title: str = "") -> bytes:
    """Render values as a PNG bar chart.

    Raises:
        EmptyChartError: ``values`` is empty.
    """
    if not values:
        raise EmptyChartError("No data available")

    import matplotlib

    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    width = max(6.0, 1.2 * len(values))
    labels = [v.label for v in values]
    positions = range(len(values))

    buf = io.BytesIO()
    with _PYPLOT_LOCK:
        fig, ax = plt.subplots(figsize=(width, 5.12))
        try:
            ax.bar(positions, [v.value for v in values], width=0.6)
            ax.set_xticks(positions)
            ax.set_xticklabels(labels, rotation=30, ha="right")
            ax.set_ylabel("Failures")
            if title:
                ax.set_title(title)

            ax.spines["top"].set_visible(False)
            ax.spines["right"].set_visible(False)

            plt.tight_layout()
            plt.savefig(buf, format="png", dpi=100, bbox_inches="tight")
        finally:
            plt.close(fig)
    buf.seek(0)
    return buf.read()
