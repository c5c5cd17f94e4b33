from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional

from pacesplits.io.models import SplitReport


def _split_rows(report: SplitReport) -> List[str]:
    rows = []
    for i, (split, m) in enumerate(zip(report.splits, report.metrics), start=1):
        rows.append(
            f"| {i} | {split.distance_marker:.0f}m | {m.split_time} | {m.split_pace}/km "
            f"| {m.cumulative_time} | {m.cumulative_pace}/km |"
        )
    return rows


def render_markdown(report: SplitReport, title: Optional[str] = None, generated_at: Optional[str] = None) -> str:
    title = title or f"Split report ({report.split_distance}m)"
    generated_at = generated_at or datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')
    summary = report.summary

    table = '\n'.join(
        [
            '| Split | Distance | Split time | Split pace | Cumulative time | Cumulative pace |',
            '|---|---|---|---|---|---|',
            *_split_rows(report),
        ]
    )

    md = f"""# {title}

**Generated:** {generated_at}

---

## Splits
{table}

---

## Summary
- **Total distance:** {summary.total_distance:.0f}m
- **Total time:** {summary.total_time}
- **Average pace:** {summary.average_pace}/km
- **Track points:** {len(report.points)}
"""
    return md
