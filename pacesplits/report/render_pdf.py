# pacesplits/report/render_pdf.py
from __future__ import annotations

from html import escape
from pathlib import Path
from typing import List

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle


def _table_cells(line: str) -> List[str]:
    return [c.strip() for c in line.strip().strip("|").split("|")]


def _is_separator(line: str) -> bool:
    return all(set(c) <= {"-", ":"} and c for c in _table_cells(line))


def _build_table(rows: List[List[str]]) -> Table:
    table = Table(rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTSIZE", (0, 0), (-1, -1), 8),
                ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
                ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
            ]
        )
    )
    return table


def _inline(text: str) -> str:
    # **bold** -> <b>bold</b>, after escaping
    parts = escape(text, quote=False).split("**")
    return "".join(f"<b>{p}</b>" if i % 2 else p for i, p in enumerate(parts))


def render_pdf(markdown_text: str, out_path: Path) -> None:
    styles = getSampleStyleSheet()
    story = []
    table_rows: List[List[str]] = []

    for raw in markdown_text.splitlines():
        line = raw.strip()

        if line.startswith("|"):
            if not _is_separator(line):
                table_rows.append(_table_cells(line))
            continue
        if table_rows:
            story.append(_build_table(table_rows))
            table_rows = []

        if not line or line == "---":
            story.append(Spacer(1, 10))
        elif line.startswith("# "):
            story.append(Paragraph(f"<b>{escape(line[2:], quote=False)}</b>", styles["Title"]))
        elif line.startswith("## "):
            story.append(Spacer(1, 12))
            story.append(Paragraph(f"<b>{escape(line[3:], quote=False)}</b>", styles["Heading2"]))
        elif line.startswith("- "):
            story.append(Paragraph(f"• {_inline(line[2:])}", styles["Normal"]))
        else:
            story.append(Paragraph(_inline(line), styles["Normal"]))

    if table_rows:
        story.append(_build_table(table_rows))

    doc = SimpleDocTemplate(
        str(out_path),
        pagesize=LETTER,
        rightMargin=36,
        leftMargin=36,
        topMargin=36,
        bottomMargin=36,
    )
    doc.build(story)
