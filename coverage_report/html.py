"""
Self-contained HTML coverage reports.

Rendered with a standalone Django template ``Engine`` (no project settings
needed). Numbers are formatted here and localization is off, so templates
only ever see strings.
"""

from datetime import datetime, timezone
from pathlib import Path

from django.template import Context, Engine

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

engine = Engine(dirs=[str(TEMPLATE_DIR)], autoescape=True)


def render(template_name, context):
    template = engine.get_template(template_name)
    return template.render(Context(context, use_l10n=False, use_tz=False))


def timestamp(now=None):
    now = now or datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def kilobytes(n):
    return f"{n / 1024:.1f}"


def metric(count, digits=1):
    """Template-ready view of one CoverageCount."""
    return {
        "pct": f"{count.pct:.{digits}f}",
        "width": f"{count.pct:.2f}",
        "css_class": count.css_class,
        "covered": str(count.covered),
        "total": str(count.total),
    }


def render_frontend_report(rows, total, generated_at=None):
    """Byte-level report: one row per served script URL.

    Args:
        rows: sorted ``[(url, CoverageCount)]``
        total: CoverageCount summed over rows
    """
    context = {
        "title": "Frontend Coverage Report",
        "total": metric(total),
        "covered_kb": kilobytes(total.covered),
        "total_kb": kilobytes(total.total),
        "rows": [
            {"url": url, "size_kb": kilobytes(counts.total), **metric(counts)}
            for url, counts in rows
        ],
        "generated_at": timestamp(generated_at),
    }
    return render("coverage_report/frontend.html", context)


def render_istanbul_report(stats, totals, generated_at=None):
    """Statement/branch/function report: one row per source file."""
    context = {
        "title": "Frontend Coverage Report (TypeScript)",
        "summary": [
            {"label": label, **metric(totals[key])}
            for key, label in (
                ("statements", "Statements"),
                ("branches", "Branches"),
                ("functions", "Functions"),
            )
        ],
        "files": [
            {
                "path": s.path,
                "metrics": [
                    metric(s.statements, 0),
                    metric(s.branches, 0),
                    metric(s.functions, 0),
                ],
            }
            for s in stats
        ],
        "generated_at": timestamp(generated_at),
    }
    return render("coverage_report/istanbul.html", context)


def write_report(html, path):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    return path
