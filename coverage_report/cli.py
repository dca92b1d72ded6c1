"""
Command-line entry points for the coverage reports.

Each command takes no arguments, reads from the fixed ``coverage/`` layout
under the current directory and exits with 1 when there is no data.

    generate-frontend-report   V8 byte coverage -> coverage/frontend/html/
    generate-istanbul-report   Istanbul fragments -> coverage/frontend-istanbul/
    report-coverage            Combined frontend + backend console summary
"""

import json
import sys

from coverage_report import html, istanbul, jacoco, v8
from coverage_report.fragments import fragment_files, load_fragments
from coverage_report.summary import combined_percentage, text_bar
from pipeline_e2e import settings
from pipeline_e2e.log import configure_logging

RULE = "─"
DOUBLE_RULE = "═"


def load_v8(directory=None):
    directory = directory or settings.V8_COVERAGE_DIR
    return v8.merge_named_fragments(load_fragments(directory), settings.BASE_URL)


def generate_frontend_report():
    configure_logging()
    if not settings.V8_COVERAGE_DIR.is_dir():
        print("No V8 coverage data found. Run tests first.")
        return 1
    if not fragment_files(settings.V8_COVERAGE_DIR):
        print("No V8 coverage files found.")
        return 1

    print("📊 Generating frontend coverage report...\n")
    merged = load_v8()
    if not merged:
        print("No valid coverage data found in files.")
        return 1
    rows, total = v8.rows_and_total(merged)
    output = html.write_report(
        html.render_frontend_report(rows, total),
        settings.FRONTEND_HTML_DIR / "index.html",
    )
    print(f"✅ Frontend HTML report: {output}\n")
    return 0


def _pct_cell(count):
    return f"{count.pct:.1f}%".rjust(10)


def print_istanbul_table(stats, totals):
    print("Coverage Summary by File:")
    print(RULE * 90)
    print(f"{'File':<50} {'Stmts':>10} {'Branch':>10} {'Funcs':>10}")
    print(RULE * 90)
    for s in stats:
        name = s.path if len(s.path) <= 48 else "..." + s.path[-45:]
        print(
            f"{name:<50} {_pct_cell(s.statements)} "
            f"{_pct_cell(s.branches)} {_pct_cell(s.functions)}"
        )
    print(RULE * 90)
    print(
        f"{'Total':<50} {_pct_cell(totals['statements'])} "
        f"{_pct_cell(totals['branches'])} {_pct_cell(totals['functions'])}"
    )
    statements = totals["statements"]
    print(
        f"\n📈 {len(stats)} TypeScript files, "
        f"{statements.covered}/{statements.total} statements covered\n"
    )


def generate_istanbul_report():
    configure_logging()
    source_dir = settings.ISTANBUL_COVERAGE_DIR
    if not source_dir.is_dir():
        print("No Istanbul coverage data found. Run tests with instrumented build first.")
        print("Make sure VITE_COVERAGE=true is set when building the UI.")
        return 1
    files = fragment_files(source_dir)
    if not files:
        print("No Istanbul coverage files found.")
        return 1

    print(f"📊 Processing {len(files)} Istanbul coverage file(s)...\n")
    merged = istanbul.merge_named_fragments(load_fragments(source_dir))
    if not merged:
        print("No valid coverage data found in files.")
        return 1

    stats = istanbul.file_stats(merged)
    totals = istanbul.totals(stats)
    print_istanbul_table(stats, totals)

    output_dir = settings.ISTANBUL_OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    with (output_dir / "coverage-final.json").open("w", encoding="utf-8") as f:
        json.dump(merged, f, indent=2)

    output = html.write_report(
        html.render_istanbul_report(stats, totals),
        output_dir / "html" / "index.html",
    )
    print(f"✅ Istanbul HTML report: {output}")
    return 0


def frontend_section():
    """Print the frontend part of the combined report; return its total or None."""
    rows, total = v8.rows_and_total(load_v8())
    if total.total == 0:
        print("🖥️  FRONTEND: No coverage data found\n")
        return None

    print("🖥️  FRONTEND (V8 Coverage)")
    print(RULE * 60)
    for url, counts in rows:
        print(f"{text_bar(counts.pct)} {counts.pct:5.1f}%  {url}")
    print(RULE * 60)
    print(f"Frontend Total: {total.pct:.1f}% of {total.total / 1024:.0f} KB\n")
    return total


def backend_section():
    """Print the backend part of the combined report; return its total or None."""
    exec_file = settings.BACKEND_COVERAGE_DIR / "jacoco.exec"
    if not exec_file.exists():
        print("☕ BACKEND: No coverage data found")
        print(f"   Expected: {exec_file}\n")
        return None

    print("☕ BACKEND (JaCoCo Coverage)")
    print(RULE * 60)
    xml_file = jacoco.generate_report(
        exec_file=exec_file,
        classes_dir=settings.API_CLASSES_DIR,
        sources_dir=settings.API_SOURCES_DIR,
        cli_jar=settings.JACOCO_CLI_LOCAL,
        output_dir=settings.BACKEND_COVERAGE_DIR,
    )
    if xml_file is None:
        print(f"⚠️  Could not generate JaCoCo report. Raw coverage data: {exec_file}\n")
        return None

    xml = xml_file.read_text(encoding="utf-8")
    for package, counts in jacoco.parse_package_lines(xml):
        print(f"{text_bar(counts.pct)} {counts.pct:5.1f}%  {package}")
    total = jacoco.parse_line_totals(xml)
    if total is None:
        print(f"⚠️  No line counters in {xml_file}\n")
        return None
    print(RULE * 60)
    print(f"Backend Total: {total.pct:.1f}% ({total.covered}/{total.total} lines)")
    print(f"HTML Report: {settings.BACKEND_COVERAGE_DIR / 'html' / 'index.html'}\n")
    return total


def report_coverage():
    configure_logging()
    print("\n" + DOUBLE_RULE * 60)
    print("  📊 E2E Coverage Report")
    print(DOUBLE_RULE * 60 + "\n")

    frontend = frontend_section()
    backend = backend_section()

    print(DOUBLE_RULE * 60)
    print("  COMBINED SUMMARY")
    print(DOUBLE_RULE * 60)

    def shown(total):
        return f"{total.pct:.1f}" if total and total.total > 0 else "N/A"

    print(f"\n  Frontend:  {shown(frontend):>6}%")
    print(f"  Backend:   {shown(backend):>6}%")
    if frontend and frontend.total > 0 and backend and backend.total > 0:
        # Simple mean; frontend bytes and backend lines are not comparable units
        combined = combined_percentage(frontend.pct, backend.pct)
        print("  ─────────────────")
        print(f"  Combined:  {combined:>6.1f}%")
    print("\n" + DOUBLE_RULE * 60 + "\n")

    if frontend is None and backend is None:
        return 1
    return 0


def run(command):
    sys.exit(command())


def frontend_main():
    run(generate_frontend_report)


def istanbul_main():
    run(generate_istanbul_report)


def report_main():
    run(report_coverage)


if __name__ == "__main__":
    report_main()
