import csv
from pathlib import Path
from typing import List, Tuple

from .models import MonthStat, ReportRow, Results
from .lookup import resolve_title
from .stats import decode_month_stat

REMINDER_CMD = "python -m drova_stats.main"
CSV_HEADER = ["Игра", "Количество сессий", "Продолжительность"]

MSECS_IN_SEC = 1000
SECS_IN_HOUR = 3600
SECS_IN_MINUTE = 60


def _trunc_div(a: int, b: int) -> int:
    # integer division rounding toward zero, not floor
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b > 0) else -q

def format_duration(msecs: int) -> str:
    """7265000 -> '2:1:5'. Truncating, no zero padding."""
    x = _trunc_div(msecs, MSECS_IN_SEC)
    hours = _trunc_div(x, SECS_IN_HOUR)
    minutes = _trunc_div(x - hours * SECS_IN_HOUR, SECS_IN_MINUTE)
    seconds = x - hours * SECS_IN_HOUR - minutes * SECS_IN_MINUTE
    return f"{hours}:{minutes}:{seconds}"


def build_rows(month: MonthStat, lookup_path, logger) -> Tuple[List[ReportRow], List[str]]:
    """One row per perGameStats entry, in payload order. Also returns ids with no title."""
    rows, unresolved = [], []
    for pid, st in month.per_game_stats.items():
        logger.info(f"ID: {pid}, SessionCount: {st.session_count}, TotalMsecs: {st.total_msecs}")
        title = resolve_title(pid, lookup_path, logger)
        if title == pid:
            unresolved.append(pid)
        rows.append(ReportRow(
            product_id=pid,
            title=title,
            session_count=st.session_count,
            duration=format_duration(st.total_msecs),
        ))
    return rows, unresolved


def write_csv(rows: List[ReportRow], f) -> None:
    w = csv.writer(f, lineterminator="\n")
    w.writerow(CSV_HEADER)
    for row in rows:
        w.writerow(row.cells())


def write_report(body: str, lookup_path, csv_path: Path, logger) -> Tuple[MonthStat, List[ReportRow], List[str]]:
    month = decode_month_stat(body, logger)
    rows, unresolved = build_rows(month, lookup_path, logger)
    with Path(csv_path).open("w", newline="", encoding="utf-8") as f:
        write_csv(rows, f)
    return month, rows, unresolved


def print_report(res: Results):
    print(f"\nExported {len(res.rows)} games → {res.out_path.resolve()}")

    m = res.month
    print(f"\nMonth total: {m.total_stat.session_count} sessions, {format_duration(m.total_stat.total_msecs)} played")
    if m.per_server_stats:
        print("Per server:")
        for sid, s in m.per_server_stats.items():
            print(f"  - {sid}: {s.total_stat.session_count} sessions, {format_duration(s.total_stat.total_msecs)}")

    if res.unresolved:
        print(f"\nNo title found for {len(res.unresolved)} id(s): {', '.join(res.unresolved)}")

    t = res.timings
    print("\n=== Timing summary ===")
    print(f"Catalog refresh:  {t.catalog:.2f}s")
    print(f"Statistics fetch: {t.stats:.2f}s")
    print(f"Report:           {t.report:.2f}s")
    print(f"Total runtime:    {t.total:.2f}s")

    print("\nTip: to run again:")
    print(f"  {REMINDER_CMD}\n")
