from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from ccs_quality import load_config, AppConfig, ProjectConfig
from ccs_quality.ingestion import build_daily_records, read_sheet_rows, validate_records
from ccs_quality.models import SAMPLING_MODES, DailyRecord, filter_month
from ccs_quality.reporting import (
    PeriodRange,
    build_month_report,
    build_period_report,
    calculate_total_impact,
    report_to_frame,
)
from ccs_quality.storage import RecordStore, records_from_json, records_to_json
from ccs_quality.summary import build_analysis_prompt


def parse_year_month(value: str) -> tuple[int, int]:
    """Parse ``YYYY-MM`` or ``YYYY/MM``."""
    parts = value.replace("/", "-").split("-")
    if len(parts) != 2:
        raise ValueError(f"Expected YYYY-MM, got {value!r}")
    year, month = int(parts[0]), int(parts[1])
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range in {value!r}")
    return year, month


def _load_project(args: argparse.Namespace) -> ProjectConfig:
    return load_config(args.config) if args.config else ProjectConfig()


def _load_records(args: argparse.Namespace, cfg: ProjectConfig) -> list[DailyRecord]:
    if args.records:
        return records_from_json(json.loads(Path(args.records).read_text(encoding="utf-8")))
    return RecordStore.from_config(cfg.storage).load()


def _cmd_import(args: argparse.Namespace) -> int:
    cfg = _load_project(args)
    q_map, t_map = cfg.imports.quality, cfg.imports.tonnage

    quality_rows = read_sheet_rows(args.workbook, q_map.sheet_name) if q_map.sheet_name else []
    tonnage_rows = read_sheet_rows(args.workbook, t_map.sheet_name) if t_map.sheet_name else []

    result = build_daily_records(
        quality_rows,
        tonnage_rows,
        q_map,
        t_map,
        two_digit_year_offset=cfg.two_digit_year_offset,
    )
    print(validate_records(result.records))

    if args.out:
        out = Path(args.out)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(json.dumps(records_to_json(result.records), ensure_ascii=False, indent=2), encoding="utf-8")
        print(f"records -> {out}")
    else:
        synced = RecordStore.from_config(cfg.storage).save(result.records)
        print(f"saved {len(result.records)} records ({'synced' if synced else 'local cache only'})")
    return 0


def _cmd_month(args: argparse.Namespace) -> int:
    cfg = _load_project(args)
    overrides = {k: v for k, v in (("year", args.year), ("month", args.month)) if v is not None}
    app = AppConfig.model_validate({**cfg.app.model_dump(), **overrides})
    mode = args.mode or cfg.sampling_mode
    records = _load_records(args, cfg)

    month = build_month_report(records, app.year, app.month, app, cfg.profiles, mode)
    print(f"{month.month_name} {month.year} ({mode})")
    for w in month.weeks:
        s = w.stats
        print(
            f"  {w.name:<8} samples={s.total_count:<4} "
            f"fixed={s.fixed.pct:6.2f}% {s.fixed.impact:+10.1f} [{s.fixed.label}]  "
            f"custom={s.custom.pct:6.2f}% {s.custom.impact:+10.1f} [{s.custom.label}]"
        )

    totals = calculate_total_impact(filter_month(records, app.year, app.month), app, cfg.profiles, mode)
    print(f"  total: fixed={totals.fixed:+.1f} custom={totals.custom:+.1f} tonnage={totals.tonnage:.1f}")
    return 0


def _cmd_report(args: argparse.Namespace) -> int:
    cfg = _load_project(args)
    mode = args.mode or cfg.sampling_mode
    start_year, start_month = parse_year_month(args.start)
    end_year, end_month = parse_year_month(args.end)
    period = PeriodRange(start_year, start_month, end_year, end_month)

    report = build_period_report(_load_records(args, cfg), period, cfg.app, cfg.profiles, mode)
    if not report.months:
        print("No data for this period.")
        return 0

    df = report_to_frame(report)
    if args.csv:
        df.to_csv(args.csv, index=False)
        print(f"report -> {args.csv}")
    else:
        print(df.to_string(index=False))

    s = report.summary
    print(f"period total: fixed={s.fixed:+.1f} custom={s.custom:+.1f} tonnage={s.tonnage:.1f}")
    return 0


def _cmd_prompt(args: argparse.Namespace) -> int:
    cfg = _load_project(args)
    records = filter_month(_load_records(args, cfg), cfg.app.year, cfg.app.month)
    print(build_analysis_prompt(records, cfg.app))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="ccs")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    def common(p: argparse.ArgumentParser) -> None:
        p.add_argument("--config", help="Path to YAML config")
        p.add_argument("--records", help="Read records from a JSON file instead of storage")

    p_imp = sub.add_parser("import", help="Import quality and tonnage sheets from a workbook")
    p_imp.add_argument("--config", required=True, help="Path to YAML config")
    p_imp.add_argument("--workbook", required=True, help="Path to .xlsx workbook")
    p_imp.add_argument("--out", help="Write records JSON here instead of saving to storage")
    p_imp.set_defaults(func=_cmd_import)

    p_month = sub.add_parser("month", help="Week-by-week impact for one month")
    common(p_month)
    p_month.add_argument("--year", type=int)
    p_month.add_argument("--month", type=int, choices=range(1, 13), metavar="1-12")
    p_month.add_argument("--mode", choices=SAMPLING_MODES)
    p_month.set_defaults(func=_cmd_month)

    p_rep = sub.add_parser("report", help="Month-by-month report over a period")
    common(p_rep)
    p_rep.add_argument("--start", required=True, help="YYYY-MM")
    p_rep.add_argument("--end", required=True, help="YYYY-MM")
    p_rep.add_argument("--mode", choices=SAMPLING_MODES)
    p_rep.add_argument("--csv", help="Write the report table to CSV")
    p_rep.set_defaults(func=_cmd_report)

    p_prompt = sub.add_parser("prompt", help="Print the summary prompt for the configured month")
    common(p_prompt)
    p_prompt.set_defaults(func=_cmd_prompt)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    return int(args.func(args))


if __name__ == "__main__":
    raise SystemExit(main())
