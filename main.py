"""
Command line entry point for the scheduling engine.

Usage:
    Open slots:    python main.py slots --services 1,3 --size medium
    Check a start: python main.py check --start 2026-10-19T10:00 --work 90 --drying 120
    Day grid:      python main.py day --date 2026-10-19 --work 60
    Console demo:  python main.py console [--scenario drying]
"""

import argparse
import logging
import sys
from datetime import date, datetime, timedelta
from typing import Optional

from detailing_scheduler.catalog import get_all_services
from detailing_scheduler.config import AppConfig, load_config
from detailing_scheduler.logging_context import set_query_id
from detailing_scheduler.schemas import VehicleSize
from detailing_scheduler.scheduling import (
    calculate_service_duration,
    calculate_time_slots,
    can_schedule_service,
    find_available_slots,
)
from detailing_scheduler.utils import format_duration

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Detailing shop availability and scheduling",
        epilog="Commands check against an empty calendar; existing bookings are not loaded.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    slots = sub.add_parser(
        "slots", help="List open start times for a service selection (empty calendar)"
    )
    slots.add_argument("--services", required=True, help="Comma separated service ids")
    slots.add_argument(
        "--size", required=True, choices=[s.value for s in VehicleSize], help="Vehicle size"
    )
    slots.add_argument("--from", dest="from_date", type=date.fromisoformat, default=None)
    slots.add_argument("--days", type=int, default=None, help="Search window in days")
    slots.add_argument("--limit", type=int, default=None, help="Maximum slots to print")

    check = sub.add_parser(
        "check", help="Check a single start time against working hours (empty calendar)"
    )
    check.add_argument("--start", required=True, type=datetime.fromisoformat)
    check.add_argument("--work", required=True, type=int, help="Work minutes")
    check.add_argument("--drying", type=int, default=0, help="Drying minutes")

    day = sub.add_parser("day", help="Show a day's slot grid (empty calendar)")
    day.add_argument("--date", required=True, type=date.fromisoformat)
    day.add_argument("--work", required=True, type=int, help="Work minutes")
    day.add_argument("--drying", type=int, default=0, help="Drying minutes")

    console = sub.add_parser("console", help="Run the offline console demo")
    console.add_argument("--scenario", default=None)
    return parser


def _run_slots(args: argparse.Namespace, config: AppConfig) -> int:
    settings = config.business_settings()
    service_ids = [part.strip() for part in args.services.split(",") if part.strip()]
    duration = calculate_service_duration(service_ids, args.size, get_all_services())
    start = args.from_date or date.today()
    window = config.booking.search_window_days if args.days is None else args.days
    limit = args.limit or config.booking.max_slots_shown

    slots = find_available_slots(
        start, start + timedelta(days=window),
        duration.work_duration, duration.drying_duration, [], settings,
    )
    print(f"Work {format_duration(duration.work_duration)}, "
          f"drying {format_duration(duration.drying_duration)}")
    if not slots:
        print("No slots available.")
        return 0
    for slot in slots[:limit]:
        print(f"{slot.date} {slot.start_time} -> {slot.work_end:%Y-%m-%d %H:%M} "
              f"(ready {slot.service_complete:%Y-%m-%d %H:%M})")
    return 0


def _run_check(args: argparse.Namespace, config: AppConfig) -> int:
    result = can_schedule_service(
        args.start, args.work, args.drying, [], config.business_settings()
    )
    print(f"Work ends {result.work_end_time:%Y-%m-%d %H:%M}, "
          f"complete {result.service_complete_time:%Y-%m-%d %H:%M}")
    for reason in result.conflicts:
        print(f"  - {reason}")
    return 0 if result.can_schedule else 1


def _run_day(args: argparse.Namespace, config: AppConfig) -> int:
    grid = calculate_time_slots(args.date, [], args.work, args.drying, config.business_settings())
    if not grid:
        print(f"{args.date} is not a working day.")
    for slot in grid:
        mark = "open" if slot.available else f"busy: {slot.reason}"
        print(f"{slot.start} -> {slot.end}  {mark}")
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = load_config()
    query_id = set_query_id()
    logger.debug("Running %s (query %s)", args.command, query_id)

    if args.command == "console":
        from console_demo import ConsoleSession

        session = ConsoleSession(config)
        if args.scenario:
            session.run_scenario(args.scenario)
        else:
            session.run()
        return 0

    handlers = {"slots": _run_slots, "check": _run_check, "day": _run_day}
    return handlers[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
