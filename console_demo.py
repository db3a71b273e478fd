"""
Offline console demo: walks through availability searches and bookings
against the sample catalog, with no persistence and no network.

Usage:
    python console_demo.py
    python console_demo.py --scenario spillover
    python console_demo.py --scenario drying
"""

import argparse
from datetime import datetime, timedelta
from typing import Optional

from detailing_scheduler.booking import AppointmentBook
from detailing_scheduler.catalog import compatible_services, get_all_services
from detailing_scheduler.config import AppConfig, load_config
from detailing_scheduler.errors import SchedulingConflictError
from detailing_scheduler.logging_context import set_query_id
from detailing_scheduler.schemas import AvailabilitySlot, VehicleSize
from detailing_scheduler.scheduling import (
    calculate_service_duration,
    calculate_total_price,
    calculate_work_end_time,
    find_available_slots,
)
from detailing_scheduler.utils import format_duration

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"


def next_monday(now: Optional[datetime] = None) -> datetime:
    """08:00 on the Monday after ``now``."""
    now = now or datetime.now()
    days_ahead = 7 - now.weekday()
    return (now + timedelta(days=days_ahead)).replace(hour=8, minute=0, second=0, microsecond=0)


class ConsoleSession:
    """Drives the scheduling engine from the terminal."""

    SCENARIOS: dict[str, tuple[list[str], str]] = {
        "week": (["1", "4"], "medium"),
        "drying": (["3"], "large"),
        "spillover": (["1", "2", "3", "4"], "large"),
    }

    def __init__(self, config: Optional[AppConfig] = None, now: Optional[datetime] = None) -> None:
        self.config = config or AppConfig()
        self.settings = self.config.business_settings()
        self.now = now or next_monday()
        self.book = AppointmentBook(self.settings)
        self.services = get_all_services()

    def say(self, text: str) -> None:
        print(f"{GREEN}{text}{RESET}")

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {title}{RESET}")
        print(f"{BOLD}  Shop: {self.config.shop_name}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")

    def search(self, service_ids: list[str], size: str) -> list[AvailabilitySlot]:
        """Print the duration summary and the first open slots for a selection."""
        query_id = set_query_id()
        duration = calculate_service_duration(service_ids, size, self.services)
        price = calculate_total_price(service_ids, size, self.services)

        self.system_log(f"Query {query_id}: services={service_ids} size={size}")
        self.say(
            f"Work {format_duration(duration.work_duration)}, "
            f"drying {format_duration(duration.drying_duration)}, "
            f"total {format_duration(duration.total_duration)}, price {price}"
        )
        if duration.work_duration == 0:
            print(f"{YELLOW}None of the selected services are offered for this size.{RESET}")
            return []

        slots = find_available_slots(
            self.now.date(),
            self.now.date() + timedelta(days=self.config.booking.search_window_days),
            duration.work_duration,
            duration.drying_duration,
            self.book.snapshot(),
            self.settings,
            now=self.now,
        )
        if not slots:
            print(f"{YELLOW}No availability in the next "
                  f"{self.config.booking.search_window_days} days.{RESET}")
            return []

        for slot in slots[: self.config.booking.max_slots_shown]:
            spill = f" (+{(slot.work_end.date() - slot.date).days}d)" if slot.spills_over else ""
            ready = slot.service_complete.strftime("%a %d/%m %H:%M")
            print(f"  {BLUE}{slot.date:%a %d/%m}{RESET} {slot.start_time} - "
                  f"{slot.end_time}{spill}  ready {ready}")
        return slots

    def book_first(self, service_ids: list[str], size: str, slots: list[AvailabilitySlot]) -> None:
        if not slots:
            return
        slot = slots[0]
        start = datetime.combine(slot.date, datetime.strptime(slot.start_time, "%H:%M").time())
        try:
            appt = self.book.book_services(start, service_ids, size, self.services)
        except SchedulingConflictError as exc:
            print(f"{RED}{exc}: {'; '.join(exc.conflicts)}{RESET}")
            return
        self.say(f"Booked {appt.id}: {appt.start_datetime:%a %H:%M} -> "
                 f"{appt.final_end:%a %H:%M}, {appt.total_price}")

    def run_scenario(self, scenario: str) -> None:
        """Auto-play a pre-scripted scenario: search, book the first slot, search again."""
        if scenario not in self.SCENARIOS:
            print(f"{RED}Unknown scenario: {scenario}{RESET}")
            return
        service_ids, size = self.SCENARIOS[scenario]
        self.banner(f"DETAILING SCHEDULER - Scenario: {scenario}")

        if scenario == "spillover":
            start = self.now.replace(hour=17)
            work = calculate_service_duration(service_ids, size, self.services).work_duration
            end = calculate_work_end_time(
                start, work, self.settings,
                trace=lambda event, fields: self.system_log(f"{event}: {fields}"),
            )
            self.say(f"{format_duration(work)} of work from {start:%a %H:%M} ends {end:%a %H:%M}")

        slots = self.search(service_ids, size)
        self.book_first(service_ids, size, slots)
        self.system_log("Searching again with the new booking in place")
        self.search(service_ids, size)

    def run(self) -> None:
        self.banner("DETAILING SCHEDULER - Console Demo")
        for service in self.services:
            print(f"  {service.id}. {service.name}")
        print(f"{DIM}  Sizes: {', '.join(s.value for s in VehicleSize)}. "
              f"Type 'quit' to exit.{RESET}")

        while True:
            size = input(f"\n{BLUE}Vehicle size: {RESET}").strip().lower()
            if size in ("quit", "exit", "q"):
                print(f"\n{DIM}Session ended.{RESET}")
                return
            if size not in [s.value for s in VehicleSize]:
                print(f"{RED}Unknown size {size!r}{RESET}")
                continue
            offered = ", ".join(f"{s.id}={s.name}" for s in compatible_services(size))
            raw = input(f"{BLUE}Services ({offered}): {RESET}")
            service_ids = [part.strip() for part in raw.split(",") if part.strip()]
            slots = self.search(service_ids, size)
            if slots and input(f"{BLUE}Book the first slot? [y/N] {RESET}").lower().startswith("y"):
                self.book_first(service_ids, size, slots)


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline console demo")
    parser.add_argument(
        "--scenario",
        choices=sorted(ConsoleSession.SCENARIOS),
        default=None,
        help="Auto-play a pre-scripted scenario instead of interactive mode",
    )
    args = parser.parse_args()

    session = ConsoleSession(load_config())
    if args.scenario:
        session.run_scenario(args.scenario)
    else:
        session.run()


if __name__ == "__main__":
    main()
