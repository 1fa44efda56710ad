"""
Offline console demo: drives the assignment desk against seeded data.

Uses the real calendar matcher, suggestion engine, lifecycle, and
assignment workflow over the in-memory store. No database, no network.

Usage:
    python console_demo.py
    python console_demo.py --scenario calendar
    python console_demo.py --scenario suggest
    python console_demo.py --scenario lifecycle
"""

import argparse
import asyncio
from datetime import date
from typing import Optional

from talent_dispatch.assignments.desk import AssignmentDesk
from talent_dispatch.config import settings
from talent_dispatch.repository.memory import InMemoryRepository, seed_demo_data
from talent_dispatch.scheduling.calendar import CalendarMatcher
from talent_dispatch.schemas.booking_schema import BookingFilter, WeekGrid
from talent_dispatch.schemas.outcome_schema import OperationOutcome

BLUE = "\033[94m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
RED = "\033[91m"
DIM = "\033[2m"
RESET = "\033[0m"
BOLD = "\033[1m"

ADMIN_ID = "admin-demo"


class ConsoleDesk:
    """Prints what the admin bookings screen would render."""

    def __init__(self, today: Optional[date] = None) -> None:
        self.today = today or date.today()
        self.repo = InMemoryRepository()
        seed_demo_data(self.repo, self.today)
        self.desk = AssignmentDesk(self.repo)

    def system_log(self, text: str) -> None:
        print(f"{DIM}  >> {text}{RESET}")

    def show_outcome(self, action: str, outcome: OperationOutcome) -> None:
        colour = GREEN if outcome.success else RED
        kind = f" [{outcome.error_kind.value}]" if outcome.error_kind else ""
        print(f"{BLUE}[{action}]{RESET} {colour}{outcome.message}{kind}{RESET}")

    def banner(self, title: str) -> None:
        print()
        print(f"{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  {settings.app_name.upper()} - {title}{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")
        print()

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #

    async def print_listing(self) -> None:
        await self.desk.refresh()
        snap = self.desk.snapshot
        c = snap.counts
        self.system_log(
            f"total={c.total} pending={c.pending} assigned={c.assigned} "
            f"completed={c.completed} cancelled={c.cancelled} unassigned={c.unassigned}"
        )
        for b in snap.bookings:
            talent = b.talent.full_name if b.talent else "-"
            print(
                f"  {b.id}  {b.booking_date.isoformat()} {b.booking_time:<9} "
                f"{b.service_type:<15} {b.customer_name:<18} "
                f"{YELLOW}{b.status.value:<9}{RESET} {talent}"
            )

    def print_grid(self, grid: WeekGrid) -> None:
        header = "".join(f"{d.strftime('%a %d'):<16}" for d in grid.days)
        print(f"{BOLD}{'':<7}{header}{RESET}")
        for label, row in zip(grid.slots, grid.cells):
            cells = "".join(
                f"{(c.booking.id if c.booking else '.'):<16}" for c in row
            )
            print(f"{label:<7}{cells}")
        for b in grid.hidden:
            self.system_log(
                f"hidden: {b.id} on {b.booking_date.isoformat()} at '{b.booking_time}'"
            )

    # ------------------------------------------------------------------ #
    # Scenarios
    # ------------------------------------------------------------------ #

    async def scenario_calendar(self) -> None:
        services = await self.repo.list_services()
        matcher = CalendarMatcher(services)
        bookings = [r.booking for r in await self.repo.list_bookings()]
        for service_id in ["svc-cleaning", "all"]:
            title = matcher.service_title(service_id) or "All Services"
            print(f"\n{BOLD}{title}{RESET}")
            self.print_grid(matcher.build_week_grid(self.today, service_id, bookings))

    async def scenario_suggest(self) -> None:
        for booking_id in ["bk-1001", "bk-1002", "bk-1003"]:
            outcome = await self.desk.suggest(booking_id)
            print(f"\n{BLUE}[suggest {booking_id}]{RESET} {outcome.message}")
            for t in outcome.talents:
                flag = "" if t.is_available else f" {DIM}(unavailable){RESET}"
                print(f"  {t.match_score:>3}  {t.bucket.value:<14} {t.full_name}{flag}")

    async def scenario_lifecycle(self) -> None:
        await self.print_listing()
        print()
        self.show_outcome("assign", await self.desk.assign("bk-1001", "tal-1", ADMIN_ID))
        self.show_outcome("assign rejected talent",
                          await self.desk.assign("bk-1002", "tal-4", ADMIN_ID))
        self.show_outcome("complete unassigned",
                          await self.desk.mark_completed("bk-1003", ADMIN_ID))
        self.show_outcome("complete", await self.desk.mark_completed("bk-1001", ADMIN_ID))
        self.show_outcome("assign completed",
                          await self.desk.assign("bk-1001", "tal-3", ADMIN_ID))
        self.show_outcome("cancel",
                          await self.desk.cancel("bk-1004", "Customer rescheduled", ADMIN_ID))
        self.show_outcome("stale write",
                          await self.desk.assign("bk-1002", "tal-2", ADMIN_ID, expected_version=7))
        print()
        await self.desk.refresh(BookingFilter(status="all", search="cruz"))
        self.system_log(
            "search 'cruz': " + ", ".join(b.id for b in self.desk.snapshot.bookings)
        )
        await self.print_listing()

    async def run(self, scenario: Optional[str]) -> None:
        scenarios = {
            "calendar": self.scenario_calendar,
            "suggest": self.scenario_suggest,
            "lifecycle": self.scenario_lifecycle,
        }
        chosen = [scenario] if scenario else list(scenarios)
        for name in chosen:
            self.banner(f"Scenario: {name}")
            await scenarios[name]()
        print(f"\n{BOLD}{'=' * 60}{RESET}")
        print(f"{BOLD}  Demo complete.{RESET}")
        print(f"{BOLD}{'=' * 60}{RESET}")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline assignment desk demo")
    parser.add_argument(
        "--scenario",
        choices=["calendar", "suggest", "lifecycle"],
        default=None,
        help="Run a single scenario instead of all of them",
    )
    parser.add_argument(
        "--today",
        type=date.fromisoformat,
        default=None,
        help="Anchor date for the seeded week (YYYY-MM-DD)",
    )
    args = parser.parse_args()
    asyncio.run(ConsoleDesk(args.today).run(args.scenario))


if __name__ == "__main__":
    main()
