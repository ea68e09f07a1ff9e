"""
Command line entry point for checking availability against the demo roster.

Usage:
    Single technician:  python main.py slots --technician 1 --date 2026-03-02 --service 52 60
    Group booking:      python main.py group --date 2026-03-02 --service 52:2 60 --group-size 2
"""

import argparse
import asyncio
import logging
import sys
from datetime import date

from salon_scheduling.config import settings
from salon_scheduling.schemas.booking_schema import GroupBookingPlan
from salon_scheduling.schemas.catalog_schema import RequestedService
from salon_scheduling.scheduling.planner import BookingPlanner
from salon_scheduling.tools.services import CATEGORY_NAMES, get_service, seed_store
from salon_scheduling.utils import format_hhmm

logger = logging.getLogger(__name__)


def _parse_service_spec(spec: str) -> RequestedService:
    """Parse ``ID`` or ``ID:QTY`` into a RequestedService."""
    raw_id, _, raw_qty = spec.partition(":")
    service = get_service(int(raw_id))
    if service is None:
        raise ValueError(f"Unknown service id: {raw_id}")
    return RequestedService(service=service, quantity=int(raw_qty) if raw_qty else 1)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=f"Check appointment availability at {settings.business.name}."
    )
    sub = parser.add_subparsers(dest="command", required=True)

    slots = sub.add_parser("slots", help="Open start times for one technician.")
    slots.add_argument("--technician", type=int, required=True, help="Technician id.")
    slots.add_argument("--date", type=date.fromisoformat, required=True, help="YYYY-MM-DD.")
    slots.add_argument("--service", nargs="+", required=True, help="Service ids.")

    group = sub.add_parser("group", help="Plan a group booking.")
    group.add_argument("--date", type=date.fromisoformat, required=True, help="YYYY-MM-DD.")
    group.add_argument("--service", nargs="+", required=True, help="Service ids as ID or ID:QTY.")
    group.add_argument("--group-size", type=int, default=1, help="Number of guests.")
    return parser


async def _run_slots(planner: BookingPlanner, args: argparse.Namespace) -> int:
    technician = planner.store.get_technician(args.technician)
    if technician is None:
        logger.error("Technician not found: %s", args.technician)
        return 1
    services = [_parse_service_spec(s).service for s in args.service]
    slots = await planner.compute_slots_for_single_technician(technician, services, args.date)
    if not slots:
        print(f"No slots available for {technician.name} on {args.date}.")
        return 0
    print(f"{technician.name} on {args.date}: " + ", ".join(format_hhmm(s) for s in slots))
    return 0


async def _run_group(planner: BookingPlanner, args: argparse.Namespace) -> int:
    requested = [_parse_service_spec(s) for s in args.service]
    plan = await planner.compute_group_booking(requested, args.group_size, args.date)
    if not plan.is_feasible():
        print(f"No common slot for the group on {args.date}.")
        return 0
    _print_plan(plan)
    return 0


def _print_plan(plan: GroupBookingPlan) -> None:
    for index, (lane, form) in enumerate(zip(plan.lanes, plan.to_forms()), start=1):
        names = ", ".join(s.name for s in form.services)
        categories = ", ".join(CATEGORY_NAMES.get(c, str(c)) for c in lane.category_ids)
        print(f"Guest {index} ({categories}): {form.technician_name} at {form.time} - {names}")
    later = plan.common_slots[1:]
    if later:
        print("Other start times: " + ", ".join(format_hhmm(s) for s in later))


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)
    planner = BookingPlanner(seed_store())
    runner = _run_slots if args.command == "slots" else _run_group
    try:
        return asyncio.run(runner(planner, args))
    except ValueError as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
