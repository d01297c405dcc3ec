#!/usr/bin/env python3
"""
Unified CLI for motorbike maintenance tracking.

Commands:
  init       - Create an account seeded with the standard schedule
  status     - Show item health grouped by Critical / Warning / Good
  history    - View service history (newest first)
  items      - List maintenance items and their intervals
  log        - Mark an item as serviced at the current odometer
  update-odo - Update the current odometer reading
  advice     - Ask the maintenance advisor for priorities
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from tabulate import tabulate
from typing import List, Optional, Tuple

from motocare import (
    AdvisoryClient,
    HealthStatus,
    InvalidInputError,
    MaintenanceCategory,
    MaintenanceItem,
    NotFoundError,
    ServiceLog,
    Status,
    Tracker,
    YamlStore,
    due_date,
    due_odo,
    get_item,
    list_items,
    parse_odometer,
)
from motocare.config import get_settings
from motocare.registry import DEFAULT_MODEL_NAME, new_state
from motocare.tracker import utcnow

# =============================================================================
# Formatting helpers
# =============================================================================


def format_km(km: Optional[float]) -> str:
    """Format a distance for display."""
    return f"{km:,.0f}" if km is not None else "-"


def format_timestamp(value: Optional[datetime]) -> str:
    """Format a timestamp as a date for display."""
    return value.date().isoformat() if value is not None else "-"


def format_percentage(health: HealthStatus) -> str:
    return f"{health.percentage:.0f}%"


def format_remaining(health: HealthStatus) -> str:
    """Format remaining quantity with its unit (e.g. '500 km', '-1 mo')."""
    if health.basis is None:
        return "-"
    if health.basis == "km":
        return f"{health.remaining:,.0f} km"
    return f"{health.remaining:g} mo"


def format_interval(item: MaintenanceItem) -> str:
    """Format an item's intervals (e.g. '12,000 km / 24 mo')."""
    interval = []
    if item.interval_km is not None:
        interval.append(f"{item.interval_km:,.0f} km")
    if item.interval_months is not None:
        interval.append(f"{item.interval_months:g} mo")
    return " / ".join(interval) if interval else "-"


def format_due(item: MaintenanceItem) -> str:
    """Where the tracked interval runs out: odometer, otherwise date."""
    if item.interval_km is not None:
        return f"{format_km(due_odo(item))} km"
    if item.interval_months is not None:
        return format_timestamp(due_date(item))
    return "-"


def truncate(text: Optional[str], max_len: int = 30) -> str:
    """Truncate text with ellipsis if too long."""
    if text is None:
        return "-"
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."


# =============================================================================
# Table builders
# =============================================================================


def make_status_table(
    pairs: List[Tuple[MaintenanceItem, HealthStatus]],
) -> List[List[str]]:
    """Convert (item, health) pairs to table rows."""
    rows = []
    for item, health in pairs:
        last_done = (
            f"{format_timestamp(item.last_service_date)} @ "
            f"{format_km(item.last_service_odo)}"
        )
        rows.append(
            [
                item.display_name,
                item.category.value,
                last_done,
                format_due(item),
                format_remaining(health),
                format_percentage(health),
            ]
        )
    return rows


def make_history_table(entries: List[ServiceLog]) -> List[List[str]]:
    """Convert service logs to table rows."""
    return [
        [
            format_timestamp(entry.date),
            format_km(entry.odo_at_service),
            entry.item_name,
            truncate(entry.notes),
        ]
        for entry in entries
    ]


def make_items_table(items: List[MaintenanceItem]) -> List[List[str]]:
    rows = []
    for item in items:
        count = str(item.service_count) if item.tracks_service_count else "-"
        rows.append(
            [item.id, item.display_name, item.category.value, format_interval(item), count]
        )
    return rows


# =============================================================================
# Commands
# =============================================================================


def open_tracker(args) -> Optional[Tracker]:
    """Open an existing account, or report that it is missing."""
    store = YamlStore(args.data_dir)
    if not store.exists(args.account):
        print(f"Error: No account '{args.account}' in {args.data_dir}")
        print(f"Create it with: moto.py {args.account} init")
        return None
    return Tracker(store, args.account)


def print_header(tracker: Tracker) -> None:
    state = tracker.state
    print(f"Motorbike: {state.model_name}")
    print(f"Current odometer: {format_km(state.current_odo)} km")


def cmd_init(args):
    """Create a new account seeded with the standard schedule."""
    store = YamlStore(args.data_dir)
    if store.exists(args.account):
        print(f"Error: Account '{args.account}' already exists")
        return 1
    state = new_state(utcnow(), args.model, args.odo)
    if not store.save(args.account, state):
        print(f"Error: Could not write account '{args.account}'")
        return 1
    print(f"Created account '{args.account}' ({state.model_name})")
    print(f"Items: {len(state.maintenance_items)}")
    return 0


def cmd_status(args):
    """Show item health grouped by status."""
    tracker = open_tracker(args)
    if tracker is None:
        return 1

    pairs = tracker.health(whichever_first=args.whichever_first)

    print_header(tracker)
    if args.whichever_first:
        print("Mode: WHICHEVER FIRST (worse of distance and time)")
    print(f"Items: {len(pairs)}")
    print()

    critical = [(i, h) for i, h in pairs if h.status == Status.CRITICAL]
    warning = [(i, h) for i, h in pairs if h.status == Status.WARNING]
    good = [(i, h) for i, h in pairs if h.status == Status.GOOD]

    if critical or warning:
        print(
            f"Attention required: {len(critical)} critical and "
            f"{len(warning)} items needing review soon."
        )
        print()

    headers = ["Item", "Category", "Last Done", "Due", "Remaining", "Health"]

    for title, group in (("CRITICAL:", critical), ("WARNING:", warning), ("GOOD:", good)):
        if not group:
            continue
        group.sort(key=lambda pair: (pair[1].percentage, pair[0].name))
        print(title)
        print(tabulate(make_status_table(group), headers=headers, tablefmt="simple"))
        print()

    return 0


def cmd_history(args):
    """View service history."""
    tracker = open_tracker(args)
    if tracker is None:
        return 1

    entries = list(tracker.state.history)
    if args.item:
        needle = args.item.lower()
        entries = [
            e for e in entries
            if needle in e.item_id.lower() or needle in e.item_name.lower()
        ]
    if args.limit:
        entries = entries[: args.limit]

    last_svc = tracker.state.last_service

    print_header(tracker)
    if last_svc:
        print(
            f"Last service: {last_svc.item_name} on {format_timestamp(last_svc.date)} "
            f"@ {format_km(last_svc.odo_at_service)} km"
        )
    print(f"Total services: {len(tracker.state.history)}")
    if args.item or args.limit:
        print(f"Showing: {len(entries)} (filtered)")
    print()

    if not entries:
        print("No records yet.")
        return 0

    headers = ["Date", "Odometer", "Item", "Notes"]
    print(tabulate(make_history_table(entries), headers=headers, tablefmt="simple"))
    return 0


def cmd_items(args):
    """List maintenance items."""
    tracker = open_tracker(args)
    if tracker is None:
        return 1

    category = None
    if args.category:
        try:
            category = MaintenanceCategory[args.category.upper().replace(" ", "_")]
        except KeyError:
            names = ", ".join(c.name.lower() for c in MaintenanceCategory)
            print(f"Error: Unknown category '{args.category}' (choose from {names})")
            return 1

    items = list_items(tracker.state, category)
    print_header(tracker)
    print(f"Items: {len(items)}")
    print()

    headers = ["Id", "Item", "Category", "Interval", "Count"]
    print(tabulate(make_items_table(items), headers=headers, tablefmt="simple"))
    return 0


def cmd_log(args):
    """Mark an item as serviced at the current odometer."""
    tracker = open_tracker(args)
    if tracker is None:
        return 1

    try:
        item = get_item(tracker.state, args.item_id)
    except NotFoundError as e:
        print(f"Error: {e}")
        print("\nAvailable items:")
        for i in tracker.state.maintenance_items:
            print(f"  {i.id:<18} {i.display_name}")
        return 1

    print(f"Recording service for {args.account}:")
    print(f"  Item:     {item.display_name}")
    print(f"  Odometer: {format_km(tracker.state.current_odo)} km")
    if args.notes:
        print(f"  Notes:    {args.notes}")
    print()

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    tracker.record_service(item.id, notes=args.notes)
    serviced = get_item(tracker.state, item.id)
    if serviced.tracks_service_count:
        print(f"Service count: {serviced.service_count}")
    print("Service recorded.")
    return 0


def cmd_update_odo(args):
    """Update the current odometer reading."""
    tracker = open_tracker(args)
    if tracker is None:
        return 1

    try:
        new_odo = parse_odometer(args.odometer)
    except InvalidInputError as e:
        print(f"Error: {e}")
        return 1

    old_odo = tracker.state.current_odo
    print(f"Motorbike: {tracker.state.model_name}")
    print(f"Current odometer: {format_km(old_odo)} km")
    print(f"New odometer:     {format_km(new_odo)} km")
    print()

    if new_odo < old_odo:
        print("Odometer not updated (reading is lower than the current one).")
        return 0

    if args.dry_run:
        print("(dry run - no changes made)")
        return 0

    tracker.update_odometer(new_odo)
    print("Odometer updated.")
    return 0


def cmd_advice(args):
    """Print maintenance advice."""
    tracker = open_tracker(args)
    if tracker is None:
        return 1

    print_header(tracker)
    print()
    print(AdvisoryClient().summarize(tracker.state, tracker.clock()))
    return 0


# =============================================================================
# Main
# =============================================================================


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Motorbike maintenance tracker",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s rider1 init --model "Click 125i"
  %(prog)s rider1 update-odo 12500
  %(prog)s rider1 status
  %(prog)s rider1 log engine-oil --notes "10W-40 semi-synthetic"
  %(prog)s rider1 history --item oil
  %(prog)s rider1 items --category brakes
  %(prog)s rider1 advice
""",
    )
    parser.add_argument("account", help="Account id (name of the stored document)")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=get_settings().data_dir,
        help="Directory holding account documents (default: $MOTOCARE_DATA_DIR or ./garage)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init_parser = subparsers.add_parser("init", help="Create a new account")
    init_parser.add_argument(
        "--model", default=DEFAULT_MODEL_NAME, help="Motorbike model name"
    )
    init_parser.add_argument(
        "--odo", type=int, default=0, help="Starting odometer reading"
    )

    status_parser = subparsers.add_parser("status", help="Show item health")
    status_parser.add_argument(
        "--whichever-first",
        action="store_true",
        help="Use the worse of distance and time when an item has both",
    )

    history_parser = subparsers.add_parser("history", help="View service history")
    history_parser.add_argument(
        "--item", type=str, help="Filter to items containing text (e.g., 'oil')"
    )
    history_parser.add_argument(
        "--limit", type=int, help="Show at most this many entries"
    )

    items_parser = subparsers.add_parser("items", help="List maintenance items")
    items_parser.add_argument(
        "--category", type=str, help="Only this category (e.g., 'brakes', 'oil_lube')"
    )

    log_parser = subparsers.add_parser("log", help="Record a completed service")
    log_parser.add_argument("item_id", help="Item id (e.g., 'engine-oil')")
    log_parser.add_argument("--notes", type=str, help="Notes about the service")
    log_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be recorded without saving",
    )

    odo_parser = subparsers.add_parser("update-odo", help="Update the odometer")
    odo_parser.add_argument("odometer", help="Current odometer reading in km")
    odo_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show what would be updated without saving",
    )

    subparsers.add_parser("advice", help="Get maintenance advice")

    return parser


COMMANDS = {
    "init": cmd_init,
    "status": cmd_status,
    "history": cmd_history,
    "items": cmd_items,
    "log": cmd_log,
    "update-odo": cmd_update_odo,
    "advice": cmd_advice,
}


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return COMMANDS[args.command](args)
    except InvalidInputError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main() or 0)
