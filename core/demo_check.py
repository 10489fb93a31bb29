# core/demo_check.py

import sys

from core.config import load_settings
from core.database import Database
from core.errors import StoreUnavailableError
from core.key_value_store import SqliteKeyValueStore
from core.services.rating_service import RatingService
from core.services.time_range_service import TimeRangeService
from policy.actions import HardWarn, SoftWarn
from policy.risk_gate import RiskGate
from policy.time_window_policy import TimeWindowPolicy


def main():
    settings = load_settings()

    try:
        store = SqliteKeyValueStore(Database(settings.db_path))
    except StoreUnavailableError as e:
        print(f"Store unavailable: {e}")
        store = None

    time_ranges = TimeRangeService(store)
    ratings = RatingService(store)
    gate = RiskGate(
        ratings,
        time_ranges,
        TimeWindowPolicy(day_filtering=settings.day_filtering),
        cooldown_seconds=settings.cooldown_seconds,
    )

    print("=== Send Check ===")
    if len(sys.argv) > 1:
        contact_id = sys.argv[1].strip()
    else:
        contact_id = input("Contact number: ").strip()

    print("\nActive ranges:")
    ranges = time_ranges.load()
    if not ranges:
        print("  (none)")
    for r in ranges:
        print(f"  {r.name or '-'}: {r.label()} [{r.repeat_description()}]")

    rating = ratings.get_rating(contact_id)
    print(f"\nRating: {rating.name if rating is not None else 'not rated'}")

    action = gate.evaluate(contact_id)
    print(f"Verdict: {action.kind.value}")
    if isinstance(action, HardWarn):
        print(f"Cooldown: {action.cooldown_seconds}s")
    if isinstance(action, (SoftWarn, HardWarn)):
        print(action.message)


if __name__ == "__main__":
    main()
