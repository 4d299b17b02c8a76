from __future__ import annotations

import argparse
import json
import os
import sys
from datetime import date

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute the analytics snapshot and print it as JSON.")
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    parser.add_argument("--from", dest="date_from", type=date.fromisoformat, help="Window start (YYYY-MM-DD).")
    parser.add_argument("--to", dest="date_to", type=date.fromisoformat, help="Window end (YYYY-MM-DD).")
    parser.add_argument("--window", default=None, help="Trailing window such as 30d or 6m.")
    parser.add_argument("--top", type=int, default=None, help="Number of top places.")
    parser.add_argument("--recent", type=int, default=None, help="Number of recent activity entries.")
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print all-time dashboard stats instead of the windowed snapshot.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    from src.api.dependencies import get_analytics_service
    from src.core.logging import configure_logging
    from src.schemas.analytics import DateRange
    from src.shared.time import parse_date_bounds, parse_time_window

    configure_logging(os.environ.get("LOG_LEVEL", "WARNING"))
    service = get_analytics_service()
    if args.stats:
        result = service.get_dashboard_stats()
    else:
        requested = parse_date_bounds(args.date_from, args.date_to)
        if requested is None and args.window:
            start, end = parse_time_window(args.window)
            requested = DateRange(start=start, end=end)
        result = service.get_snapshot(requested=requested, top_limit=args.top, recent_limit=args.recent)
    print(json.dumps(result.model_dump(by_alias=True, mode="json"), indent=2))


if __name__ == "__main__":
    main()
