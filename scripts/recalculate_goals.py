"""
scripts/recalculate_goals.py
────────────────────────────────────────────────────────────────────────
Refresh the cached goals on `user_profiles` from their stored biometrics
(e.g. after the calculator constants change).

Every profile:

    python -m scripts.recalculate_goals

One or more profiles:

    python -m scripts.recalculate_goals --user 123 --user 456
"""
from __future__ import annotations

import asyncio
import logging
from argparse import ArgumentParser

from dotenv import load_dotenv
load_dotenv()

from core.nutrition_calc import NutritionGoalCalculator
from services.db import dispose_engine, init_models, session_scope
from services.profiles import recalculate_all

_LOG = logging.getLogger(__name__)


async def _async_main(user_ids: list[int] | None) -> int:
    await init_models()
    try:
        async with session_scope() as db:
            return await recalculate_all(db, NutritionGoalCalculator(), user_ids)
    finally:
        await dispose_engine()


def main() -> None:
    ap = ArgumentParser()
    ap.add_argument("--user", type=int, action="append", help="update only this user-id")
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    count = asyncio.run(_async_main(args.user))
    print(f"✓ goals refreshed for {count} profile(s)")


if __name__ == "__main__":  # pragma: no cover
    main()
