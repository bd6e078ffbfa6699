from __future__ import annotations

import argparse
import logging

from services.api.app.db.database import session_scope
from services.api.app.db.init_db import init_db
from services.api.app.db.models import IndexedTransaction
from services.api.app.services.transaction_db import index_transaction
from services.api.app.services.transaction_fixtures import fixture_transactions

logger = logging.getLogger("seed_data")


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed the local transaction index")
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Overwrite records that are already indexed",
    )
    parser.add_argument("--only", action="append", default=[], help="Seed only this tx id")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")

    init_db()

    records = fixture_transactions()
    if args.only:
        records = [r for r in records if r.tx_id in set(args.only)]

    seeded = 0
    with session_scope() as db:
        for record in records:
            if not args.replace and db.get(IndexedTransaction, record.tx_id) is not None:
                logger.info("Skipping %s (already indexed)", record.tx_id)
                continue
            index_transaction(db, record)
            seeded += 1

    print(f"Seeded {seeded} transaction(s)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
