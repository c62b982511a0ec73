"""ShopStream Ordering management CLI.

Creates and drops the database schema of the ordering domain and loads
shipping rates from a CSV file (``postal_code,charge[,description]``).

Usage:
    python src/manage.py setup-db
    python src/manage.py drop-db
    python src/manage.py load-rates rates.csv
"""

import argparse
import csv
import sys


def setup_database():
    """Create the ordering database schema."""
    from ordering.domain import ordering
    from ordering.utils.db import setup_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Creating ordering database schema...")
    setup_db(ordering)
    print("Done.")


def drop_database():
    """Drop the ordering database schema."""
    from ordering.domain import ordering
    from ordering.utils.db import drop_db

    print("Initializing ordering domain...")
    ordering.init()
    print("Dropping ordering database schema...")
    drop_db(ordering)
    print("Done.")


def load_rates(path):
    """Add a shipping rate for every row of a CSV file, skipping codes that already have one."""
    from ordering.domain import ordering
    from ordering.shipping.management import AddShippingRate
    from ordering.shipping.rate import ShippingRate
    from protean.exceptions import ValidationError

    ordering.init()
    added = skipped = 0
    with ordering.domain_context(), open(path, newline="", encoding="utf-8") as handle:
        repo = ordering.repository_for(ShippingRate)
        for row in csv.reader(handle):
            if not row or row[0].strip().lower() == "postal_code":
                continue
            postal_code, charge = row[0].strip(), float(row[1])
            if repo.find_by_postal_code(postal_code) is not None:
                skipped += 1
                continue
            try:
                ordering.process(
                    AddShippingRate(
                        postal_code=postal_code,
                        charge=charge,
                        description=row[2].strip() if len(row) > 2 else None,
                    ),
                    asynchronous=False,
                )
            except ValidationError as exc:
                print(f"  {postal_code}: {exc.messages}")
                skipped += 1
                continue
            added += 1

    print(f"Loaded {added} rate(s), skipped {skipped}.")


def main():
    parser = argparse.ArgumentParser(description="ShopStream Ordering management")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("setup-db", help="Create all database tables")
    subparsers.add_parser("drop-db", help="Drop all database tables")
    rates_parser = subparsers.add_parser("load-rates", help="Load shipping rates from a CSV file")
    rates_parser.add_argument("path", help="CSV file with postal_code,charge[,description] rows")

    args = parser.parse_args()

    if args.command == "setup-db":
        setup_database()
    elif args.command == "drop-db":
        drop_database()
    elif args.command == "load-rates":
        load_rates(args.path)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
