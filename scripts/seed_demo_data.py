#!/usr/bin/env python
"""Demo dataset seeder CLI.

Loads a reproducible e-commerce dataset (customers, products, orders) into
the configured store for local development.

Usage:
    # Create tables and load the default dataset
    python scripts/seed_demo_data.py --full-new --create-tables --confirm

    # Show current row counts
    python scripts/seed_demo_data.py --status

    # Preview deletion
    python scripts/seed_demo_data.py --delete --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

import app.features.data_platform.models  # noqa: F401
from app.core.config import get_settings
from app.core.database import Base
from app.shared.seeder import DataSeeder, SeederConfig, SeederResult


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD date argument.

    Raises:
        argparse.ArgumentTypeError: If the format is invalid.
    """
    try:
        return date.fromisoformat(date_str)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date format: {date_str}. Use YYYY-MM-DD") from e


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="ShopInsights demo dataset seeder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument("--full-new", action="store_true", help="Load a complete dataset")
    mode_group.add_argument("--delete", action="store_true", help="Delete all dataset rows")
    mode_group.add_argument("--status", action="store_true", help="Show current row counts")

    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--customers", type=int, default=50, help="Customers (default: 50)")
    parser.add_argument("--products", type=int, default=30, help="Products (default: 30)")
    parser.add_argument("--orders", type=int, default=500, help="Orders (default: 500)")
    parser.add_argument(
        "--start-date",
        type=parse_date,
        default=date(2024, 1, 1),
        help="Earliest order date (default: 2024-01-01)",
    )
    parser.add_argument(
        "--end-date",
        type=parse_date,
        default=date(2024, 12, 31),
        help="Latest order date (default: 2024-12-31)",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create missing tables before loading",
    )
    parser.add_argument("--confirm", action="store_true", help="Confirm destructive operations")
    parser.add_argument("--dry-run", action="store_true", help="Preview without changing data")
    return parser


def print_result(title: str, result: SeederResult) -> None:
    print(title)
    print(f"  customers:   {result.customers_count}")
    print(f"  products:    {result.products_count}")
    print(f"  orders:      {result.orders_count}")
    print(f"  order items: {result.order_items_count}")


async def run(args: argparse.Namespace) -> int:
    """Execute the selected operation."""
    if (args.full_new or args.delete) and not (args.confirm or args.dry_run):
        print("Refusing to change data without --confirm (or use --dry-run).")
        return 1

    try:
        config = SeederConfig(
            seed=args.seed,
            customers=args.customers,
            products=args.products,
            orders=args.orders,
            start_date=args.start_date,
            end_date=args.end_date,
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        return 1

    settings = get_settings()
    engine = create_async_engine(settings.database_url)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    seeder = DataSeeder(config)

    try:
        if args.create_tables and not args.dry_run:
            async with engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        async with session_maker() as session:
            if args.status:
                for table, count in (await seeder.get_current_counts(session)).items():
                    print(f"{table:<12} {count}")
            elif args.delete:
                result = await seeder.delete_data(session, dry_run=args.dry_run)
                print_result("Would delete:" if args.dry_run else "Deleted:", result)
            elif args.dry_run:
                records = seeder.build_records()
                for table, rows in records.items():
                    print(f"{table:<12} {len(rows)} rows would be inserted")
            else:
                result = await seeder.generate_full(session)
                print_result(f"Inserted (seed={result.seed}):", result)
        return 0
    finally:
        await engine.dispose()


def main() -> None:
    args = create_parser().parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
