#!/usr/bin/env python3
"""
Seed the listings table.

Features:
- Always includes the three showroom cars (Suzuki Swift, Hyundai Creta, Honda City)
- Deterministic: fixed seed → same extra inventory every run
- Idempotent: clears the table before seeding
- Mixed statuses so the public catalog and the admin dashboard differ

Usage:
    python scripts/seed_listings.py [--extra 30] [--seed 42]
"""

from __future__ import annotations

import argparse
import random
import sys
from decimal import Decimal

from sqlalchemy import delete

from vehiql.domain.listing import ListingStatus
from vehiql.infra.db.models.listing import ListingRow
from vehiql.infra.db.session import get_session


RANDOM_SEED = 42
NUM_EXTRA_LISTINGS = 30
PLACEHOLDER_IMAGE = "https://res.cloudinary.com/demo/image/upload/v1/cars/placeholder.jpg"

SHOWROOM = [
    {
        "make": "Suzuki",
        "model": "Swift",
        "year": 2022,
        "mileage": 15000,
        "body_type": "Hatchback",
        "price": Decimal("7000"),
        "color": "White",
        "fuel_type": "Petrol",
        "transmission": "Manual",
        "featured": True,
    },
    {
        "make": "Hyundai",
        "model": "Creta",
        "year": 2023,
        "mileage": 8000,
        "body_type": "SUV",
        "price": Decimal("15000"),
        "color": "Black",
        "fuel_type": "Diesel",
        "transmission": "Automatic",
        "featured": True,
    },
    {
        "make": "Honda",
        "model": "City",
        "year": 2021,
        "mileage": 20000,
        "body_type": "Sedan",
        "price": Decimal("12000"),
        "color": "Silver",
        "fuel_type": "Petrol",
        "transmission": "Automatic",
        "featured": False,
    },
]

MODELS_BY_MAKE = {
    "Suzuki": [("Swift", "Hatchback"), ("Vitara", "SUV"), ("Ciaz", "Sedan")],
    "Hyundai": [("Creta", "SUV"), ("i20", "Hatchback"), ("Verna", "Sedan")],
    "Honda": [("City", "Sedan"), ("Amaze", "Sedan"), ("Elevate", "SUV")],
    "Toyota": [("Innova", "MPV"), ("Fortuner", "SUV"), ("Glanza", "Hatchback")],
    "Tata": [("Nexon", "SUV"), ("Tiago", "Hatchback"), ("Harrier", "SUV")],
}
COLORS = ["White", "Black", "Silver", "Red", "Blue", "Grey"]
FUEL_TYPES = ["Petrol", "Diesel", "Electric", "Hybrid", "CNG"]
TRANSMISSIONS = ["Manual", "Automatic"]


def generate_listing() -> dict:
    """One random listing; older and higher-mileage cars are cheaper."""
    make = random.choice(list(MODELS_BY_MAKE))
    model, body_type = random.choice(MODELS_BY_MAKE[make])
    year = random.randint(2015, 2025)
    mileage = random.randint(0, max(1000, (2025 - year) * 15000))
    price = Decimal(random.randint(4000, 30000) - (2025 - year) * 300).max(Decimal("2500"))

    return {
        "make": make,
        "model": model,
        "year": year,
        "mileage": mileage,
        "body_type": body_type,
        "price": (price / 100).quantize(Decimal("1")) * 100,
        "color": random.choice(COLORS),
        "fuel_type": random.choice(FUEL_TYPES),
        "transmission": random.choice(TRANSMISSIONS),
        "seats": 7 if body_type == "MPV" else 5,
        "status": random.choices(
            [s.value for s in ListingStatus], weights=[7, 1, 2], k=1
        )[0],
        "featured": random.random() < 0.15,
    }


def seed_listings(extra: int = NUM_EXTRA_LISTINGS, seed: int = RANDOM_SEED) -> None:
    random.seed(seed)

    with get_session() as session:
        deleted = session.execute(delete(ListingRow)).rowcount
        print(f"Deleted {deleted} existing listings")

        values = [{**car, "status": ListingStatus.AVAILABLE.value} for car in SHOWROOM]
        values += [generate_listing() for _ in range(extra)]

        rows = [
            ListingRow(
                description=f"{v['year']} {v['make']} {v['model']} in {v['color']}",
                images=[PLACEHOLDER_IMAGE],
                **v,
            )
            for v in values
        ]
        session.add_all(rows)
        session.flush()

        print(f"Seeded {len(rows)} listings")
        for row in rows[:5]:
            print(f"   {row.year} {row.make} {row.model} - ${row.price:,.2f} [{row.status}]")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--extra", type=int, default=NUM_EXTRA_LISTINGS)
    parser.add_argument("--seed", type=int, default=RANDOM_SEED)
    args = parser.parse_args(argv)

    try:
        seed_listings(extra=args.extra, seed=args.seed)
    except Exception as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
