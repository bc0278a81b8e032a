"""
Demo data seeder.

Fills a local SQLite store with a handful of Kazakhstan water objects and
the demo accounts, so the app has something to show offline.

Usage:
    python -m tools.seed_demo --db gidroatlas.db
"""

import logging
from typing import Dict, List

from core.models import Role
from loaders.local_store import SQLiteStore
from loaders.store import StoreError

log = logging.getLogger(__name__)

DEMO_OBJECTS: List[Dict] = [
    {
        "name": "Lake Balkhash", "region": "Karaganda Region", "resource_type": "lake",
        "water_type": "non-fresh", "fauna": True, "passport_date": "2012-05-14",
        "technical_condition": 3, "latitude": 46.5417, "longitude": 74.8792,
    },
    {
        "name": "Kapshagay Reservoir", "region": "Almaty Region", "resource_type": "reservoir",
        "water_type": "fresh", "fauna": True, "passport_date": "2018-09-01",
        "technical_condition": 2, "latitude": 43.9000, "longitude": 77.3000,
    },
    {
        "name": "Irtysh-Karaganda Canal", "region": "Pavlodar Region", "resource_type": "canal",
        "water_type": "fresh", "fauna": False, "passport_date": "2005-03-20",
        "technical_condition": 5, "latitude": 51.7300, "longitude": 75.3200,
    },
    {
        "name": "Lake Alakol", "region": "Almaty Region", "resource_type": "lake",
        "water_type": "non-fresh", "fauna": True, "passport_date": "2015-07-07",
        "technical_condition": 2, "latitude": 46.1000, "longitude": 81.7000,
    },
    {
        "name": "Bukhtarma Reservoir", "region": "East Kazakhstan Region", "resource_type": "reservoir",
        "water_type": "fresh", "fauna": True, "passport_date": "2010-11-30",
        "technical_condition": 4, "latitude": 49.6200, "longitude": 83.5200,
    },
    {
        "name": "Lake Burabay", "region": "Akmola Region", "resource_type": "lake",
        "water_type": "fresh", "fauna": True, "passport_date": "2020-06-15",
        "technical_condition": 1, "latitude": 53.0850, "longitude": 70.2870,
    },
    {
        "name": "Kyzylorda Irrigation Canal", "region": "Kyzylorda Region", "resource_type": "canal",
        "water_type": "fresh", "fauna": False, "passport_date": None,
        "technical_condition": 4, "latitude": 44.8500, "longitude": 65.5000,
    },
]

DEMO_ACCOUNTS = [
    ("guest", "guest123", Role.GUEST.value),
    ("expert", "expert123", Role.EXPERT.value),
]


def seed(store: SQLiteStore, with_users: bool = True) -> Dict[str, int]:
    """
    Insert demo objects (skipping names already present) and demo users.

    Returns:
        Counts of inserted objects and users
    """
    existing = {obj.name for obj in store.fetch_water_objects()}
    objects = 0
    for data in DEMO_OBJECTS:
        if data["name"] in existing:
            continue
        store.insert_water_object(data)
        objects += 1

    users = 0
    if with_users:
        for login, password, role in DEMO_ACCOUNTS:
            if store.find_user(login) is None:
                store.insert_user(login, password, role)
                users += 1

    log.info(f"Seeded {objects} objects and {users} users into {store.db_path}")
    return {"objects": objects, "users": users}


def main():
    """CLI interface for the seeder."""
    import argparse

    from core.config import configure_logging, get_settings

    parser = argparse.ArgumentParser(description="Seed the local GidroAtlas store with demo data")
    parser.add_argument("--db", help="SQLite file (defaults to GIDROATLAS_DB_PATH)")
    parser.add_argument("--no-users", action="store_true", help="Do not create the demo accounts")

    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings)

    try:
        counts = seed(SQLiteStore(args.db or settings.db_path), with_users=not args.no_users)
    except StoreError as e:
        log.error(f"Seeding failed: {e}")
        raise SystemExit(1)

    print(f"Inserted {counts['objects']} objects, {counts['users']} users")


if __name__ == "__main__":
    main()
