import sys
import asyncio
import logging
import psycopg2
from moving_estimate.core.config import settings
from moving_estimate.db.session import init_models
from urllib.parse import urlparse

logger = logging.getLogger(__name__)

PREFECTURES = [
    (1, "Hokkaido"),
    (4, "Miyagi"),
    (13, "Tokyo"),
    (14, "Kanagawa"),
    (23, "Aichi"),
    (27, "Osaka"),
    (40, "Fukuoka"),
]

# (from, to, km); looked up in either direction
DISTANCES = [
    (1, 1, 0.0), (4, 4, 0.0), (13, 13, 0.0), (14, 14, 0.0),
    (23, 23, 0.0), (27, 27, 0.0), (40, 40, 0.0),
    (1, 4, 642.3), (1, 13, 831.8), (1, 27, 1053.9),
    (4, 13, 305.6), (13, 14, 27.9), (13, 23, 259.4),
    (13, 27, 403.3), (13, 40, 883.6), (23, 27, 136.8),
    (27, 40, 484.6),
]

# package type -> unit boxes per item
PACKAGE_BOXES = [
    ("BOX", 1),
    ("BED", 15),
    ("BICYCLE", 5),
    ("WASHING_MACHINE", 10),
]

# (max boxes, price)
TRUCKS = [
    (80, 30000),
    (200, 50000),
]

OPTIONAL_SERVICES = [
    ("WASHING_MACHINE", "Washing machine installation", 3000),
]


def seed_catalog() -> bool:
    try:
        asyncio.run(init_models())

        db_url = urlparse(settings.DATABASE_URL.replace("postgresql+asyncpg://", "postgresql://"))

        conn = psycopg2.connect(
            host=db_url.hostname or "localhost",
            port=db_url.port or 5432,
            user=db_url.username or "postgres",
            password=db_url.password or "postgres",
            database=db_url.path.lstrip("/") or "postgres"
        )

        cursor = conn.cursor()

        cursor.executemany(
            "INSERT INTO prefectures (id, name) VALUES (%s, %s) ON CONFLICT (id) DO NOTHING",
            PREFECTURES
        )
        cursor.executemany(
            "INSERT INTO prefecture_distances (prefecture_id_from, prefecture_id_to, distance) "
            "VALUES (%s, %s, %s) ON CONFLICT ON CONSTRAINT uq_prefecture_distance_pair DO NOTHING",
            DISTANCES
        )
        cursor.executemany(
            "INSERT INTO package_contents (package_type, box) VALUES (%s, %s) "
            "ON CONFLICT (package_type) DO NOTHING",
            PACKAGE_BOXES
        )
        cursor.executemany(
            "INSERT INTO optional_services (service_type, name, price) VALUES (%s, %s, %s) "
            "ON CONFLICT (service_type) DO NOTHING",
            OPTIONAL_SERVICES
        )

        # The engine needs exactly two truck classes, so only seed an empty table.
        cursor.execute("SELECT count(*) FROM truck_capacities")
        truck_count = cursor.fetchone()[0]
        if truck_count == 0:
            cursor.executemany(
                "INSERT INTO truck_capacities (max_box, price) VALUES (%s, %s)",
                TRUCKS
            )
        else:
            print(f"Skipping trucks: table already holds {truck_count} classes")

        conn.commit()

        print(f"Seeded {len(PREFECTURES)} prefectures and {len(DISTANCES)} distances")
        print(f"Package types: {', '.join(name for name, _ in PACKAGE_BOXES)}")
        print(f"Optional services: {len(OPTIONAL_SERVICES)}")

        cursor.close()
        conn.close()
        return True

    except Exception as e:
        logger.error(f"Error seeding catalog: {e}", exc_info=settings.DEBUG)
        return False


def main():
    logging.basicConfig(level=settings.LOG_LEVEL)

    if len(sys.argv) > 1:
        print("Usage: python seed_catalog.py")
        sys.exit(1)

    success = seed_catalog()
    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()
