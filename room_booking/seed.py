"""
Provision roles and the first admin account.

    python -m room_booking.seed --email admin@example.com --password secret

Arguments fall back to SEED_ADMIN_NAME / SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD.
Running it again is harmless: roles are only added when missing and an
existing email is reported and skipped.
"""

import argparse
import logging
import os

from room_booking.database import Base, SessionLocal, engine
from room_booking.models.role import RoleName
from room_booking.services.auth_service import auth_service
from room_booking.utils.exceptions import DuplicateEntryException
import room_booking.models  # noqa: F401

logger = logging.getLogger(__name__)


def seed(name: str, email: str, password: str, create_tables: bool = False) -> None:
    if create_tables:
        Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        auth_service.ensure_roles(db)
        db.commit()
        try:
            user = auth_service.create_user(db, name, email, password, RoleName.ADMIN)
            logger.info(f"Created admin user #{user.id} <{user.email}>")
        except DuplicateEntryException:
            db.rollback()
            logger.info(f"Admin <{email}> already exists, skipping")
    finally:
        db.close()


def main(argv=None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    parser = argparse.ArgumentParser(description="Create roles and the first admin user")
    parser.add_argument("--name", default=os.getenv("SEED_ADMIN_NAME", "Administrator"))
    parser.add_argument("--email", default=os.getenv("SEED_ADMIN_EMAIL"))
    parser.add_argument("--password", default=os.getenv("SEED_ADMIN_PASSWORD"))
    parser.add_argument("--create-tables", action="store_true",
                        help="create the schema directly instead of running alembic first")
    args = parser.parse_args(argv)

    if not args.email or not args.password:
        parser.error("--email and --password (or SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD) are required")

    seed(args.name, args.email, args.password, create_tables=args.create_tables)


if __name__ == "__main__":
    main()
