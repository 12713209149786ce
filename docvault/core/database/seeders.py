"""
Initial user seeding.

Creates the ``ADMIN`` account and one account per zone found in the legacy
segment catalog. Existing accounts are left untouched, so the seeder can be
run again after new segments appear in the ERP.

Run with the ``docvault-seed`` console script.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from docvault.core.logging_config import get_logger, setup_logging
from docvault.core.security import hash_password
from docvault.core.zones import list_zones

from .entities.users import ADMIN_ZONE, User
from .repositories.lookups import LegacyLookupRepository
from .repositories.users import UserRepository

logger = get_logger(__name__)


@dataclass
class SeedReport:
    created: List[str] = field(default_factory=list)
    existing: List[str] = field(default_factory=list)


async def seed_zone_users(
    session: AsyncSession,
    legacy_session: AsyncSession,
    admin_password: str,
    zone_password: str,
) -> SeedReport:
    """Create the ADMIN user and one user per legacy zone when missing."""
    users = UserRepository(session)
    report = SeedReport()

    if await users.get_by_name(ADMIN_ZONE) is None:
        await users.create(
            User(name=ADMIN_ZONE, zone=ADMIN_ZONE, is_admin=True, password_hash=hash_password(admin_password))
        )
        logger.info("Created ADMIN user.")
        report.created.append(ADMIN_ZONE)
    else:
        logger.info("ADMIN user already exists.")
        report.existing.append(ADMIN_ZONE)

    zones = list_zones(await LegacyLookupRepository(legacy_session).segments())
    for zone in zones:
        if await users.get_by_name(zone) is not None:
            logger.info(f"User for zone {zone} already exists.")
            report.existing.append(zone)
            continue
        await users.create(User(name=zone, zone=zone, password_hash=hash_password(zone_password)))
        logger.info(f"Created user for zone: {zone}")
        report.created.append(zone)

    return report


async def _run() -> SeedReport:
    from docvault.server.core.config import settings

    from .session import async_session_maker, dispose_engines, init_db, legacy_session_maker

    await init_db()
    try:
        async with async_session_maker() as session, legacy_session_maker() as legacy_session:
            return await seed_zone_users(
                session,
                legacy_session,
                admin_password=settings.seed_admin_password,
                zone_password=settings.seed_zone_password,
            )
    finally:
        await dispose_engines()


def main() -> None:
    """Entry point of the ``docvault-seed`` console script."""
    setup_logging(enable_file=False)
    report = asyncio.run(_run())
    logger.info(f"Seeding finished: {len(report.created)} created, {len(report.existing)} already present")
