"""Create the schema and the ticket id sequence row.

Usage:
    python -m app.tools.init_db
    python -m app.tools.init_db --drop         # drop existing tables first
    python -m app.tools.init_db --verify-only  # only print the status summary

Production deployments use `alembic upgrade head`; this tool is for local
development and demos.
"""

from __future__ import annotations

import argparse
import asyncio
import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.persistence.database import Base, async_session_factory, engine
from app.adapters.persistence.models import TicketModel, TicketSequenceModel
from app.adapters.persistence.repositories import highest_ticket_number
from app.application.ports.ticket_sequence_repo import TICKET_SEQUENCE
from app.domain.policies.status_lifecycle import PROGRESS_BY_STATUS

logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")
logger = logging.getLogger(__name__)


async def init_db(drop: bool = False) -> None:
    """Create all tables (optionally dropping them first) and seed the sequence row."""
    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
            logger.info("Dropped all tables")
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Tables ready")

    async with async_session_factory() as session:
        await ensure_sequence(session)


async def ensure_sequence(session: AsyncSession) -> int:
    """Create the ticket sequence row if missing, starting after any stored tickets.

    Returns the current sequence value.
    """
    existing = (await session.execute(
        select(TicketSequenceModel).where(TicketSequenceModel.name == TICKET_SEQUENCE)
    )).scalar_one_or_none()
    if existing is not None:
        return existing.value

    start = await highest_ticket_number(session)
    session.add(TicketSequenceModel(name=TICKET_SEQUENCE, value=start))
    await session.commit()
    logger.info("Initialized %r sequence at %d", TICKET_SEQUENCE, start)
    return start


async def _verify_data() -> None:
    """Print a status summary of the ticket store."""
    async with async_session_factory() as session:
        total = (await session.execute(select(func.count(TicketModel.id)))).scalar_one()
        by_status = dict(
            (await session.execute(
                select(TicketModel.status, func.count(TicketModel.id)).group_by(TicketModel.status)
            )).all()
        )
        fallbacks = (await session.execute(
            select(func.count(TicketModel.id)).where(TicketModel.fallback_used.is_(True))
        )).scalar_one()
        sequence = (await session.execute(
            select(TicketSequenceModel.value).where(TicketSequenceModel.name == TICKET_SEQUENCE)
        )).scalar_one_or_none()

        print(f"\n{'='*50}")
        print("TICKET STORE STATUS")
        print(f"{'='*50}")
        print(f"Tickets:  {total}")
        for status in PROGRESS_BY_STATUS:
            print(f"  {status.value:<12} {by_status.get(status.value, 0)}")
        print(f"Fallback classifications: {fallbacks}")
        print(f"Last issued number: {sequence if sequence is not None else 'sequence row missing'}")
        print(f"{'='*50}\n")


def main():
    parser = argparse.ArgumentParser(description="Initialize the complaint ticket database")
    parser.add_argument(
        "--drop", action="store_true",
        help="Drop existing tables before creating them",
    )
    parser.add_argument(
        "--verify-only", action="store_true",
        help="Only print the status summary, don't create anything",
    )
    args = parser.parse_args()

    async def run_all():
        if not args.verify_only:
            await init_db(drop=args.drop)
        await _verify_data()
        await engine.dispose()

    asyncio.run(run_all())


if __name__ == "__main__":
    main()
