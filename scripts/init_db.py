"""Script to initialize the local appointment database."""

import asyncio

from agenda.database import create_tables, engine


async def init_db() -> None:
    """Create the appointment and notification tables if they are missing."""
    await create_tables()
    await engine.dispose()
    print("✓ Database initialized successfully!")


if __name__ == "__main__":
    asyncio.run(init_db())
