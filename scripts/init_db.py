"""Database initialization script.

Creates the document tables and seeds the starter templates when the
template table is empty.

Usage:
    python -m scripts.init_db
    python -m scripts.init_db --reset   # drop every table first
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlmodel import select

from app.core.config import get_settings
from app.db.models import DocumentTemplateRecord
from app.db.session import close_db, drop_all_tables, get_session_maker, init_db


async def main(reset: bool) -> None:
    """Initialize the database and list the available templates."""
    settings = get_settings()

    if reset:
        print("Dropping all database tables...")
        await drop_all_tables(settings)

    await init_db(settings)

    async with get_session_maker(settings)() as session:
        result = await session.execute(select(DocumentTemplateRecord).order_by(DocumentTemplateRecord.id))
        for template in result.scalars().all():
            print(f"  [{template.id}] {template.title} ({template.language}, {template.template_type})")

    await close_db(settings)
    print("Database initialized successfully!")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--reset", action="store_true", help="Drop all tables before initializing")
    args = parser.parse_args()
    asyncio.run(main(args.reset))
