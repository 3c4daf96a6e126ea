#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate the cinema schema on DATABASE_URL_ASYNC

Notes:
- Works for both SQLite and PostgreSQL URLs
- This script only resets structure, it does not seed data
- To seed sample data, run `python script/seed_data.py`
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database


async def reset_schema(database: Database) -> None:
    print('🗑️ Dropping tables...')
    await database.drop_all_tables()
    print('   ✅ Tables dropped')

    print('🏗️ Creating tables...')
    await database.create_db_and_tables()
    print('   ✅ Tables created')


async def main():
    print('🔄 Starting database reset...')
    print(f'Database URL: {settings.DATABASE_URL_ASYNC}')
    print('=' * 50)

    database = Database()
    try:
        await reset_schema(database)
        print('=' * 50)
        print('✅ Database reset completed!')
        print('💡 To seed sample data, run: python script/seed_data.py')
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        exit(1)
    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
