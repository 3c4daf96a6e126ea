"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (event-loop-aware engine, URL from config_service)
    database = providers.Singleton(
        Database, db_url=config_service.provided.DATABASE_URL_ASYNC
    )

    # Unit of Work: one instance per transaction.
    # Use cases receive `unit_of_work.provider` and call it for each attempt.
    unit_of_work = providers.Factory(SqlAlchemyUnitOfWork, database=database)


container = Container()


def setup() -> None:
    container.config_service()
    container.database()


async def cleanup() -> None:
    await container.database().dispose()
    container.reset_singletons()
