from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.exc import IntegrityError

from src.platform.exception.exceptions import StorageConflictError


@asynccontextmanager
async def translate_integrity_error(operation: str) -> AsyncIterator[None]:
    """Re-raise constraint rejections as StorageConflictError for the app layer."""
    try:
        yield
    except IntegrityError as e:
        raise StorageConflictError(
            f'{operation} rejected by storage constraint', constraint=str(e.orig)
        ) from e
