from contextlib import contextmanager

from fastapi import HTTPException, status
from loguru import logger

from ..core.services.errors import ServiceError


@contextmanager
def http_errors(action: str):
    """Translate service errors into HTTP errors; anything unexpected becomes a 500."""
    try:
        yield
    except HTTPException:
        raise
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Failed to {action}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to {action}",
        )
