"""FastAPI dependencies for hourblocks."""

from fastapi import Depends, HTTPException, status, Header
from sqlalchemy.orm import Session

from hourblocks.database.database import get_db
from hourblocks.database.hour_repository import HourRepository, UserHourWriter


def get_current_user_id(x_user_id: str = Header(default="", alias="X-User-Id")) -> str:
    """Identify the current user from the X-User-Id header.

    Raises:
        HTTPException: If the header is missing or blank
    """
    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-User-Id header",
        )
    return user_id


def get_hour_repository(db: Session = Depends(get_db)) -> HourRepository:
    return HourRepository(db)


def get_hour_writer(
    repository: HourRepository = Depends(get_hour_repository),
    user_id: str = Depends(get_current_user_id),
) -> UserHourWriter:
    """Hour-storage collaborator bound to the current user."""
    return UserHourWriter(repository, user_id)
