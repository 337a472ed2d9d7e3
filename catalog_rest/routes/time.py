"""Time formatting route."""

from __future__ import annotations

from fastapi import APIRouter
from fastapi import Depends

from ..controller import InputException
from ..entities import Time
from ..security import get_current_account


router = APIRouter(
    prefix="/catalog/time",
    tags=["time"],
    dependencies=[Depends(get_current_account)],
)


@router.get("/{time}", response_model=str)
async def get_time(time: int) -> str:
    """Format a length in seconds, e.g. ``3725`` as ``1:02:05``."""

    if time < 0:
        raise InputException("TIME_NEGATIVE", "Time mustn't be negative number.")
    return str(Time(time))


__all__ = ["router"]
