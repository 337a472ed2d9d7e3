"""Language lookup routes."""

from __future__ import annotations

from typing import List

from fastapi import APIRouter
from fastapi import Depends

from ..entities import Language
from ..entities import SUBTITLE_LANGUAGES
from ..security import get_current_account


router = APIRouter(
    prefix="/catalog/languages",
    tags=["languages"],
    dependencies=[Depends(get_current_account)],
)


@router.get("", response_model=List[Language])
async def get_languages() -> List[Language]:
    """Return every language a movie or season may use."""

    return list(Language)


@router.get("/subtitles", response_model=List[Language])
async def get_subtitles() -> List[Language]:
    """Return the languages available for subtitles."""

    return list(SUBTITLE_LANGUAGES)


__all__ = ["router"]
