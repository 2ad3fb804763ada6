import logging

from fastapi import APIRouter, Body, Depends, HTTPException, status

from azport.dependencies import get_current_user
from azport.models.user import User
from azport.services.translation_store import TranslationStore, get_translation_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/translations", tags=["translations"])


@router.get("/{lang}")
def get_translations(lang: str, store: TranslationStore = Depends(get_translation_store)):
    try:
        table = store.read(lang)
    except Exception as e:
        logger.exception("Reading translations for %s failed: %s", lang, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to read translations") from e
    if table is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Translations not found")
    return table


@router.post("/update")
def update_translations(
    tables: dict = Body(...),
    store: TranslationStore = Depends(get_translation_store),
    user: User = Depends(get_current_user),
):
    """Overwrite the string table of every configured language. Body: {"en": {...}, "az": {...}, ...}."""
    if any(not isinstance(tables.get(lang), dict) for lang in store.languages):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or incomplete translation data provided.",
        )
    try:
        store.write_all(tables)
    except Exception as e:
        logger.exception("Updating translations failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update translations.") from e
    logger.info("Translations updated by %s", user.username)
    return {"message": "Translations updated successfully!"}
