import logging

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import FileResponse, JSONResponse

from azport.config import settings
from azport.dependencies import get_current_user
from azport.models.user import User
from azport.schemas.catalog import CatalogUploadRequest
from azport.services.catalog_store import CatalogStore, InvalidCatalogError, get_catalog_store

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/catalog", tags=["catalog"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-store, max-age=0, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


@router.post("/upload")
def upload_catalog(
    data: CatalogUploadRequest,
    store: CatalogStore = Depends(get_catalog_store),
    user: User = Depends(get_current_user),
):
    """Replace the catalog PDF with a base64 payload (data URL or bare base64)."""
    if not data.catalog:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No catalog provided")
    try:
        content = store.decode_payload(data.catalog)
    except InvalidCatalogError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e
    max_bytes = settings.max_catalog_upload_mb * 1024 * 1024
    if len(content) > max_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Catalog too large. Max allowed is {settings.max_catalog_upload_mb}MB.",
        )
    try:
        info = store.save(content)
    except Exception as e:
        logger.exception("Catalog upload failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error uploading catalog") from e
    logger.info("Catalog uploaded by %s", user.username)
    return {"message": "Catalog uploaded successfully", "path": info["path"], "lastUpdated": info["lastUpdated"]}


@router.get("/status")
def catalog_status(store: CatalogStore = Depends(get_catalog_store)):
    try:
        body = store.status()
    except Exception as e:
        logger.exception("Catalog status failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error getting catalog status") from e
    return JSONResponse(content=body, headers=NO_CACHE_HEADERS)


@router.get("/download")
def download_catalog(store: CatalogStore = Depends(get_catalog_store)):
    try:
        located = store.locate()
    except Exception as e:
        logger.exception("Catalog download failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error downloading catalog") from e
    if not located:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No catalog available")
    path, download_name = located
    return FileResponse(
        path,
        media_type="application/pdf",
        filename=download_name,
        headers=NO_CACHE_HEADERS,
    )


@router.delete("/delete")
def delete_catalog(
    store: CatalogStore = Depends(get_catalog_store),
    user: User = Depends(get_current_user),
):
    try:
        removed = store.delete()
    except Exception as e:
        logger.exception("Catalog delete failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting catalog") from e
    if removed:
        logger.info("Catalog deleted by %s", user.username)
    return {"message": "Catalog deleted successfully"}
