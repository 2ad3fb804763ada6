"""
Single-slot storage for the downloadable product catalog.

Layout under the public directory:
  uploads/catalog.pdf   the current catalog, replaced on every upload
  catalog-info.json     sidecar: {"lastUpdated", "fileName", "path"}
"""
import base64
import binascii
import json
import logging
import time
from datetime import datetime, timezone
from pathlib import Path

from azport.config import settings

logger = logging.getLogger(__name__)

CATALOG_FILE_NAME = "catalog.pdf"
INFO_FILE_NAME = "catalog-info.json"
PDF_DATA_URL_PREFIX = "data:application/pdf;base64,"


class InvalidCatalogError(ValueError):
    """Upload payload is not a base64-encoded PDF."""


class CatalogStore:
    def __init__(self, public_dir: str | Path):
        self.public_dir = Path(public_dir)
        self.uploads_dir = self.public_dir / "uploads"
        self.info_path = self.public_dir / INFO_FILE_NAME

    @staticmethod
    def decode_payload(payload: str) -> bytes:
        """Decode a data URL or bare base64 string into PDF bytes."""
        data = "".join(payload.split(";base64,")[-1].split())
        try:
            content = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidCatalogError("Catalog is not valid base64 data") from e
        if not content.startswith(b"%PDF"):
            raise InvalidCatalogError("Catalog must be a PDF document")
        return content

    def save(self, content: bytes) -> dict:
        """Write the catalog and its sidecar, replacing any previous catalog."""
        self.uploads_dir.mkdir(parents=True, exist_ok=True)
        file_path = self.uploads_dir / CATALOG_FILE_NAME
        file_path.write_bytes(content)
        info = {
            "lastUpdated": datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "fileName": CATALOG_FILE_NAME,
            "path": f"/uploads/{CATALOG_FILE_NAME}",
        }
        self.info_path.write_text(json.dumps(info), encoding="utf-8")
        logger.info("Catalog saved: %s (%d bytes)", file_path, len(content))
        return info

    def read_info(self) -> dict | None:
        if not self.info_path.is_file():
            return None
        return json.loads(self.info_path.read_text(encoding="utf-8"))

    def _resolve(self, info: dict) -> Path | None:
        """Path of the stored file, or None if missing or outside the public directory."""
        rel = str(info.get("path") or "").lstrip("/")
        if not rel:
            return None
        root = self.public_dir.resolve()
        path = (root / rel).resolve()
        if root not in path.parents or not path.is_file():
            return None
        return path

    def status(self) -> dict:
        """Current catalog inline as a data URL plus metadata, or {"catalog": None}."""
        info = self.read_info()
        path = self._resolve(info) if info else None
        if not path:
            return {"catalog": None}
        encoded = base64.b64encode(path.read_bytes()).decode("ascii")
        return {
            "catalog": PDF_DATA_URL_PREFIX + encoded,
            "lastUpdated": info.get("lastUpdated"),
            "fileName": info.get("fileName"),
        }

    def locate(self) -> tuple[Path, str] | None:
        """
        Returns (file path, download filename) for the current catalog, or None.
        The download name carries a millisecond timestamp so browsers never reuse a cached copy.
        """
        info = self.read_info()
        path = self._resolve(info) if info else None
        if not path:
            return None
        base, dot, ext = (info.get("fileName") or CATALOG_FILE_NAME).rpartition(".")
        if not dot:
            base, ext = ext, "pdf"
        return path, f"{base}_{int(time.time() * 1000)}.{ext}"

    def delete(self) -> bool:
        """Remove the catalog and its sidecar. Returns True if a catalog existed."""
        info = self.read_info()
        if info is None:
            return False
        path = self._resolve(info)
        if path:
            path.unlink(missing_ok=True)
        self.info_path.unlink(missing_ok=True)
        logger.info("Catalog deleted")
        return True


def get_catalog_store() -> CatalogStore:
    return CatalogStore(settings.public_dir)
