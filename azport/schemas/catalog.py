from pydantic import BaseModel


class CatalogUploadRequest(BaseModel):
    catalog: str | None = None  # data URL or bare base64
