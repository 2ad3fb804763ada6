from pydantic import BaseModel


class CategoryPayload(BaseModel):
    name: str | None = None
    description: str | None = None
