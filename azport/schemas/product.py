from pydantic import BaseModel, Field


class ProductPayload(BaseModel):
    """Body of product create/update. `category` is a category name."""

    name: str | None = None
    description: str | None = None
    image: str | None = None
    specs: list[str] | None = None
    use_cases: list[str] | None = Field(default=None, alias="useCases")
    category: str | None = None
    images: list[str] | None = None
    document: str | None = None

    class Config:
        populate_by_name = True
