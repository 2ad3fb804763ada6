from pydantic import BaseModel


class JobOpeningPayload(BaseModel):
    id: int | None = None  # update only; may also be passed as ?id=
    title: str | None = None
    department: str | None = None
    location: str | None = None
    type: str | None = None
    description: str | None = None
    active: bool | None = None

    def missing_required(self) -> bool:
        return not (self.title and self.location and self.type and self.description)
