from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    token: str


class PasswordChangeRequest(BaseModel):
    username: str | None = None
    current_password: str | None = Field(default=None, alias="currentPassword")
    new_password: str | None = Field(default=None, alias="newPassword")

    class Config:
        populate_by_name = True
