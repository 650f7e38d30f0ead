from sqlmodel import SQLModel, Field

class RefreshToken(SQLModel, table=True):
    __tablename__ = "refresh_tokens"

    key: str = Field(primary_key=True) # Signed JWT, random subject
    value: int = Field(index=True) # Owning user ID

class TokenResponse(SQLModel):
    access_token: str # JWT access token
    refresh_token: str # Signed refresh token key
    token_type: str = "bearer"

class ReissueRequest(SQLModel):
    refresh_token: str

class TokenPayload(SQLModel):
    sub: str | None = None # Username for access tokens, random UUID for refresh tokens
    exp: int | None = None # Expiration time
    iat: int | None = None # Issued at time
