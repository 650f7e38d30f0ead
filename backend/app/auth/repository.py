from sqlmodel import Session

from ..models.RefreshToken import RefreshToken

class RefreshTokenRepository:
    """
    Store owning the persisted refresh tokens. Writes are flushed, not
    committed; the caller's unit of work decides when they land.
    """

    def __init__(self, session: Session):
        self.session = session

    def save(self, refresh_token: RefreshToken) -> RefreshToken:
        self.session.add(refresh_token)
        self.session.flush()
        return refresh_token

    def find_by_key(self, key: str) -> RefreshToken | None:
        return self.session.get(RefreshToken, key)

    def delete_by_key(self, key: str) -> bool:
        """
        Deletes with a single statement and reports whether a row went away,
        so two callers racing on the same key cannot both succeed.
        """
        deleted = self.session.query(RefreshToken).filter(RefreshToken.key == key).delete()
        return deleted == 1
