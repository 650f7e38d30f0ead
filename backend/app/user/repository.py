from sqlmodel import Session, select

from ..models.User import User

class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_by_email(self, email: str) -> User | None:
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()

    def find_by_id(self, user_id: int) -> User | None:
        return self.session.get(User, user_id)

    def save(self, user: User) -> User:
        # Flush so the generated id is available inside the unit of work
        self.session.add(user)
        self.session.flush()
        self.session.refresh(user)
        return user
