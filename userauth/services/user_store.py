"""Persistence of user records."""

from sqlalchemy.orm import Session

from userauth.models.user import User

PROFILE_FIELDS = ("name", "email", "password", "phone", "address", "image")


class UserStore:
    """Create, find and update users over a database session."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, **fields) -> User:
        """Insert a new user and return it with its assigned id and timestamps."""
        user = User(**fields)
        try:
            self.db.add(user)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user

    def find_by_email(self, email: str) -> User | None:
        """Get a user by exact email match."""
        return self.db.query(User).filter(User.email == email).first()

    def find_by_id(self, user_id: int | None) -> User | None:
        """Get a user by id."""
        if user_id is None:
            return None
        return self.db.query(User).filter(User.id == user_id).first()

    def update(self, user_id: int, **fields) -> int:
        """Overwrite the given columns of a user. Returns the number of rows changed.

        Concurrent updates of the same user are not coordinated; the last
        commit wins.
        """
        values = {name: fields[name] for name in PROFILE_FIELDS if name in fields}
        try:
            count = self.db.query(User).filter(User.id == user_id).update(values)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        return count
