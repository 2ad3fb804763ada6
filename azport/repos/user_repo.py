from sqlalchemy.orm import Session

from azport.models.user import User
from azport.core.security import hash_password


def get_by_username(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def get_by_id(db: Session, user_id: int) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, username: str, password: str) -> User:
    user = User(
        username=username,
        password_hash=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def set_password(db: Session, user_id: int, password: str) -> User | None:
    user = get_by_id(db, user_id)
    if not user:
        return None
    user.password_hash = hash_password(password)
    db.commit()
    db.refresh(user)
    return user


def ensure_admin(db: Session, username: str, password: str) -> tuple[User, bool]:
    """
    Create the administrator if no user with `username` exists.
    Returns (user, created).
    """
    existing = get_by_username(db, username)
    if existing:
        return existing, False
    return create(db, username, password), True


def count(db: Session) -> int:
    return db.query(User).count()
