# backend/services/auth.py
import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.users import User
from schemas.user import UserCreate, UserSession
from utils.errors import InputError
from utils.hashing import get_password_hash, verify_password
from utils.permissions import Role

logger = logging.getLogger(__name__)


def session_for(user: User) -> UserSession:
    # Unknown role strings in old rows get the least privileged role
    return UserSession(login=user.login, role=Role.parse(user.role) or Role.CUSTOMER)


# Register a new customer account
def create_user(db: Session, payload: UserCreate) -> User:
    login = payload.login.strip()

    if db.query(User).filter(User.login == login).first():
        raise InputError("Username unavailable. Please try again.")

    user = User(
        login=login,
        password_hash=get_password_hash(payload.password),
        role=Role.CUSTOMER.value,
        fav_games="",
        phone_num=payload.phone_num,
        num_overdue_games=0,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise InputError("Username unavailable. Please try again.")
    db.refresh(user)

    logger.info("Created user %s", login)
    return user


# Check credentials, returning the session for a valid login
def log_in(db: Session, login: str, password: str) -> Optional[UserSession]:
    user = db.query(User).filter(User.login == login).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", login)
        return None
    return session_for(user)
