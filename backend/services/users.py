# backend/services/users.py
import logging

from sqlalchemy.orm import Session

from models.users import User
from schemas.user import UserProfile, UserSession
from utils.errors import InputError, RecordNotFound
from utils.hashing import get_password_hash
from utils.permissions import Capability, Role, require_capability

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("password", "role", "fav_games", "phone_num", "num_overdue_games")


def get_user(db: Session, login: str) -> User:
    user = db.query(User).filter(User.login == (login or "").strip()).first()
    if not user:
        raise RecordNotFound("User not found.")
    return user


# Manager edit of another account
def update_user(db: Session, session: UserSession, login: str, field: str, value: str) -> UserProfile:
    require_capability(session, Capability.UPDATE_USERS)
    if field not in EDITABLE_FIELDS:
        raise InputError(f"Unknown user field '{field}'.")

    user = get_user(db, login)

    if field == "password":
        if not value:
            raise InputError("Password cannot be empty.")
        user.password_hash = get_password_hash(value)
    elif field == "role":
        role = Role.parse(value)
        if role is None:
            raise InputError("Invalid role type provided.")
        user.role = role.value
    elif field == "num_overdue_games":
        try:
            count = int(value)
        except (TypeError, ValueError):
            raise InputError(f"'{value}' is not a whole number.")
        if count < 0:
            raise InputError("Number of overdue games must be >= 0.")
        user.num_overdue_games = count
    else:
        setattr(user, field, value)

    db.commit()
    db.refresh(user)
    logger.info("%s updated %s of user %s", session.login, field, user.login)
    return UserProfile.model_validate(user)
