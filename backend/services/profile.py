# backend/services/profile.py
import logging

from sqlalchemy.orm import Session

from models.order import RentalOrder
from models.users import User
from schemas.user import UserProfile, UserSession
from utils.errors import InputError, PermissionDenied, RecordNotFound
from utils.hashing import get_password_hash, verify_password
from utils.permissions import Capability, Role, require_capability

logger = logging.getLogger(__name__)


def _current_user(db: Session, session: UserSession) -> User:
    user = db.query(User).filter(User.login == session.login).first()
    if not user:
        raise RecordNotFound("Your account no longer exists.")
    return user


def _check_password(user: User, old_password: str):
    if not verify_password(old_password, user.password_hash):
        raise PermissionDenied("Incorrect password... returning to menu.")


def get_profile(db: Session, session: UserSession) -> UserProfile:
    return UserProfile.model_validate(_current_user(db, session))


def change_password(db: Session, session: UserSession, old_password: str, new_password: str):
    user = _current_user(db, session)
    _check_password(user, old_password)
    if not new_password:
        raise InputError("Password cannot be empty.")
    user.password_hash = get_password_hash(new_password)
    db.commit()


def change_phone(db: Session, session: UserSession, old_password: str, phone_num: str):
    user = _current_user(db, session)
    _check_password(user, old_password)
    user.phone_num = phone_num
    db.commit()


def change_login(db: Session, session: UserSession, new_login: str) -> UserSession:
    """Rename the manager's own account and carry their orders along."""
    require_capability(session, Capability.EDIT_OWN_ACCOUNT)
    new_login = (new_login or "").strip()
    if not new_login:
        raise InputError("Login cannot be empty.")
    if db.query(User).filter(User.login == new_login).first():
        raise InputError("Username unavailable. Please try again.")

    user = _current_user(db, session)
    old_login = user.login
    user.login = new_login
    db.flush()

    # Databases without ON UPDATE CASCADE leave the orders on the old login
    db.query(RentalOrder).filter(RentalOrder.login == old_login).update(
        {RentalOrder.login: new_login}, synchronize_session=False
    )
    db.commit()

    logger.info("User %s renamed to %s", old_login, new_login)
    return UserSession(login=new_login, role=session.role)


def change_role(db: Session, session: UserSession, new_role: str) -> UserSession:
    require_capability(session, Capability.EDIT_OWN_ACCOUNT)
    role = Role.parse(new_role)
    if role is None:
        raise InputError("Invalid role type provided.")

    user = _current_user(db, session)
    user.role = role.value
    db.commit()
    return UserSession(login=session.login, role=role)


def set_overdue_games(db: Session, session: UserSession, count: int):
    require_capability(session, Capability.EDIT_OWN_ACCOUNT)
    if count < 0:
        raise InputError("Number of overdue games must be >= 0.")
    user = _current_user(db, session)
    user.num_overdue_games = count
    db.commit()
