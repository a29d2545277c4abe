from sqlalchemy.orm import Session
from models.log import Log

def write_log(db: Session, *, user_login, action, resource, status="SUCCESS", meta=None):
    entry = Log(user_login=user_login, action=action, resource=resource, status=status, meta=meta or {})
    db.add(entry)
    db.commit()
