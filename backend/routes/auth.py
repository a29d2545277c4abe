# backend/routes/auth.py
from pydantic import ValidationError

from routes.common import menu_action
from schemas.user import UserCreate
from services import auth as auth_service
from utils.audit import write_log


# Register a new customer account
@menu_action
def create_user(db, prompter):
    login = prompter.prompt_line("Enter username: ")
    password = prompter.prompt_line("Enter password: ")
    phone_num = prompter.prompt_line("Enter phone number: ")

    try:
        payload = UserCreate(login=login, password=password, phone_num=phone_num)
    except ValidationError:
        prompter.say("Username and password cannot be empty.")
        return None

    try:
        user = auth_service.create_user(db, payload)
    except Exception:
        write_log(db, user_login=None, action="REGISTER", resource="auth",
                  status="FAIL", meta={"login": login})
        raise

    write_log(db, user_login=user.login, action="REGISTER", resource="auth",
              status="SUCCESS", meta={"login": user.login})
    prompter.say("User created successfully! Returning to menu...")
    return user


# Authenticate and hand back the session for the user menu
@menu_action
def log_in(db, prompter):
    login = prompter.prompt_line("Enter username: ")
    password = prompter.prompt_line("Enter password: ")

    session = auth_service.log_in(db, login, password)
    if session is None:
        write_log(db, user_login=None, action="LOGIN", resource="auth",
                  status="FAIL", meta={"login": login})
        prompter.say("Invalid username or password.")
        return None

    write_log(db, user_login=session.login, action="LOGIN", resource="auth",
              status="SUCCESS", meta={"role": session.role.value})
    prompter.say(f"\nWelcome, {session.login}!\n")
    return session
