# backend/routes/admin.py
from routes.common import choose, menu_action
from services import users as users_service
from utils.audit import write_log
from utils.permissions import Capability, require_capability

FIELD_LABELS = {
    "password": "password",
    "role": "role",
    "fav_games": "favorite games",
    "phone_num": "phone number",
    "num_overdue_games": "number of overdue games",
}


# Update another user's account (manager only)
@menu_action
def update_user(db, prompter, session):
    require_capability(session, Capability.UPDATE_USERS)

    login = prompter.prompt_line("\nEnter user login to update: ")
    user = users_service.get_user(db, login)

    field = choose(prompter, "", [
        (key, f"Update User {label.title()}") for key, label in FIELD_LABELS.items()
    ])
    if field is None:
        prompter.say("Invalid choice.\n")
        return None

    value = prompter.prompt_line(f"Enter the updated user's {FIELD_LABELS[field]}: ")
    profile = users_service.update_user(db, session, user.login, field, value)

    write_log(db, user_login=session.login, action="USER_UPDATE", resource="users",
              status="SUCCESS", meta={"login": profile.login, "field": field})
    prompter.say(f"User's {FIELD_LABELS[field]} successfully updated.\n")
    return profile
