# backend/routes/profile.py
from routes.common import choose, menu_action
from services import profile as profile_service
from utils.audit import write_log
from utils.permissions import Capability, has_capability


@menu_action
def view_profile(db, prompter, session):
    p = profile_service.get_profile(db, session)
    prompter.say("\nProfile Information:")
    prompter.say(f"Username: {p.login}")
    prompter.say(f"Favorite Games: {p.fav_games}")
    prompter.say(f"Phone Number: {p.phone_num or ''}")
    prompter.say(f"# of Overdue Games: {p.num_overdue_games}")
    prompter.say()


@menu_action
def update_profile(db, prompter, session):
    """Returns the new session when the login or role changed."""
    options = [("password", "Change Password"), ("phone", "Update Phone Number")]
    if has_capability(session.role, Capability.EDIT_OWN_ACCOUNT):
        options += [
            ("login", "Change Login (Manager only)"),
            ("role", "Update Role (Manager only)"),
            ("overdue", "Update Number of Overdue Games (Manager only)"),
        ]

    field = choose(prompter, "", options)
    if field is None:
        prompter.say("Invalid choice.\n")
        return None

    updated = None
    if field == "password":
        old = prompter.prompt_line("Enter your old password: ")
        new = prompter.prompt_line("Enter your new password: ")
        profile_service.change_password(db, session, old, new)
        prompter.say("Password updated successfully.\n")
    elif field == "phone":
        old = prompter.prompt_line("Enter your old password: ")
        phone = prompter.prompt_line("Enter your new phone number: ")
        profile_service.change_phone(db, session, old, phone)
        prompter.say("Phone number updated successfully.\n")
    elif field == "login":
        new_login = prompter.prompt_line("Enter your new login: ")
        updated = profile_service.change_login(db, session, new_login)
        prompter.say("Username updated successfully.\n")
    elif field == "role":
        prompter.say("WARNING: Changing your role to non-manager is irreversible without another manager's authority!")
        new_role = prompter.prompt_line("Enter your new role (manager, employee, customer): ")
        updated = profile_service.change_role(db, session, new_role)
        prompter.say("Role updated successfully.\n")
    elif field == "overdue":
        count = prompter.prompt_int("Enter new # of overdue games (>= 0): ")
        profile_service.set_overdue_games(db, session, count)
        prompter.say("Overdue games updated successfully.\n")

    write_log(db, user_login=(updated or session).login, action="PROFILE_UPDATE", resource="users",
              status="SUCCESS", meta={"field": field, "old_login": session.login})
    return updated
