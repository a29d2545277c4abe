# backend/main.py
import argparse
import logging
import sys

from config import settings
from database import connect
from schemas.user import UserSession
from utils.errors import DatabaseConnectionError, EndOfInput, InputError
from utils.prompt import Prompter

# Menu actions
from routes.auth import create_user, log_in
from routes.profile import view_profile, update_profile
from routes.catalog import view_catalog, update_catalog
from routes.orders import place_order, view_all_orders, view_recent_orders, view_order_info
from routes.tracking import view_tracking_info, update_tracking_info
from routes.admin import update_user

logger = logging.getLogger(__name__)

LOGOUT = 20

# choice -> (label, action); each action takes (db, prompter, session)
USER_MENU = {
    1: ("View Profile", view_profile),
    2: ("Update Profile", update_profile),
    3: ("View Catalog", view_catalog),
    4: ("Place Rental Order", place_order),
    5: ("View Full Rental Order History", view_all_orders),
    6: ("View Past 5 Rental Orders", view_recent_orders),
    7: ("View Rental Order Information", view_order_info),
    8: ("View Tracking Information", view_tracking_info),
    # staff
    9: ("Update Tracking Information", update_tracking_info),
    # managers
    10: ("Update Catalog", update_catalog),
    11: ("Update User", update_user),
}


def configure_logging():
    logging.basicConfig(
        filename=settings.LOG_FILE,
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def greeting(prompter):
    prompter.say(
        "\n\n*******************************************************\n"
        "              Game Rental User Interface\n"
        "*******************************************************\n"
    )


def read_choice(prompter) -> int:
    # Returns only once a whole number is given
    while True:
        try:
            return prompter.prompt_int("Please make your choice: ")
        except EndOfInput:
            raise
        except InputError:
            prompter.say("Your input is invalid!")


def user_menu(db, prompter, session: UserSession):
    while True:
        prompter.say("MAIN MENU")
        prompter.say("---------")
        for choice, (label, _) in USER_MENU.items():
            prompter.say(f"{choice}. {label}")
        prompter.say(".........................")
        prompter.say(f"{LOGOUT}. Log out")

        choice = read_choice(prompter)
        if choice == LOGOUT:
            logger.info("%s logged out", session.login)
            return
        entry = USER_MENU.get(choice)
        if entry is None:
            prompter.say("Unrecognized choice!")
            continue

        result = entry[1](db, prompter, session)
        # Profile edits can rename the account or change its role
        if isinstance(result, UserSession):
            session = result


def main_menu(db, prompter):
    while True:
        prompter.say("MAIN MENU")
        prompter.say("---------")
        prompter.say("1. Create user")
        prompter.say("2. Log in")
        prompter.say("9. < EXIT")

        choice = read_choice(prompter)
        if choice == 1:
            create_user(db, prompter)
        elif choice == 2:
            session = log_in(db, prompter)
            if session is not None:
                user_menu(db, prompter, session)
        elif choice == 9:
            return
        else:
            prompter.say("Unrecognized choice!")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="gamerental", description="Game rental store terminal client")
    parser.add_argument("--database-url", help="SQLAlchemy database URL (defaults to DATABASE_URL)")
    return parser.parse_args(argv)


def main(argv=None, prompter=None) -> int:
    args = parse_args(argv)
    configure_logging()
    prompter = prompter or Prompter()

    greeting(prompter)
    prompter.say("Connecting to database...")
    try:
        db = connect(url=args.database_url)
    except DatabaseConnectionError as e:
        print(f"Error - Unable to Connect to Database: {e}", file=sys.stderr)
        return 1
    prompter.say("Done")

    try:
        main_menu(db, prompter)
    except EndOfInput:
        # Input stream closed, nothing left to read
        logger.info("Input closed, leaving")
    finally:
        prompter.say("Disconnecting from database...")
        db.close()
        prompter.say("Done\n\nBye !")
    return 0


if __name__ == "__main__":
    sys.exit(main())
