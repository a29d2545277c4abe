# backend/routes/common.py
import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from utils.errors import GameRentalError, TransactionError

logger = logging.getLogger(__name__)


def menu_action(func):
    """Error boundary of a menu entry.

    Domain errors become an operator message and control returns to the menu;
    the session keeps running.
    """
    @functools.wraps(func)
    def wrapper(db, prompter, *args, **kwargs):
        try:
            return func(db, prompter, *args, **kwargs)
        except TransactionError as e:
            prompter.say(f"\nSQL Error: {e.reason}")
            prompter.say("System rollback, no changes made.")
        except GameRentalError as e:
            prompter.say(str(e))
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Query failed in %s", func.__name__)
            prompter.say(f"Error executing query: {e}")
        return None
    return wrapper


def choose(prompter, title, options):
    """Print numbered options and return the key of the chosen one."""
    prompter.say(title)
    for i, (_, label) in enumerate(options, start=1):
        prompter.say(f"{i}. {label}")
    choice = prompter.prompt_int("Enter your choice: ")
    if not 1 <= choice <= len(options):
        return None
    return options[choice - 1][0]
