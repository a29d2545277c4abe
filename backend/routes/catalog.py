# backend/routes/catalog.py
from pydantic import ValidationError

from routes.common import choose, menu_action
from schemas.catalog import CatalogFilter
from services import catalog as catalog_service
from utils.audit import write_log
from utils.display import format_table, money
from utils.errors import InputError
from utils.permissions import Capability, require_capability


@menu_action
def view_catalog(db, prompter, session=None):
    mode = choose(prompter, "Choose filter option:", [
        ("none", "No Filter"), ("genre", "Filter by Genre"), ("price", "Filter by Price"),
    ])
    flt = {}
    if mode == "genre":
        flt["genre"] = prompter.prompt_line("Enter genre: ").strip()
    elif mode == "price":
        flt["max_price"] = prompter.prompt_decimal("Enter maximum price: ")

    order = choose(prompter, "Choose sorting option:", [
        ("asc", "Price: Lowest to Highest"), ("desc", "Price: Highest to Lowest"),
    ])
    flt["order"] = order or "desc"

    try:
        games = catalog_service.browse(db, CatalogFilter(**flt))
    except ValidationError:
        raise InputError("Maximum price must be a non-negative number.")

    if not games:
        prompter.say("No games match that filter.")
        return games

    prompter.say(format_table(
        ["Game ID", "Name", "Genre", "Price", "Details"],
        [[g.game_id, g.game_name, g.genre, money(g.price), g.description] for g in games],
    ))
    return games


@menu_action
def update_catalog(db, prompter, session):
    require_capability(session, Capability.UPDATE_CATALOG)

    game_id = prompter.prompt_line("\nEnter gameID to update: ")
    game = catalog_service.get_game(db, game_id)

    field = choose(prompter, "", [
        ("name", "Update Game Name"),
        ("genre", "Update Genre"),
        ("price", "Update Price"),
        ("description", "Update Description"),
        ("image_url", "Update Image URL"),
    ])
    if field is None:
        prompter.say("Invalid choice.\n")
        return None

    value = prompter.prompt_line(f"Enter the updated game {field.replace('_', ' ')}: ")
    game = catalog_service.update_game(db, session, game.game_id, field, value)

    write_log(db, user_login=session.login, action="CATALOG_UPDATE", resource="catalog",
              status="SUCCESS", meta={"game_id": game.game_id, "field": field})
    prompter.say(f"Game {field.replace('_', ' ')} successfully updated.\n")
    return game
