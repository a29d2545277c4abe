import os
import logging
import pandas as pd

from database import get_db, init_db
from models.catalog import CatalogEntry
from models.counter import IdCounter
from models.users import User
from utils.hashing import get_password_hash

logger = logging.getLogger(__name__)

# Configuration
DATA_DIR = os.path.join(os.path.dirname(__file__), "data_source")
# End Configuration


def _clean(value):
    return None if pd.isna(value) else value


def load_users(session, users_df: pd.DataFrame) -> int:
    users_df = users_df.fillna({"role": "customer", "fav_games": "", "num_overdue_games": 0})
    count = 0
    for _, row in users_df.iterrows():
        login = str(row["login"]).strip()
        user = session.query(User).filter(User.login == login).first() or User(login=login)
        user.password_hash = get_password_hash(str(row["password"]))
        user.role = str(row["role"]).strip().lower()
        user.fav_games = str(row["fav_games"])
        user.phone_num = _clean(row.get("phone_num"))
        user.num_overdue_games = int(row["num_overdue_games"])
        session.add(user)
        count += 1
    return count


def load_catalog(session, catalog_df: pd.DataFrame) -> int:
    catalog_df = catalog_df.dropna(subset=["game_id", "game_name", "price"])
    count = 0
    for _, row in catalog_df.iterrows():
        game_id = str(row["game_id"]).strip()
        game = session.query(CatalogEntry).filter(CatalogEntry.game_id == game_id).first() or CatalogEntry(game_id=game_id)
        game.game_name = row["game_name"]
        game.genre = _clean(row.get("genre"))
        game.price = round(float(row["price"]), 2)
        game.description = _clean(row.get("description"))
        game.image_url = _clean(row.get("image_url"))
        session.add(game)
        count += 1
    return count


def load_all_data(data_dir: str = DATA_DIR, session=None):
    """Loads users and catalog CSV files into the database."""
    if session is None:
        with get_db() as db:
            return load_all_data(data_dir, session=db)

    try:
        users_df = pd.read_csv(os.path.join(data_dir, "users.csv"), dtype={"phone_num": str})
        catalog_df = pd.read_csv(os.path.join(data_dir, "catalog.csv"))
    except FileNotFoundError:
        print(f"Error: CSV files not found in {data_dir}.")
        return None

    try:
        users = load_users(session, users_df)
        games = load_catalog(session, catalog_df)
        # Counters are reseeded from the stored ids on next allocation
        session.query(IdCounter).delete()
        session.commit()
    except Exception:
        session.rollback()
        raise

    logger.info("Loaded %d users and %d games", users, games)
    print(f"Loaded {users} users and {games} games.")
    return users, games


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    load_all_data()
