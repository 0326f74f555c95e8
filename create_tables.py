# create_tables.py
from sqlalchemy import text
from app.config.settings import load_settings
from app.database import Database

def create_tables(drop: bool = False):
    """Create the users and tasks tables on the configured database"""
    database = Database.from_settings(load_settings().database)
    try:
        if drop:
            with database.engine.begin() as conn:
                conn.execute(text("DROP TABLE IF EXISTS tasks"))
                conn.execute(text("DROP TABLE IF EXISTS users"))
        database.create_all()
        print("✅ Tables users and tasks are ready")
    finally:
        database.close()

if __name__ == "__main__":
    import sys
    create_tables(drop="--drop" in sys.argv)
