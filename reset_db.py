import logging

from app.config import settings
from app.db.init_db import reset_database

if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)

    confirm = input(f"This will DELETE ALL DATA in {settings.DATABASE_URL}. Are you sure? (y/n): ")
    if confirm.lower() == 'y':
        reset_database()
        print("Database has been reset successfully!")
        print("Run 'python run.py' to start the application.")
    else:
        print("Operation cancelled.")
