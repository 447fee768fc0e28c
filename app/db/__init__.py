from app.db.models import Base
from app.db.database import engine, get_db

# Import the comprehensive initialization function
from app.db.init_db import init_database

# Create tables if they don't exist
def init_db():
    """Initialize the database - create the tables if needed."""
    init_database()
