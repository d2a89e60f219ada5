"""Seed a demo account for local development."""
from taskboard.database import Database
from taskboard.models import User
from taskboard.security import hash_password

EMAIL = "test@example.com"
PASSWORD = "password"

database = Database()

# Create tables if not exist
database.create_tables()

with database.session() as db:
    existing_user = db.query(User).filter(User.email == EMAIL).first()
    if existing_user:
        print("User already exists")
    else:
        user = User(name="Test User", email=EMAIL, hashed_password=hash_password(PASSWORD))
        db.add(user)
        db.commit()
        print(f"Test user created: {EMAIL} / {PASSWORD}")
