#!/usr/bin/env python3
"""Script to create an API user."""

import sys
import os

# Add parent directory to path to import app modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from translations_api import create_app, db
from translations_api.models import User


def create_user(email: str, password: str, name: str = None) -> bool:
    """Create a user that can log in to the API.
    
    Args:
        email: Login email (stored lowercased)
        password: Plain-text password, hashed before storage
        name: Display name, defaults to the part of the email before '@'
        
    Returns:
        True if the user was created, False if the email is taken
    """
    email = email.strip().lower()
    
    if User.query.filter_by(email=email).first():
        print(f"A user with email {email} already exists")
        return False
    
    user = User(name=name or email.split('@')[0], email=email)
    user.set_password(password)
    
    try:
        db.session.add(user)
        db.session.commit()
        print(f"User created: {user.email} (ID: {user.id})")
        return True
    except Exception as e:
        db.session.rollback()
        print(f"Error creating user: {str(e)}")
        return False


if __name__ == '__main__':
    if len(sys.argv) not in (3, 4):
        print("Usage: python create_user.py <email> <password> [name]")
        sys.exit(1)
    
    app = create_app()
    with app.app_context():
        ok = create_user(*sys.argv[1:])
    sys.exit(0 if ok else 1)
