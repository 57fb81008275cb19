#!/usr/bin/env python3
"""
Script to create a staff (admin) user for the FastTrack dashboard.
Uses the database configured by DATABASE_URL, or the local sqlite file.
"""

from fasttrack import create_app
from fasttrack.extensions import db
from fasttrack.models import User


def create_admin_user(email, password, username, first_name='', last_name=''):
    """
    Create a staff user, or promote an existing account to staff.

    Args:
        email: Admin email address
        password: Admin password (will be hashed)
        username: Unique username
        first_name: Optional first name
        last_name: Optional last name
    """
    user = User.query.filter_by(email=email).first()
    if user:
        print(f"User with email {email} already exists!")
        print(f"   Current role: {user.role}")

        update = input("Do you want to update this user to admin role? (yes/no): ").lower()
        if update == 'yes':
            user.role = 'admin'
            db.session.commit()
            print(f"User {email} updated to admin role!")
        return

    if User.query.filter_by(username=username).first():
        print(f"Username {username} is already taken.")
        return

    user = User(
        email=email,
        username=username,
        first_name=first_name or None,
        last_name=last_name or None,
        role='admin'
    )
    user.set_password(password)
    db.session.add(user)
    db.session.commit()

    print("Admin user created successfully!")
    print(f"   Email: {email}")
    print(f"   Username: {username}")
    print("   Role: admin")
    print("\nYou can now log in with these credentials at /login")


def main():
    print("=" * 60)
    print("FastTrack - Admin User Creation")
    print("=" * 60)
    print()

    print("Enter admin user details:")
    email = input("Email: ").strip().lower()
    password = input("Password: ").strip()
    username = input("Username: ").strip().lower()
    first_name = input("First name (optional): ").strip()
    last_name = input("Last name (optional): ").strip()

    confirm = input("Proceed? (yes/no): ").lower()
    if confirm != 'yes':
        print("Admin creation cancelled.")
        return

    app = create_app()
    with app.app_context():
        db.create_all()
        create_admin_user(email, password, username, first_name, last_name)


if __name__ == '__main__':
    main()
