#!/usr/bin/env python3
"""
Create database tables and a default clinician account.
Run with: python init_clinician.py
Credentials can be overridden with INIT_USERNAME / INIT_EMAIL / INIT_PASSWORD.
"""
import os

from pregnancy_tracker import create_app
from pregnancy_tracker.extensions import db
from pregnancy_tracker.models import Clinician

DEFAULT_CLINICIAN = {
    'username': os.getenv('INIT_USERNAME', 'clinician'),
    'email': os.getenv('INIT_EMAIL', 'clinician@example.com'),
    'password': os.getenv('INIT_PASSWORD', 'clinician123'),
    'first_name': 'Default',
    'last_name': 'Clinician',
}


def init_db():
    """Create tables and the default clinician if missing"""
    app = create_app()

    with app.app_context():
        print("=" * 60)
        print("Initializing Pregnancy Tracker database")
        print("=" * 60)

        db.create_all()
        print(f"  ✓ Tables ready ({app.config['SQLALCHEMY_DATABASE_URI']})")

        username = DEFAULT_CLINICIAN['username']
        if Clinician.query.filter_by(username=username).first():
            print(f"  - Clinician '{username}' already exists (skipping)")
            return

        clinician = Clinician(
            username=username,
            email=DEFAULT_CLINICIAN['email'],
            first_name=DEFAULT_CLINICIAN['first_name'],
            last_name=DEFAULT_CLINICIAN['last_name'],
            is_active=True
        )
        clinician.set_password(DEFAULT_CLINICIAN['password'])
        db.session.add(clinician)
        db.session.commit()

        print(f"  ✓ Created: {username} - Password: {DEFAULT_CLINICIAN['password']}")
        print("\n⚠️  IMPORTANT: Change the password after first login!")


if __name__ == '__main__':
    init_db()
