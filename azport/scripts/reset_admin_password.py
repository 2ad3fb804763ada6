"""
Set a user's password from the shell, e.g. when the admin password is lost.
Usage: python -m azport.scripts.reset_admin_password <username> <new-password>
"""
import sys

from azport.database import SessionLocal, init_db
from azport.repos.user_repo import get_by_username, set_password


def main():
    if len(sys.argv) < 3:
        print("Usage: python -m azport.scripts.reset_admin_password <username> <new-password>")
        sys.exit(1)
    username = sys.argv[1].strip()
    password = sys.argv[2]
    init_db()
    db = SessionLocal()
    try:
        user = get_by_username(db, username)
        if not user:
            print(f"User not found: {username}")
            sys.exit(1)
        set_password(db, user.id, password)
        print(f"Password updated for {username}.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
