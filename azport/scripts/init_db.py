"""
Create tables and seed default data.
Usage: python -m azport.scripts.init_db
"""
import sys

from azport.logging_config import setup_logging
from azport.services.schema_initializer import SchemaInitError, initialize_database


def main() -> int:
    setup_logging()
    try:
        summary = initialize_database()
    except SchemaInitError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    print("Database initialized:", ", ".join(f"{k}={v}" for k, v in summary.items()))
    return 0


if __name__ == "__main__":
    sys.exit(main())
