"""
Idempotent database setup: tables, forward-compatible columns, and seed data.

Every step is guarded by an existence check, so running it against an
already-populated database changes nothing.
"""
import json
import logging
import threading
from pathlib import Path

from sqlalchemy.orm import Session

from azport.config import settings
from azport.database import SessionLocal, init_db
from azport.repos import category_repo, job_opening_repo, product_repo, user_repo

logger = logging.getLogger(__name__)

BUNDLED_PRODUCTS_PATH = Path(__file__).resolve().parents[1] / "data" / "products.json"

DEFAULT_CATEGORIES = [
    ("Industrial Equipment", "Heavy-duty industrial machinery and equipment"),
    ("Safety Gear", "Personal protective equipment and safety solutions"),
    ("Measurement Tools", "Precision measurement and testing instruments"),
    ("Fluid Control", "Valves, pumps, and fluid management systems"),
    ("Power Systems", "Power generation and electrical equipment"),
    ("Construction Equipment", "Tools and equipment for construction projects"),
]

DEFAULT_JOB_OPENINGS = [
    {
        "title": "Supply Chain Manager",
        "department": "operations",
        "location": "Baku, Azerbaijan",
        "type": "Full-time",
        "description": "Leading and optimizing supply chain operations...",
    },
    {
        "title": "Sales Representative",
        "department": "sales",
        "location": "Baku, Azerbaijan",
        "type": "Full-time",
        "description": "Developing and maintaining client relationships...",
    },
    {
        "title": "Logistics Coordinator",
        "department": "logistics",
        "location": "Baku, Azerbaijan",
        "type": "Full-time",
        "description": "Coordinating shipment schedules and delivery routes...",
    },
]

FALLBACK_PRODUCT = {
    "name": "Sample Product",
    "description": "A sample product created automatically",
    "image": "https://placehold.co/600x400?text=Sample+Product",
    "specs": ["Sample specification 1", "Sample specification 2"],
    "useCases": ["Sample use case 1", "Sample use case 2"],
    "category": "Sample Category",
}

_init_lock = threading.Lock()


class SchemaInitError(RuntimeError):
    pass


def load_seed_products(path: str | Path | None = None) -> list[dict]:
    """Read sample products from JSON, falling back to a single synthetic product."""
    path = Path(path or settings.seed_products_path or BUNDLED_PRODUCTS_PATH)
    if not path.is_file():
        logger.info("Seed products file %s not found; using default product as fallback", path)
        return [FALLBACK_PRODUCT]
    try:
        products = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Could not read seed products from %s (%s); using default product as fallback", path, e)
        return [FALLBACK_PRODUCT]
    if not isinstance(products, list) or not products:
        logger.warning("Seed products file %s holds no product list; using default product as fallback", path)
        return [FALLBACK_PRODUCT]
    logger.info("Loaded %d seed products from %s", len(products), path)
    return products


def seed_products(db: Session) -> int:
    """Insert sample products if the table is empty. Returns the number inserted."""
    if product_repo.count(db):
        return 0
    created = 0
    for item in load_seed_products():
        category_name = (item.get("category") or "").strip()
        category = category_repo.get_or_create(db, category_name) if category_name else None
        product_repo.create(
            db,
            id=item.get("id"),
            name=item["name"],
            description=item.get("description"),
            image=item.get("image"),
            specs=item.get("specs"),
            use_cases=item.get("useCases"),
            category_id=category.id if category else None,
            images=item.get("images"),
            document=item.get("document"),
        )
        created += 1
    return created


def initialize_database(db: Session | None = None) -> dict:
    """
    Ensure tables, columns, admin user, default categories, sample products and
    default job openings exist. Returns how many rows each step created.
    """
    with _init_lock:
        own_session = db is None
        try:
            init_db()
            if own_session:
                db = SessionLocal()
            _, admin_created = user_repo.ensure_admin(db, settings.admin_username, settings.admin_password)
            if admin_created:
                logger.info("Admin user created: %s", settings.admin_username)
            _, categories_created = category_repo.seed_default_categories(db, DEFAULT_CATEGORIES)
            products_created = seed_products(db)
            _, jobs_created = job_opening_repo.seed_default_job_openings(db, DEFAULT_JOB_OPENINGS)
            summary = {
                "admin_created": admin_created,
                "categories_created": categories_created,
                "products_created": products_created,
                "job_openings_created": jobs_created,
            }
            logger.info("Database initialized: %s", summary)
            return summary
        except Exception as e:
            if db is not None:
                db.rollback()
            logger.exception("Database initialization error: %s", e)
            raise SchemaInitError("Database initialization failed") from e
        finally:
            if own_session and db is not None:
                db.close()
