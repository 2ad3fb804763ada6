import logging

from sqlalchemy.orm import Session

from azport.models.category import Category
from azport.models.product import Product

logger = logging.getLogger(__name__)


def get_all(db: Session) -> list[Category]:
    return db.query(Category).order_by(Category.name.asc()).all()


def get_by_id(db: Session, category_id: int) -> Category | None:
    return db.query(Category).filter(Category.id == category_id).first()


def get_by_name(db: Session, name: str) -> Category | None:
    return db.query(Category).filter(Category.name == name).first()


def create(db: Session, name: str, description: str | None = None) -> Category:
    cat = Category(name=name, description=description or "")
    db.add(cat)
    db.commit()
    db.refresh(cat)
    return cat


def update(db: Session, category_id: int, *, name: str, description: str | None = None) -> Category | None:
    cat = get_by_id(db, category_id)
    if not cat:
        return None
    cat.name = name
    cat.description = description or ""
    db.commit()
    db.refresh(cat)
    return cat


def get_or_create(db: Session, name: str) -> Category:
    return get_by_name(db, name) or create(db, name)


def count_products(db: Session, category_id: int) -> int:
    return db.query(Product).filter(Product.category_id == category_id).count()


def delete(db: Session, category: Category) -> None:
    db.delete(category)
    db.commit()


def reassign_and_delete(db: Session, category: Category, target: Category) -> int:
    """
    Move every product of `category` to `target`, then delete `category`.
    Both happen in one transaction. Returns the number of products moved.
    """
    source_name, target_name = category.name, target.name
    try:
        moved = (
            db.query(Product)
            .filter(Product.category_id == category.id)
            .update({Product.category_id: target.id}, synchronize_session=False)
        )
        db.delete(category)
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Deleted category %s after moving %d products to %s", source_name, moved, target_name)
    return moved


def count(db: Session) -> int:
    return db.query(Category).count()


def seed_default_categories(db: Session, defaults: list[tuple[str, str]]) -> tuple[list[Category], int]:
    """
    Seed categories if table is empty.
    Returns (list of categories, number_created). number_created is 0 if table already had rows.
    """
    existing = get_all(db)
    if existing:
        return existing, 0
    created = [create(db, name, description) for name, description in defaults]
    return created, len(created)
