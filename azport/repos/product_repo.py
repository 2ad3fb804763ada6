from sqlalchemy.orm import Session

from azport.models.product import Product


def get_all(db: Session) -> list[Product]:
    return db.query(Product).order_by(Product.id.asc()).all()


def get_by_id(db: Session, product_id: int) -> Product | None:
    return db.query(Product).filter(Product.id == product_id).first()


def create(
    db: Session,
    *,
    name: str,
    description: str | None = None,
    image: str | None = None,
    specs: list[str] | None = None,
    use_cases: list[str] | None = None,
    category_id: int | None = None,
    images: list[str] | None = None,
    document: str | None = None,
    id: int | None = None,
) -> Product:
    product = Product(
        id=id,
        name=name,
        description=description or "",
        image=image or "",
        specs=list(specs or []),
        use_cases=list(use_cases or []),
        category_id=category_id,
        images=list(images or []),
        document=document,
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def update(
    db: Session,
    product_id: int,
    *,
    name: str,
    description: str | None = None,
    image: str | None = None,
    specs: list[str] | None = None,
    use_cases: list[str] | None = None,
    category_id: int | None = None,
    images: list[str] | None = None,
    document: str | None = None,
) -> Product | None:
    """Replace every editable field of a product. Returns None if it does not exist."""
    product = get_by_id(db, product_id)
    if not product:
        return None
    product.name = name
    product.description = description or ""
    product.image = image or ""
    product.specs = list(specs or [])
    product.use_cases = list(use_cases or [])
    product.category_id = category_id
    product.images = list(images or [])
    product.document = document
    db.commit()
    db.refresh(product)
    return product


def delete(db: Session, product_id: int) -> bool:
    product = get_by_id(db, product_id)
    if not product:
        return False
    db.delete(product)
    db.commit()
    return True


def count(db: Session) -> int:
    return db.query(Product).count()
