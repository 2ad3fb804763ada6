import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from azport.database import get_db
from azport.dependencies import get_current_user
from azport.models.product import Product
from azport.models.user import User
from azport.repos import product_repo
from azport.repos.category_repo import get_by_name as get_category_by_name
from azport.schemas.product import ProductPayload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/products", tags=["products"])


def product_to_response(p: Product) -> dict:
    return {
        "id": p.id,
        "name": p.name,
        "description": p.description or "",
        "image": p.image or "",
        "specs": p.specs,
        "useCases": p.use_cases,
        "category": p.category.name if p.category else "",
        "images": p.images,
        "document": p.document,
        "created_at": p.created_at.isoformat() if p.created_at else None,
    }


def _fields_from_payload(db: Session, data: ProductPayload) -> dict:
    """Validate a product body and map it onto repo keyword arguments."""
    if not data.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product name is required")
    category_id = None
    if data.category:
        category = get_category_by_name(db, data.category)
        if not category:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Category not found: {data.category}")
        category_id = category.id
    return {
        "name": data.name,
        "description": data.description,
        "image": data.image,
        "specs": data.specs,
        "use_cases": data.use_cases,
        "category_id": category_id,
        "images": data.images,
        "document": data.document,
    }


def _require_id(product_id: int | None) -> int:
    if product_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Product ID is required")
    return product_id


@router.get("")
def list_products(id: int | None = None, db: Session = Depends(get_db)):
    """All products, or a single one with ?id=N. Public."""
    if id is not None:
        product = product_repo.get_by_id(db, id)
        if not product:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
        return product_to_response(product)
    return [product_to_response(p) for p in product_repo.get_all(db)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    fields = _fields_from_payload(db, data)
    try:
        product = product_repo.create(db, **fields)
        logger.info("Product created: id=%s name=%s by %s", product.id, product.name, user.username)
        return product_to_response(product)
    except Exception as e:
        logger.exception("Product create failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create product") from e


@router.put("")
def update_product(
    data: ProductPayload,
    id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    product_id = _require_id(id)
    fields = _fields_from_payload(db, data)
    try:
        product = product_repo.update(db, product_id, **fields)
    except Exception as e:
        logger.exception("Product update failed for id=%s: %s", product_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update product") from e
    if not product:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    logger.info("Product updated: id=%s by %s", product.id, user.username)
    return product_to_response(product)


@router.delete("")
def delete_product(
    id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    product_id = _require_id(id)
    try:
        deleted = product_repo.delete(db, product_id)
    except Exception as e:
        logger.exception("Product delete failed for id=%s: %s", product_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete product") from e
    if not deleted:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Product not found")
    logger.info("Product deleted: id=%s by %s", product_id, user.username)
    return {"message": "Product deleted successfully"}
