import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from azport.database import get_db
from azport.dependencies import get_current_user
from azport.models.category import Category
from azport.models.user import User
from azport.repos import category_repo
from azport.schemas.category import CategoryPayload

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/categories", tags=["categories"])


def category_to_response(c: Category) -> dict:
    return {
        "id": c.id,
        "name": c.name,
        "description": c.description or "",
        "created_at": c.created_at.isoformat() if c.created_at else None,
    }


def _require_id(category_id: int | None) -> int:
    if category_id is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category ID is required")
    return category_id


@router.get("")
def list_categories(db: Session = Depends(get_db)):
    """All categories ordered by name. Public."""
    return [category_to_response(c) for c in category_repo.get_all(db)]


@router.post("", status_code=status.HTTP_201_CREATED)
def create_category(
    data: CategoryPayload,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    if not data.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name is required")
    try:
        if category_repo.get_by_name(db, data.name):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")
        category = category_repo.create(db, data.name, data.description)
        logger.info("Category created: %s by %s", category.name, user.username)
        return category_to_response(category)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Category create failed: %s", e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to create category") from e


@router.put("")
def update_category(
    data: CategoryPayload,
    id: int | None = None,
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """Rename/describe a category. Products follow the rename since they reference the id."""
    category_id = _require_id(id)
    if not data.name:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name is required")
    try:
        if not category_repo.get_by_id(db, category_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
        other = category_repo.get_by_name(db, data.name)
        if other and other.id != category_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name already exists")
        category = category_repo.update(db, category_id, name=data.name, description=data.description)
        logger.info("Category updated: id=%s name=%s by %s", category.id, category.name, user.username)
        return category_to_response(category)
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Category update failed for id=%s: %s", category_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to update category") from e


@router.delete("")
def delete_category(
    id: int | None = None,
    reassign_to: str | None = Query(default=None, alias="reassignTo"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    """
    Delete a category. A category still used by products is only deleted when
    ?reassignTo=<name> names another existing category to move them to.
    """
    category_id = _require_id(id)
    try:
        category = category_repo.get_by_id(db, category_id)
        if not category:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
        in_use = category_repo.count_products(db, category.id)
        if in_use and not reassign_to:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={
                    "message": "Cannot delete category that is being used by products",
                    "canReassign": True,
                    "productsCount": in_use,
                },
            )
        if in_use:
            target = category_repo.get_by_name(db, reassign_to)
            if not target:
                raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Target category not found")
            if target.id == category.id:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="Cannot reassign products to the category being deleted",
                )
            reassigned = category_repo.reassign_and_delete(db, category, target)
        else:
            category_repo.delete(db, category)
            reassigned = 0
        logger.info("Category deleted: id=%s by %s", category_id, user.username)
        return {"message": "Category deleted successfully", "reassigned": reassigned}
    except HTTPException:
        raise
    except Exception as e:
        logger.exception("Category delete failed for id=%s: %s", category_id, e)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to delete category") from e
