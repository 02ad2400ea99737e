"""Task category endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tidyhome.api.deps import get_current_user
from tidyhome.database import get_db
from tidyhome.models.category import Category, DEFAULT_CATEGORY_COLOR
from tidyhome.models.user import User
from tidyhome.schemas.category import CategoryResponse, CategoryWrite

router = APIRouter()


def get_category_for_user(category_id: int, user_id: int, db: Session) -> Category:
    """
    Load a category owned by the user.

    Raises:
        HTTPException: 404 if not found or owned by someone else
    """
    category = db.query(Category).filter(
        Category.id == category_id,
        Category.user_id == user_id
    ).first()

    if not category:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Category not found"
        )

    return category


def validated_fields(data: CategoryWrite) -> dict:
    """Return name and colour to store, defaulting the colour."""
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name is required"
        )
    return {"name": name, "color": data.color or DEFAULT_CATEGORY_COLOR}


@router.get("", response_model=List[CategoryResponse])
def list_categories(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's categories, ordered by name."""
    return db.query(Category).filter(
        Category.user_id == current_user.id
    ).order_by(Category.name).all()


@router.post("", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    category_data: CategoryWrite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Create a category.

    Raises:
        HTTPException: 400 if the name is empty
    """
    new_category = Category(user_id=current_user.id, **validated_fields(category_data))

    db.add(new_category)
    db.commit()
    db.refresh(new_category)

    return new_category


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category_data: CategoryWrite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Rename or recolour a category. A missing colour resets it to the default.

    Raises:
        HTTPException: 404 if not found, 400 if the name is empty
    """
    category = get_category_for_user(category_id, current_user.id, db)
    for field, value in validated_fields(category_data).items():
        setattr(category, field, value)

    db.commit()
    db.refresh(category)

    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a category. Its tasks are kept without a category."""
    category = get_category_for_user(category_id, current_user.id, db)

    db.delete(category)
    db.commit()

    return None
