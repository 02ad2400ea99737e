"""Household member endpoints."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from tidyhome.api.deps import get_current_user
from tidyhome.database import get_db
from tidyhome.models.member import Member
from tidyhome.models.user import User
from tidyhome.schemas.member import MemberResponse, MemberWrite

router = APIRouter()


def get_member_for_user(member_id: int, user_id: int, db: Session) -> Member:
    """
    Load a member owned by the user.

    Raises:
        HTTPException: 404 if not found or owned by someone else
    """
    member = db.query(Member).filter(
        Member.id == member_id,
        Member.user_id == user_id
    ).first()

    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )

    return member


def require_name(data: MemberWrite) -> str:
    name = (data.name or "").strip()
    if not name:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Name is required"
        )
    return name


@router.get("", response_model=List[MemberResponse])
def list_members(
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the current user's household members, ordered by name."""
    return db.query(Member).filter(
        Member.user_id == current_user.id
    ).order_by(Member.name).all()


@router.post("", response_model=MemberResponse, status_code=status.HTTP_201_CREATED)
def create_member(
    member_data: MemberWrite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Add a household member.

    Raises:
        HTTPException: 400 if the name is empty
    """
    new_member = Member(user_id=current_user.id, name=require_name(member_data))

    db.add(new_member)
    db.commit()
    db.refresh(new_member)

    return new_member


@router.put("/{member_id}", response_model=MemberResponse)
def update_member(
    member_id: int,
    member_data: MemberWrite,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Rename a household member.

    Raises:
        HTTPException: 404 if not found, 400 if the name is empty
    """
    member = get_member_for_user(member_id, current_user.id, db)
    member.name = require_name(member_data)

    db.commit()
    db.refresh(member)

    return member


@router.delete("/{member_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_member(
    member_id: int,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Remove a household member.

    Tasks assigned to the member become unassigned and their completions
    lose the completer, but both are kept.
    """
    member = get_member_for_user(member_id, current_user.id, db)

    db.delete(member)
    db.commit()

    return None
