from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from . import donation_models, supporter_models, supporter_schemas
from .auth_routes import current_account
from .database import get_db

router = APIRouter(prefix="/supporters", tags=["supporters"], dependencies=[Depends(current_account)])


def _get_or_404(db: Session, supporter_id: int) -> supporter_models.Supporter:
    supporter = db.query(supporter_models.Supporter).filter(supporter_models.Supporter.id == supporter_id).first()
    if not supporter:
        raise HTTPException(status_code=404, detail="Supporter not found")
    return supporter


def _require_donation(db: Session, donation_id: int) -> None:
    exists = db.query(donation_models.Donation.id).filter(donation_models.Donation.id == donation_id).first()
    if not exists:
        raise HTTPException(status_code=404, detail=f"Donation {donation_id} not found")


@router.get("", response_model=List[supporter_schemas.Supporter])
def list_supporters(db: Session = Depends(get_db)):
    return db.query(supporter_models.Supporter).order_by(supporter_models.Supporter.id).all()


@router.post("", response_model=supporter_schemas.Supporter)
def create_supporter(payload: supporter_schemas.SupporterCreate, db: Session = Depends(get_db)):
    _require_donation(db, payload.donation_id)
    supporter = supporter_models.Supporter(**payload.model_dump())
    db.add(supporter)
    db.commit()
    db.refresh(supporter)
    return supporter


@router.get("/{supporter_id}", response_model=supporter_schemas.Supporter)
def get_supporter(supporter_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, supporter_id)


@router.put("/{supporter_id}", response_model=supporter_schemas.Supporter)
def update_supporter(supporter_id: int, payload: supporter_schemas.SupporterUpdate, db: Session = Depends(get_db)):
    supporter = _get_or_404(db, supporter_id)
    # Re-sending the current link is always allowed, even if that donation is gone
    if payload.donation_id != supporter.donation_id:
        _require_donation(db, payload.donation_id)
    supporter.name = payload.name
    supporter.donation_id = payload.donation_id
    db.commit()
    db.refresh(supporter)
    return supporter


@router.delete("/{supporter_id}")
def delete_supporter(supporter_id: int, db: Session = Depends(get_db)):
    """Delete a supporter; its donation stays"""
    supporter = _get_or_404(db, supporter_id)
    db.delete(supporter)
    db.commit()
    return {"message": "Supporter deleted"}
