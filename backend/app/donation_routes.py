from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List
from . import donation_models, donation_schemas
from .auth_routes import current_account
from .database import get_db

router = APIRouter(prefix="/donations", tags=["donations"], dependencies=[Depends(current_account)])


def _get_or_404(db: Session, donation_id: int) -> donation_models.Donation:
    donation = db.query(donation_models.Donation).filter(donation_models.Donation.id == donation_id).first()
    if not donation:
        raise HTTPException(status_code=404, detail="Donation not found")
    return donation


@router.get("", response_model=List[donation_schemas.Donation])
def list_donations(db: Session = Depends(get_db)):
    return db.query(donation_models.Donation).order_by(donation_models.Donation.id).all()


@router.post("", response_model=donation_schemas.Donation)
def create_donation(payload: donation_schemas.DonationCreate, db: Session = Depends(get_db)):
    donation = donation_models.Donation(**payload.model_dump())
    db.add(donation)
    db.commit()
    db.refresh(donation)
    return donation


@router.get("/{donation_id}", response_model=donation_schemas.Donation)
def get_donation(donation_id: int, db: Session = Depends(get_db)):
    return _get_or_404(db, donation_id)


@router.put("/{donation_id}", response_model=donation_schemas.Donation)
def update_donation(donation_id: int, payload: donation_schemas.DonationUpdate, db: Session = Depends(get_db)):
    """Replace coins, income and co-op; donated_at keeps its creation value"""
    donation = _get_or_404(db, donation_id)
    for key, value in payload.model_dump().items():
        setattr(donation, key, value)
    db.commit()
    db.refresh(donation)
    return donation


@router.delete("/{donation_id}")
def delete_donation(donation_id: int, db: Session = Depends(get_db)):
    """Delete a donation. Supporters pointing at it are left as they are."""
    donation = _get_or_404(db, donation_id)
    db.delete(donation)
    db.commit()
    return {"message": "Donation deleted"}
