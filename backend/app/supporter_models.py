from sqlalchemy import Column, Integer, String
from .database import Base


class Supporter(Base):
    """A named supporter backed by exactly one donation row"""
    __tablename__ = 'supporters'

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    # No FK constraint: donations are deleted independently and may leave this dangling
    donation_id = Column(Integer, nullable=False, index=True)
