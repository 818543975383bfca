from sqlalchemy import Column, Integer, String, Float, DateTime
from .database import Base
import datetime


class Donation(Base):
    __tablename__ = 'donations'
    id = Column(Integer, primary_key=True, index=True)
    coins = Column(Integer, nullable=False, default=0)
    donated_at = Column(DateTime, nullable=False, default=datetime.datetime.utcnow)  # set once, never updated
    income_eur = Column(Float, nullable=False)
    co_op = Column(String(100), nullable=False, default='STUDIO-MATIC')
