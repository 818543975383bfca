from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from .database import Base
import datetime


class Account(Base):
    __tablename__ = 'accounts'
    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(200), nullable=False, unique=True, index=True)
    password = Column(String(300), nullable=False)  # bcrypt hash, never the plain text
    created_at = Column(DateTime, default=datetime.datetime.utcnow)


class SessionToken(Base):
    """Server side half of the session_token cookie"""
    __tablename__ = 'sessions'

    token = Column(String(100), primary_key=True)
    account_id = Column(Integer, ForeignKey('accounts.id', ondelete='CASCADE'), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, index=True)

    account = relationship(Account)
