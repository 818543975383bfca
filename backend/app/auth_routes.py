"""
Cookie based sessions: signup, signin, signout, validate and /me
"""
from fastapi import APIRouter, HTTPException, Depends, Request
from sqlalchemy.orm import Session
from starlette.responses import PlainTextResponse
from . import auth_models, auth_schemas
from .database import get_db
import bcrypt
import datetime
import logging
import os
import secrets

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

SESSION_COOKIE = 'session_token'
SESSION_MAX_AGE = int(os.getenv('SESSION_MAX_AGE', '3600'))
# Cross-site deployments need Secure + SameSite=None, local http dev cannot use Secure
SESSION_COOKIE_SECURE = os.getenv('SESSION_COOKIE_SECURE', '0') == '1'
# bcrypt only looks at the first 72 bytes and newer releases refuse longer input
BCRYPT_MAX_BYTES = 72


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8')[:BCRYPT_MAX_BYTES], bcrypt.gensalt()).decode('utf-8')


def verify_password(password: str, stored: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode('utf-8')[:BCRYPT_MAX_BYTES], stored.encode('utf-8'))
    except ValueError:
        # not a bcrypt hash
        return False


def generate_session_token() -> str:
    return secrets.token_urlsafe(48)


def purge_expired_sessions(db: Session) -> int:
    """Delete sessions older than SESSION_MAX_AGE, return how many went"""
    cutoff = datetime.datetime.utcnow() - datetime.timedelta(seconds=SESSION_MAX_AGE)
    removed = db.query(auth_models.SessionToken).filter(auth_models.SessionToken.created_at < cutoff).delete()
    if removed:
        db.commit()
        logger.info("Deleted %d expired sessions", removed)
    return removed


def _session_response(db: Session, account: auth_models.Account, message: str) -> PlainTextResponse:
    token = generate_session_token()
    db.add(auth_models.SessionToken(token=token, account_id=account.id))
    db.commit()
    response = PlainTextResponse(message)
    response.set_cookie(
        SESSION_COOKIE,
        token,
        max_age=SESSION_MAX_AGE,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite='none' if SESSION_COOKIE_SECURE else 'lax',
    )
    return response


def current_account(request: Request, db: Session = Depends(get_db)) -> auth_models.Account:
    """Resolve the session cookie to an account or fail with 401"""
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(status_code=401, detail='Unsuccessful login: session_token cookie not found')
    purge_expired_sessions(db)
    session = db.query(auth_models.SessionToken).filter(auth_models.SessionToken.token == token).first()
    if not session:
        raise HTTPException(status_code=401, detail='Unsuccessful login: session token not found')
    return session.account


@router.post('/auth/signup')
def signup(payload: auth_schemas.SignRequest, db: Session = Depends(get_db)):
    existing = db.query(auth_models.Account).filter(auth_models.Account.email == payload.email).first()
    if existing:
        raise HTTPException(status_code=409, detail='Account already exists')
    account = auth_models.Account(email=payload.email, password=hash_password(payload.password))
    db.add(account)
    db.commit()
    db.refresh(account)
    logger.info("Account %s created", account.id)
    return _session_response(db, account, 'Account created successfully')


@router.post('/auth/signin')
def signin(payload: auth_schemas.SignRequest, db: Session = Depends(get_db)):
    account = db.query(auth_models.Account).filter(auth_models.Account.email == payload.email).first()
    if not account:
        raise HTTPException(status_code=404, detail='Unsuccessful login: account not found')
    if not verify_password(payload.password, account.password):
        raise HTTPException(status_code=401, detail='Unsuccessful login: password incorrect')
    return _session_response(db, account, 'Successful login')


@router.post('/auth/signout')
def signout(request: Request, db: Session = Depends(get_db)):
    token = request.cookies.get(SESSION_COOKIE)
    if not token:
        raise HTTPException(status_code=404, detail='Missing session_token')
    db.query(auth_models.SessionToken).filter(auth_models.SessionToken.token == token).delete()
    db.commit()
    response = PlainTextResponse('Logged out')
    response.delete_cookie(
        SESSION_COOKIE,
        httponly=True,
        secure=SESSION_COOKIE_SECURE,
        samesite='none' if SESSION_COOKIE_SECURE else 'lax',
    )
    return response


@router.get('/auth/validate', response_model=auth_schemas.Validation)
def validate(account: auth_models.Account = Depends(current_account)):
    return {"email": account.email, "message": "Successful login"}


@router.get('/me', response_model=auth_schemas.Me)
def me(account: auth_models.Account = Depends(current_account)):
    return account
