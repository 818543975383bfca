from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse, Response
from . import auth_models, donation_models, supporter_models
from .auth_routes import router as auth_router
from .database import Base, engine
from .donation_routes import router as donation_router
from .supporter_routes import router as supporter_router
import os

# the model imports above register their tables on Base.metadata
Base.metadata.create_all(bind=engine)

app = FastAPI(title="Studio-Matic API")


# Error bodies are plain text so clients can show them verbatim
@app.exception_handler(StarletteHTTPException)
async def plain_text_http_error(request, exc):
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code, headers=getattr(exc, 'headers', None))


@app.exception_handler(RequestValidationError)
async def plain_text_validation_error(request, exc):
    problems = []
    for err in exc.errors():
        where = '.'.join(str(part) for part in err.get('loc', ()) if part != 'body')
        problems.append(f"{where}: {err.get('msg')}" if where else str(err.get('msg')))
    return PlainTextResponse('; '.join(problems), status_code=422)


# CORS_ALLOWED_ORIGINS is whitespace separated; credentials need explicit origins in production
_origins = os.getenv('CORS_ALLOWED_ORIGINS', '').split() or ["*"]
app.add_middleware(
    CORSMiddleware,
    allow_origins=_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Content-Type", "Accept", "Authorization", "Origin", "User-Agent"],
)


@app.get('/health')
def health():
    return Response(status_code=200)


app.include_router(auth_router)
app.include_router(donation_router)
app.include_router(supporter_router)
