import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import APIRouter, Depends, FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.orm import Session

from . import buckets, kv
from .auth import authenticate
from .config import Settings, get_settings
from .db import create_db_engine, get_db, init_db, make_sessionmaker
from .errors import AuthError, BucketKVError, NotFoundError
from .schemas import BucketCreate, BucketOut, HealthOut

logger = logging.getLogger(__name__)

router = APIRouter()

async def read_body(request: Request) -> bytes:
    return await request.body()

def require_key(key: str) -> str:
    # /kv/ with nothing after it names no entry
    if not key:
        raise NotFoundError("Key not found")
    return key

@router.get("/health", response_model=HealthOut)
def health():
    return {"status": "ok"}

@router.post("/bucket", response_model=BucketOut, status_code=status.HTTP_201_CREATED)
def create_bucket(payload: BucketCreate, db: Session = Depends(get_db)):
    return buckets.create_bucket(db, payload.email)

@router.get("/kv/{key:path}", response_class=PlainTextResponse)
def get_key(key: str = Depends(require_key), bucket_id: str = Depends(authenticate), db: Session = Depends(get_db)):
    return PlainTextResponse(content=kv.get_value(db, bucket_id, key))

@router.post("/kv/{key:path}", status_code=status.HTTP_201_CREATED)
def put_key(
    body: bytes = Depends(read_body),
    key: str = Depends(require_key),
    bucket_id: str = Depends(authenticate),
    db: Session = Depends(get_db),
):
    kv.put_value(db, bucket_id, key, body)
    return Response(status_code=status.HTTP_201_CREATED)

@router.delete("/kv/{key:path}", status_code=status.HTTP_204_NO_CONTENT)
def delete_key(key: str = Depends(require_key), bucket_id: str = Depends(authenticate), db: Session = Depends(get_db)):
    kv.delete_value(db, bucket_id, key)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

async def handle_service_error(request: Request, exc: BucketKVError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)

async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    # only POST /bucket takes a request model
    detail = "Email is required" if request.url.path == "/bucket" else "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail})

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        engine = create_db_engine(settings.db_path)
        try:
            init_db(engine)
        except Exception:
            logger.exception("Failed to set up database at %s", settings.db_path)
            engine.dispose()
            raise
        app.state.engine = engine
        app.state.sessionmaker = make_sessionmaker(engine)
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database at %s closed", settings.db_path)

    app = FastAPI(title="bucketkv", lifespan=lifespan)
    app.state.settings = settings
    app.include_router(router)
    app.add_exception_handler(BucketKVError, handle_service_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    return app

app = create_app()
