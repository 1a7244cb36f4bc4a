from contextlib import asynccontextmanager
import logging
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Request, Response
from sqlalchemy.orm import Session

from service_common.db import MAX_ID, init_db, make_engine, make_session_factory
from service_common.logconfig import configure_logging

from .config import UserSettings
from .models import Base, User
from .schemas import UserCreate, UserOut

logger= logging.getLogger(__name__)


def create_app(settings: Optional[UserSettings] = None) -> FastAPI:
    settings = settings or UserSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging("user_service", settings.log_path, settings.log_level)
        engine = make_engine(settings.database_url)
        init_db(engine, Base)
        app.state.session_factory = make_session_factory(engine)
        yield
        engine.dispose()

    app= FastAPI(lifespan=lifespan, title="User Service")

    @app.post("/users", response_model= UserOut, status_code=201)
    def create_user(user: UserCreate, db: Session = Depends(get_db)):
        """Register a new user.

        :raises HTTPException: 400 if the email is already registered
        """
        if db.query(User).filter(User.email == user.email).first():
            raise HTTPException(status_code=400, detail="Email already registered")
        new_user= User(**user.model_dump())
        db.add(new_user)
        db.commit()
        logger.info(f"Created new user: {new_user.to_dict()}")
        return new_user

    @app.get("/users")
    def get_users(id: Optional[str] = None, db: Session = Depends(get_db)):
        """Return one user when ``id`` is given, every user otherwise."""
        if id is None or id == "":
            users = db.query(User).order_by(User.id).all()
            return [UserOut.model_validate(u).model_dump(mode="json") for u in users]
        user = db.get(User, parse_id(id))
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return UserOut.model_validate(user).model_dump(mode="json")

    @app.put("/users", response_model= UserOut)
    def update_user(id: str, user: UserCreate, db: Session = Depends(get_db)):
        db_user = db.get(User, parse_id(id))
        if not db_user:
            raise HTTPException(status_code=404, detail="User not found")
        taken = db.query(User).filter(User.email == user.email, User.id != db_user.id).first()
        if taken:
            raise HTTPException(status_code=400, detail="Email already registered")
        db_user.name = user.name
        db_user.email = user.email
        db.commit()
        logger.info(f"Updated user: {db_user.to_dict()}")
        return db_user

    @app.delete("/users", status_code=204)
    def delete_user(id: str, db: Session = Depends(get_db)):
        db_user = db.get(User, parse_id(id))
        if not db_user:
            raise HTTPException(status_code=404, detail="User not found")
        db.delete(db_user)
        db.commit()
        logger.info(f"Deleted user {db_user.id}")
        return Response(status_code=204)

    @app.get("/health")
    def health():
        return {"status": "ok", "service": "user-service"}

    return app


def get_db(request: Request):
    db= request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def parse_id(raw: str) -> int:
    try:
        entity_id = int(raw)
    except ValueError:
        entity_id = 0
    if not 0 < entity_id <= MAX_ID:
        raise HTTPException(status_code=400, detail="Invalid user ID")
    return entity_id


app = create_app()
