# academy/api/routers/database.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from academy.core.db import get_db
from academy.services.bootstrap import initialize_database

router = APIRouter(prefix="/database", tags=["Database"])


@router.post("/initialize")
def initialize(db: Session = Depends(get_db)):
    # Open on purpose: it has to work before any user exists
    result = initialize_database(db=db)
    return {"success": True, "message": "Database initialized", **result}
