from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from database import get_session
from models import Business
from repositories import BusinessRepository
from schemas import BusinessCreate, BusinessRead

router = APIRouter(prefix="/businesses", tags=["Businesses"])

@router.get("/", response_model=List[BusinessRead])
def read_businesses(session: Session = Depends(get_session)):
    return BusinessRepository(session).list()

@router.post("/", response_model=BusinessRead, status_code=201)
def create_business(business: BusinessCreate, session: Session = Depends(get_session)):
    return BusinessRepository(session).insert(Business(name=business.name, type=business.type.value))
