from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List

from database import get_session
from errors import NotFound, Unauthorized
from models import Card
from repositories import BalanceService, CardRepository, PaymentRepository, RechargeRepository
from schemas import BalanceRead, CardCreate, CardRead, PaymentRead, RechargeCreate, RechargeRead, VirtualCardCreate
from security import hash_secret
from authorization import resolve_effective_card_id

router = APIRouter(prefix="/cards", tags=["Cards"])


def find_card(card_id: int, session: Session) -> Card:
    card = CardRepository(session).find_by_id(card_id)
    if card is None:
        raise NotFound("Card")
    return card

# ------------- CRUD ---------------

@router.get("/", response_model=List[CardRead])
def read_cards(session: Session = Depends(get_session)):
    return CardRepository(session).list()

@router.post("/", response_model=CardRead, status_code=201)
def create_card(card: CardCreate, session: Session = Depends(get_session)):
    db_card = Card(
        holder_name   = card.holder_name,
        number        = card.number,
        expiry        = card.expiry,
        type          = card.type.value,
        security_code = hash_secret(card.security_code),
        password      = hash_secret(card.password) if card.password else None,
    )
    return CardRepository(session).insert(db_card)

@router.post("/{card_id}/virtual", response_model=CardRead, status_code=201)
def create_virtual_card(card_id: int, card: VirtualCardCreate, session: Session = Depends(get_session)):
    original = find_card(card_id, session)
    if original.is_virtual:
        raise Unauthorized("virtual card cannot back another virtual card")

    db_card = Card(
        holder_name      = original.holder_name,
        number           = card.number,
        expiry           = card.expiry,
        type             = original.type,
        security_code    = hash_secret(card.security_code),
        password         = hash_secret(card.password),
        is_virtual       = True,
        original_card_id = original.id,
    )
    return CardRepository(session).insert(db_card)

# ------------- Ledger ---------------

@router.get("/{card_id}/balance", response_model=BalanceRead)
def read_balance(card_id: int, session: Session = Depends(get_session)):
    effective_id = resolve_effective_card_id(find_card(card_id, session))
    return BalanceRead(
        card_id      = effective_id,
        balance      = BalanceService(session).get_balance(effective_id),
        recharges    = [RechargeRead.model_validate(r) for r in RechargeRepository(session).find_by_card_id(effective_id)],
        transactions = [PaymentRead.model_validate(p) for p in PaymentRepository(session).find_by_card_id(effective_id)],
    )

@router.post("/{card_id}/recharges", response_model=RechargeRead, status_code=201)
def recharge_card(card_id: int, recharge: RechargeCreate, session: Session = Depends(get_session)):
    card = find_card(card_id, session)
    if card.is_virtual:
        raise Unauthorized("virtual card cannot be recharged")
    return RechargeRepository(session).insert(card.id, recharge.amount)
