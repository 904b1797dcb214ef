from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from errors import Conflict
from models import Business, Card, Payment, Recharge


class CardRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, card_id: int) -> Optional[Card]:
        return self.session.get(Card, card_id)

    def find_by_details(self, number: str, holder_name: str, expiry: date) -> Optional[Card]:
        return (
            self.session.query(Card)
            .filter(Card.number == number, Card.holder_name == holder_name, Card.expiry == expiry)
            .one_or_none()
        )

    def list(self) -> List[Card]:
        return self.session.query(Card).order_by(Card.id).all()

    def insert(self, card: Card) -> Card:
        self.session.add(card)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict(f"card number {card.number} already exists")
        self.session.refresh(card)
        return card


class BusinessRepository:
    def __init__(self, session: Session):
        self.session = session

    def find_by_id(self, business_id: int) -> Optional[Business]:
        return self.session.get(Business, business_id)

    def list(self) -> List[Business]:
        return self.session.query(Business).order_by(Business.id).all()

    def insert(self, business: Business) -> Business:
        self.session.add(business)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise Conflict(f"business {business.name} already exists")
        self.session.refresh(business)
        return business


class PaymentRepository:
    def __init__(self, session: Session):
        self.session = session

    def insert(self, card_id: int, amount: Decimal, business_id: int) -> None:
        self.session.add(Payment(card_id=card_id, amount=amount, business_id=business_id))
        self.session.commit()

    def find_by_card_id(self, card_id: int) -> List[Payment]:
        return self.session.query(Payment).filter(Payment.card_id == card_id).order_by(Payment.id).all()


class RechargeRepository:
    def __init__(self, session: Session):
        self.session = session

    def insert(self, card_id: int, amount: Decimal) -> Recharge:
        recharge = Recharge(card_id=card_id, amount=amount)
        self.session.add(recharge)
        self.session.commit()
        self.session.refresh(recharge)
        return recharge

    def find_by_card_id(self, card_id: int) -> List[Recharge]:
        return self.session.query(Recharge).filter(Recharge.card_id == card_id).order_by(Recharge.id).all()


def lock_card(card_id: int):
    return select(Card.id).where(Card.id == card_id).with_for_update()


class BalanceService:
    """Balance of a card: everything recharged minus everything paid.

    Reading a balance locks the card row until the session commits or
    closes, so the payment written after a sufficient balance check cannot
    interleave with a concurrent one on the same card. SQLite ignores the
    lock; PostgreSQL honours it.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_balance(self, card_id: int) -> Decimal:
        self.session.execute(lock_card(card_id))
        recharged = self._total(Recharge, card_id)
        paid = self._total(Payment, card_id)
        return recharged - paid

    def _total(self, model, card_id: int) -> Decimal:
        total = (
            self.session.query(func.coalesce(func.sum(model.amount), 0))
            .filter(model.card_id == card_id)
            .scalar()
        )
        return Decimal(str(total))
