"""Payment authorization: decides whether a card payment is permitted and
records it exactly once.

Both flows run the same linear pipeline and stop at the first failing check:

    resolve card -> card state -> credential -> business -> effective card
    -> balance -> persist

Every failure raises NotFound or Unauthorized before anything is written;
the payment insert is the only write and always the last step.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Optional, Protocol

from errors import NotFound, Unauthorized
from models import Business, Card
from schemas import OnlinePayment, PointOfSalePayment

logger = logging.getLogger(__name__)


class CardLookup(Protocol):
    def find_by_id(self, card_id: int) -> Optional[Card]: ...
    def find_by_details(self, number: str, holder_name: str, expiry: date) -> Optional[Card]: ...


class BusinessLookup(Protocol):
    def find_by_id(self, business_id: int) -> Optional[Business]: ...


class BalanceLookup(Protocol):
    def get_balance(self, card_id: int) -> Decimal: ...


class PaymentWriter(Protocol):
    def insert(self, card_id: int, amount: Decimal, business_id: int) -> None: ...


SecretVerifier = Callable[[str, Optional[str]], bool]


def resolve_effective_card_id(card: Card) -> int:
    """Id of the card that is actually charged: a virtual card settles on its backing card."""
    if card.is_virtual:
        return card.original_card_id
    return card.id


class PaymentAuthorizer:
    def __init__(
        self,
        cards: CardLookup,
        businesses: BusinessLookup,
        balances: BalanceLookup,
        payments: PaymentWriter,
        verify: SecretVerifier,
        today: Callable[[], date] = date.today,
    ):
        self.cards = cards
        self.businesses = businesses
        self.balances = balances
        self.payments = payments
        self.verify = verify
        self.today = today

    def authorize_point_of_sale_payment(self, request: PointOfSalePayment) -> None:
        card = self._find_card_by_id(request.card_id)

        # virtual cards are refused at the terminal whatever their state
        if card.is_virtual:
            raise Unauthorized("virtual card not allowed at point of sale")

        self._ensure_card_is_usable(card)
        self._validate_credential(request.password, card.password)
        self._ensure_business_is_valid(request.business_id, card.type)
        self._check_balance_and_persist(card, request.amount_paid, request.business_id)

    def authorize_online_payment(self, request: OnlinePayment) -> None:
        card = self._find_card_by_details(
            request.card_number, request.holder_name, request.expiration_date
        )

        self._ensure_card_is_usable(card)
        self._validate_credential(request.security_code, card.security_code)
        self._ensure_business_is_valid(request.business_id, card.type)
        self._check_balance_and_persist(card, request.amount_paid, request.business_id)

    # ------------- stages ---------------

    def _find_card_by_id(self, card_id: int) -> Card:
        card = self.cards.find_by_id(card_id)
        if card is None:
            raise NotFound("Card")
        return card

    def _find_card_by_details(self, number: str, holder_name: str, expiry: date) -> Card:
        card = self.cards.find_by_details(number, holder_name, expiry)
        if card is None:
            raise NotFound("Card")
        return card

    def _ensure_card_is_usable(self, card: Card) -> None:
        if self.today() > card.expiry:
            raise Unauthorized("expired")
        if card.is_blocked:
            raise Unauthorized("blocked")

    def _validate_credential(self, supplied: str, stored: Optional[str]) -> None:
        if not self.verify(supplied, stored):
            raise Unauthorized("invalid credential")

    def _ensure_business_is_valid(self, business_id: int, card_type: str) -> None:
        business = self.businesses.find_by_id(business_id)
        if business is None:
            raise NotFound("Business")
        if business.type != card_type:
            raise Unauthorized("type mismatch")

    def _check_balance_and_persist(self, card: Card, amount: Decimal, business_id: int) -> None:
        card_id = resolve_effective_card_id(card)

        balance = self.balances.get_balance(card_id)
        if balance < amount:
            raise Unauthorized("insufficient funds")

        self.payments.insert(card_id, amount, business_id)
        logger.info(f"✅ Payment of {amount} approved on card {card_id} for business {business_id}")
