from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Optional

Amount = Annotated[Decimal, Field(gt=0, max_digits=10, decimal_places=2)]


class CardType(str, Enum):
    GROCERIES = "groceries"
    RESTAURANT = "restaurant"
    TRANSPORT = "transport"
    EDUCATION = "education"
    HEALTH = "health"
    RETAIL = "retail"


class CamelModel(BaseModel):
    # request and response bodies use camelCase on the wire
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ------------- Cards ---------------

class CardBase(CamelModel):
    holder_name: str = Field(min_length=1, max_length=128)
    number: str = Field(pattern=r"^\d{12,19}$")
    expiry: date
    type: CardType

class CardCreate(CardBase):
    security_code: str = Field(pattern=r"^\d{3,4}$")
    password: Optional[str] = Field(default=None, pattern=r"^\d{4}$")

class VirtualCardCreate(CamelModel):
    number: str = Field(pattern=r"^\d{12,19}$")
    expiry: date
    security_code: str = Field(pattern=r"^\d{3,4}$")
    password: str = Field(pattern=r"^\d{4}$")

class CardRead(CardBase):
    id: int
    is_virtual: bool
    is_blocked: bool
    original_card_id: Optional[int] = None

    model_config = ConfigDict(from_attributes=True)


# ------------- Businesses ---------------

class BusinessCreate(CamelModel):
    name: str = Field(min_length=1, max_length=128)
    type: CardType

class BusinessRead(BusinessCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


# ------------- Ledger ---------------

class RechargeCreate(CamelModel):
    amount: Amount

class RechargeRead(CamelModel):
    id: int
    card_id: int
    amount: float
    timestamp: datetime

    model_config = ConfigDict(from_attributes=True)

class PaymentRead(RechargeRead):
    business_id: int

class BalanceRead(CamelModel):
    card_id: int
    balance: float
    recharges: List[RechargeRead]
    transactions: List[PaymentRead]


# ------------- Payment requests ---------------
# Two distinct request variants: unknown fields are rejected, so a
# point-of-sale body cannot carry a security code and vice versa.

class PointOfSalePayment(CamelModel):
    model_config = ConfigDict(extra="forbid")

    card_id: int
    amount_paid: Amount
    password: str = Field(min_length=1)
    business_id: int

class OnlinePayment(CamelModel):
    model_config = ConfigDict(extra="forbid")

    card_number: str = Field(min_length=1)
    holder_name: str = Field(min_length=1)
    expiration_date: date
    security_code: str = Field(min_length=1)
    amount_paid: Amount
    business_id: int
