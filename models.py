from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Boolean, ForeignKey
from database import Base

class Card(Base):
    __tablename__ = "cards"

    id               = Column(Integer, primary_key=True, autoincrement=True)
    holder_name      = Column(String(128), nullable=False)
    number           = Column(String(19), nullable=False, unique=True)
    expiry           = Column(Date, nullable=False)
    security_code    = Column(String(60), nullable=False)
    password         = Column(String(60), nullable=True)
    type             = Column(String(32), nullable=False)
    is_virtual       = Column(Boolean, nullable=False, default=False)
    is_blocked       = Column(Boolean, nullable=False, default=False)
    # backing physical card, set only on virtual cards
    original_card_id = Column(Integer, ForeignKey("cards.id"), nullable=True)

    def __repr__(self) -> str:
        kind = "virtual" if self.is_virtual else "physical"
        return f"<Card {self.id} – {self.holder_name} ({kind})>"

class Business(Base):
    __tablename__ = "businesses"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(128), nullable=False, unique=True)
    type = Column(String(32), nullable=False)

    def __repr__(self) -> str:
        return f"<Business {self.id} – {self.name}>"

class Payment(Base):
    __tablename__ = "payments"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    card_id     = Column(Integer, ForeignKey("cards.id"), nullable=False, index=True)
    business_id = Column(Integer, ForeignKey("businesses.id"), nullable=False)
    amount      = Column(Numeric(10, 2), nullable=False)
    timestamp   = Column(DateTime, nullable=False, default=datetime.utcnow)

class Recharge(Base):
    __tablename__ = "recharges"

    id        = Column(Integer, primary_key=True, autoincrement=True)
    card_id   = Column(Integer, ForeignKey("cards.id"), nullable=False, index=True)
    amount    = Column(Numeric(10, 2), nullable=False)
    timestamp = Column(DateTime, nullable=False, default=datetime.utcnow)
