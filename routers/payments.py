from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from authorization import PaymentAuthorizer
from database import get_session
from repositories import BalanceService, BusinessRepository, CardRepository, PaymentRepository
from schemas import OnlinePayment, PointOfSalePayment
from security import verify_secret

router = APIRouter(prefix="/payments", tags=["Payments"])


def get_authorizer(session: Session = Depends(get_session)) -> PaymentAuthorizer:
    return PaymentAuthorizer(
        cards      = CardRepository(session),
        businesses = BusinessRepository(session),
        balances   = BalanceService(session),
        payments   = PaymentRepository(session),
        verify     = verify_secret,
    )

@router.post("/point-of-sale", status_code=201, response_class=Response)
def pay_at_point_of_sale(payment: PointOfSalePayment, authorizer: PaymentAuthorizer = Depends(get_authorizer)):
    authorizer.authorize_point_of_sale_payment(payment)

@router.post("/online", status_code=201, response_class=Response)
def pay_online(payment: OnlinePayment, authorizer: PaymentAuthorizer = Depends(get_authorizer)):
    authorizer.authorize_online_payment(payment)
