from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from embedly_webhooks.schemas.keys import fold_keys


class EventData(BaseModel):
    """
    Base for typed ``data`` payloads; accepts camelCase or snake_case keys,
    in any letter case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, values: Any) -> Any:
        return fold_keys(values, cls.model_fields)


# ---------- customers ----------
class CustomerCreatedData(EventData):
    customer_id: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class CustomerUpdatedData(EventData):
    customer_id: str
    email: Optional[str] = None


class CustomerVerifiedData(EventData):
    customer_id: str
    verification_level: Optional[str] = None


# ---------- wallets ----------
class WalletCreatedData(EventData):
    wallet_id: str
    customer_id: Optional[str] = None
    currency: Optional[str] = None


class WalletActivatedData(EventData):
    wallet_id: str


# ---------- transactions ----------
class TransactionCreatedData(EventData):
    transaction_id: str
    amount: Decimal
    currency: Optional[str] = None


class TransactionCompletedData(EventData):
    transaction_id: str
    status: Optional[str] = None


class TransactionFailedData(EventData):
    transaction_id: str
    failure_reason: Optional[str] = None


# ---------- payments ----------
class PaymentInitiatedData(EventData):
    payment_id: str
    amount: Decimal


class PaymentCompletedData(EventData):
    payment_id: str


class PaymentFailedData(EventData):
    payment_id: str
    failure_reason: Optional[str] = None


# ---------- cards ----------
class CardCreatedData(EventData):
    card_id: str
    customer_id: Optional[str] = None


class CardActivatedData(EventData):
    card_id: str


class CardBlockedData(EventData):
    card_id: str
    reason: Optional[str] = None


# ---------- kyc ----------
class KycSubmittedData(EventData):
    customer_id: str
    document_type: Optional[str] = None


class KycApprovedData(EventData):
    customer_id: str
    approved_level: Optional[str] = None


class KycRejectedData(EventData):
    customer_id: str
    rejection_reason: Optional[str] = None


# ---------- payouts ----------
class PayoutInitiatedData(EventData):
    payout_id: str
    amount: Decimal


class PayoutCompletedData(EventData):
    payout_id: str


class PayoutFailedData(EventData):
    payout_id: str
    failure_reason: Optional[str] = None
