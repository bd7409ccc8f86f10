"""
Example handler set for the Embedly host application.

Each handler decodes ``data`` into its typed shape and logs the business
event. Replace the logging with real work (persisting, notifying) as needed.
"""

import asyncio
import logging

from embedly_webhooks.schemas import event_data as models
from embedly_webhooks.schemas.envelope import WebhookEnvelope
from embedly_webhooks.schemas.event_types import WebhookEventTypes as E
from embedly_webhooks.services.dispatcher import HandlerSet, HandlerSetBuilder

logger = logging.getLogger(__name__)


class EmbedlyWebhookHandlers:
    """Owns the host's HandlerSet; registrations are fixed at construction."""

    def __init__(self) -> None:
        builder = HandlerSetBuilder()

        # customers
        builder.on(E.CUSTOMER_CREATED, self.handle_customer_created)
        builder.on(E.CUSTOMER_UPDATED, self.handle_customer_updated)
        builder.on(E.CUSTOMER_VERIFIED, self.handle_customer_verified)

        # wallets
        builder.on(E.WALLET_CREATED, self.handle_wallet_created)
        builder.on(E.WALLET_ACTIVATED, self.handle_wallet_activated)

        # transactions
        builder.on(E.TRANSACTION_CREATED, self.handle_transaction_created)
        builder.on(E.TRANSACTION_COMPLETED, self.handle_transaction_completed)
        builder.on(E.TRANSACTION_FAILED, self.handle_transaction_failed)

        # payments
        builder.on(E.PAYMENT_INITIATED, self.handle_payment_initiated)
        builder.on(E.PAYMENT_COMPLETED, self.handle_payment_completed)
        builder.on(E.PAYMENT_FAILED, self.handle_payment_failed)

        # cards
        builder.on(E.CARD_CREATED, self.handle_card_created)
        builder.on(E.CARD_ACTIVATED, self.handle_card_activated)
        builder.on(E.CARD_BLOCKED, self.handle_card_blocked)

        # kyc
        builder.on(E.KYC_SUBMITTED, self.handle_kyc_submitted)
        builder.on(E.KYC_APPROVED, self.handle_kyc_approved)
        builder.on(E.KYC_REJECTED, self.handle_kyc_rejected)

        # payouts
        builder.on(E.PAYOUT_INITIATED, self.handle_payout_initiated)
        builder.on(E.PAYOUT_COMPLETED, self.handle_payout_completed)
        builder.on(E.PAYOUT_FAILED, self.handle_payout_failed)

        self.handler_set: HandlerSet = builder.build()

    # ---------- customers ----------
    async def handle_customer_created(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.CustomerCreatedData)
        logger.info(
            f"Customer created: {data.customer_id if data else None}, "
            f"Email: {data.email if data else None}"
        )

    async def handle_customer_updated(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.CustomerUpdatedData)
        logger.info(f"Customer updated: {data.customer_id if data else None}")

    async def handle_customer_verified(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.CustomerVerifiedData)
        if data is None:
            logger.warning(f"customer.verified event {envelope.id} has no usable data")
            return
        logger.info(
            f"Customer verified: {data.customer_id}, Level: {data.verification_level}"
        )

    # ---------- wallets ----------
    async def handle_wallet_created(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.WalletCreatedData)
        logger.info(
            f"Wallet created: {data.wallet_id if data else None}, "
            f"Customer: {data.customer_id if data else None}"
        )

    async def handle_wallet_activated(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.WalletActivatedData)
        logger.info(f"Wallet activated: {data.wallet_id if data else None}")

    # ---------- transactions ----------
    async def handle_transaction_created(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.TransactionCreatedData)
        if data is None:
            logger.warning(f"transaction.created event {envelope.id} has no usable data")
            return
        logger.info(
            f"Transaction created: {data.transaction_id}, "
            f"Amount: {data.amount} {data.currency or ''}".rstrip()
        )

    async def handle_transaction_completed(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.TransactionCompletedData)
        logger.info(
            f"Transaction completed: {data.transaction_id if data else None}, "
            f"Status: {data.status if data else None}"
        )

    async def handle_transaction_failed(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.TransactionFailedData)
        logger.info(
            f"Transaction failed: {data.transaction_id if data else None}, "
            f"Reason: {data.failure_reason if data else None}"
        )

    # ---------- payments ----------
    async def handle_payment_initiated(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.PaymentInitiatedData)
        logger.info(
            f"Payment initiated: {data.payment_id if data else None}, "
            f"Amount: {data.amount if data else None}"
        )

    async def handle_payment_completed(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.PaymentCompletedData)
        logger.info(f"Payment completed: {data.payment_id if data else None}")

    async def handle_payment_failed(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.PaymentFailedData)
        logger.info(
            f"Payment failed: {data.payment_id if data else None}, "
            f"Reason: {data.failure_reason if data else None}"
        )

    # ---------- cards ----------
    async def handle_card_created(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.CardCreatedData)
        logger.info(
            f"Card created: {data.card_id if data else None}, "
            f"Customer: {data.customer_id if data else None}"
        )

    async def handle_card_activated(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.CardActivatedData)
        logger.info(f"Card activated: {data.card_id if data else None}")

    async def handle_card_blocked(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.CardBlockedData)
        logger.info(
            f"Card blocked: {data.card_id if data else None}, "
            f"Reason: {data.reason if data else None}"
        )

    # ---------- kyc ----------
    async def handle_kyc_submitted(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.KycSubmittedData)
        logger.info(
            f"KYC submitted: {data.customer_id if data else None}, "
            f"Type: {data.document_type if data else None}"
        )

    async def handle_kyc_approved(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.KycApprovedData)
        logger.info(
            f"KYC approved: {data.customer_id if data else None}, "
            f"Level: {data.approved_level if data else None}"
        )

    async def handle_kyc_rejected(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.KycRejectedData)
        logger.info(
            f"KYC rejected: {data.customer_id if data else None}, "
            f"Reason: {data.rejection_reason if data else None}"
        )

    # ---------- payouts ----------
    async def handle_payout_initiated(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.PayoutInitiatedData)
        logger.info(
            f"Payout initiated: {data.payout_id if data else None}, "
            f"Amount: {data.amount if data else None}"
        )

    async def handle_payout_completed(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.PayoutCompletedData)
        logger.info(f"Payout completed: {data.payout_id if data else None}")

    async def handle_payout_failed(
        self, envelope: WebhookEnvelope, cancel: asyncio.Event
    ) -> None:
        data = envelope.get_data(models.PayoutFailedData)
        logger.info(
            f"Payout failed: {data.payout_id if data else None}, "
            f"Reason: {data.failure_reason if data else None}"
        )
