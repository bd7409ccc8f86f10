class WebhookEventTypes:
    """Event types Embedly is known to send."""

    # Customer events
    CUSTOMER_CREATED = "customer.created"
    CUSTOMER_UPDATED = "customer.updated"
    CUSTOMER_DELETED = "customer.deleted"
    CUSTOMER_VERIFIED = "customer.verified"

    # Wallet events
    WALLET_CREATED = "wallet.created"
    WALLET_ACTIVATED = "wallet.activated"
    WALLET_DEACTIVATED = "wallet.deactivated"
    WALLET_SUSPENDED = "wallet.suspended"
    WALLET_CLOSED = "wallet.closed"

    # Transaction events
    TRANSACTION_CREATED = "transaction.created"
    TRANSACTION_COMPLETED = "transaction.completed"
    TRANSACTION_FAILED = "transaction.failed"
    TRANSACTION_REVERSED = "transaction.reversed"

    # Transfer events
    TRANSFER_INITIATED = "transfer.initiated"
    TRANSFER_COMPLETED = "transfer.completed"
    TRANSFER_FAILED = "transfer.failed"

    # Payment events
    PAYMENT_INITIATED = "payment.initiated"
    PAYMENT_COMPLETED = "payment.completed"
    PAYMENT_FAILED = "payment.failed"
    PAYMENT_REFUNDED = "payment.refunded"

    # Checkout events
    CHECKOUT_CREATED = "checkout.created"
    CHECKOUT_COMPLETED = "checkout.completed"
    CHECKOUT_EXPIRED = "checkout.expired"
    CHECKOUT_CANCELLED = "checkout.cancelled"

    # Card events
    CARD_CREATED = "card.created"
    CARD_ACTIVATED = "card.activated"
    CARD_BLOCKED = "card.blocked"
    CARD_EXPIRED = "card.expired"

    # KYC events
    KYC_SUBMITTED = "kyc.submitted"
    KYC_APPROVED = "kyc.approved"
    KYC_REJECTED = "kyc.rejected"
    KYC_PENDING = "kyc.pending"

    # Product limit events
    PRODUCT_LIMIT_CREATED = "product_limit.created"
    PRODUCT_LIMIT_UPDATED = "product_limit.updated"
    PRODUCT_LIMIT_ACTIVATED = "product_limit.activated"
    PRODUCT_LIMIT_DEACTIVATED = "product_limit.deactivated"
    PRODUCT_LIMIT_EXCEEDED = "product_limit.exceeded"
    PRODUCT_LIMIT_RESET = "product_limit.reset"

    # Payout events
    PAYOUT_INITIATED = "payout.initiated"
    PAYOUT_COMPLETED = "payout.completed"
    PAYOUT_FAILED = "payout.failed"
    PAYOUT_REVERSED = "payout.reversed"

    @classmethod
    def all(cls) -> frozenset[str]:
        return frozenset(
            value
            for name, value in vars(cls).items()
            if name.isupper() and isinstance(value, str)
        )
