from refunds.stores.interfaces import RefundStore

__all__ = ["RefundStore"]
