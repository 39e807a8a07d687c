from refunds.services.refund_service import RefundService, parse_refund_id, parse_ticket_id

__all__ = ["RefundService", "parse_refund_id", "parse_ticket_id"]
