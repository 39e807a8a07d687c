"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from django.db import transaction
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from events import cache
from events.domain.errors import DomainError
from events.handlers import deps
from events.handlers.errors import error_response
from events.handlers.serializers import (
    EventSerializer,
    EventStatusSerializer,
    DiscountCheckInputSerializer,
    PriceQuoteSerializer,
    PurchaseCheckInputSerializer,
    PurchaseDecisionSerializer,
    PurchaseInputSerializer,
    TicketSerializer,
)
from events.services import parse_event_id


class EventDetailView(APIView):
    """Handler for GET /api/events/{event_id}"""

    permission_classes = [AllowAny]

    def get(self, request: Request, event_id: str) -> Response:
        try:
            cache_id = parse_event_id(event_id)
            cached = cache.get_event_detail(cache_id)
            if cached is not None:
                return Response(cached)
            event = deps.get_event_service().get_event(event_id)
        except DomainError as exc:
            return error_response(exc)
        payload = dict(EventSerializer(event).data)
        cache.set_event_detail(cache_id, payload)
        return Response(payload)


class EventStatusView(APIView):
    """Handler for GET /api/events/{event_id}/status"""

    permission_classes = [AllowAny]

    def get(self, request: Request, event_id: str) -> Response:
        try:
            event_status = deps.get_event_service().get_status(event_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(EventStatusSerializer(event_status).data)


class PurchaseCheckView(APIView):
    """Handler for POST /api/events/{event_id}/purchase-check"""

    permission_classes = [AllowAny]

    def post(self, request: Request, event_id: str) -> Response:
        serializer = PurchaseCheckInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            decision = deps.get_event_service().check_purchase(
                event_id, serializer.validated_data["tier"]
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(PurchaseDecisionSerializer(decision).data)


class DiscountCheckView(APIView):
    """Handler for POST /api/events/{event_id}/discount-check"""

    permission_classes = [AllowAny]

    def post(self, request: Request, event_id: str) -> Response:
        serializer = DiscountCheckInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            quote = deps.get_event_service().quote_purchase(
                event_id,
                serializer.validated_data["tier"],
                discount_code=serializer.validated_data["code"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(PriceQuoteSerializer(quote).data)


class PurchaseView(APIView):
    """Handler for POST /api/events/{event_id}/purchases"""

    def post(self, request: Request, event_id: str) -> Response:
        serializer = PurchaseInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            with transaction.atomic():
                ticket = deps.get_event_service().purchase_ticket(
                    event_id,
                    serializer.validated_data["tier"],
                    owner_id=str(request.user.pk),
                    reference=serializer.validated_data["reference"],
                    discount_code=serializer.validated_data.get("discount_code"),
                )
        except DomainError as exc:
            return error_response(exc)
        return Response(TicketSerializer(ticket).data, status=status.HTTP_201_CREATED)


class TicketListView(APIView):
    """Handler for GET /api/tickets"""

    def get(self, request: Request) -> Response:
        try:
            tickets = deps.get_event_service().list_tickets_for_owner(str(request.user.pk))
        except DomainError as exc:
            return error_response(exc)
        return Response(TicketSerializer(tickets, many=True).data)
