from events.services.event_service import EventService, parse_event_id

__all__ = ["EventService", "parse_event_id"]
