"""Capacity rules shared by the Event model and the RSVP ledger."""


def is_event_full(event) -> bool:
    """An event is full once its committed attendee slots reach its capacity."""
    return event.current_attendees >= event.max_attendees


def spots_remaining(max_attendees: int, attending_guests: int) -> int:
    """Remaining slots; negative only if the event was oversold before the ledger enforced capacity."""
    return max_attendees - attending_guests
