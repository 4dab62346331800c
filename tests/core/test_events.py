"""Tests for domain events and the event bus."""

from myjiratickets.core.domain.events import (
    DomainEvent,
    EventBus,
    TicketImported,
    TicketUpdated,
    SyncFellBack,
)


class TestEventBus:
    """Tests for EventBus."""

    def test_subscribe_and_publish(self):
        bus = EventBus()
        received = []
        bus.subscribe(TicketImported, received.append)

        event = TicketImported(key="AB-1", source="html")
        bus.publish(event)

        assert received == [event]

    def test_handlers_only_get_their_type(self):
        bus = EventBus()
        received = []
        bus.subscribe(TicketUpdated, received.append)

        bus.publish(TicketImported(key="AB-1"))

        assert received == []

    def test_catch_all_handler(self):
        bus = EventBus()
        received = []
        bus.subscribe(DomainEvent, received.append)

        bus.publish(TicketImported(key="AB-1"))
        bus.publish(SyncFellBack(reason="offline"))

        assert [e.event_type for e in received] == ["TicketImported", "SyncFellBack"]

    def test_history(self):
        bus = EventBus()
        bus.publish(TicketImported(key="AB-1"))
        assert len(bus.get_history()) == 1

        bus.clear_history()
        assert bus.get_history() == []

    def test_events_have_ids(self):
        a = TicketImported(key="AB-1")
        b = TicketImported(key="AB-1")
        assert a.event_id != b.event_id

    def test_history_filtered_by_type(self):
        bus = EventBus()
        bus.publish(TicketImported(key="AB-1"))
        bus.publish(TicketUpdated(key="AB-1", changed_fields=("status",)))

        assert [e.key for e in bus.get_history(TicketUpdated)] == ["AB-1"]

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        bus.subscribe(TicketImported, received.append)
        bus.unsubscribe(TicketImported, received.append)

        bus.publish(TicketImported(key="AB-1"))

        assert received == []
