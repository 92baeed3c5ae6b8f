"""Tests for the EventBus."""

from fishbowl.events import (
    EventBus,
    ParticleRemovedEvent,
    ParticleSpawnedEvent,
    RemovalReason,
)


class TestEventBus:
    """Test suite for EventBus functionality."""

    def test_emit_reaches_subscriber(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(ParticleRemovedEvent, received.append)

        event = ParticleRemovedEvent(particle_id=4, reason=RemovalReason.EATEN, fish_id=2)
        bus.emit(event)

        assert received == [event]

    def test_subscribers_only_see_their_type(self) -> None:
        bus = EventBus()
        received: list = []
        bus.subscribe(ParticleSpawnedEvent, received.append)
        bus.emit(ParticleRemovedEvent(particle_id=1))
        assert received == []
        assert bus.total_emit_count == 1

    def test_unsubscribe(self) -> None:
        bus = EventBus()
        received: list = []
        unsubscribe = bus.subscribe(ParticleSpawnedEvent, received.append)
        unsubscribe()
        bus.emit(ParticleSpawnedEvent(particle_id=1))
        assert received == []
        assert bus.subscriber_count(ParticleSpawnedEvent) == 0

    def test_failing_subscriber_does_not_block_others(self, caplog) -> None:
        bus = EventBus()
        received: list = []

        def broken(event: ParticleSpawnedEvent) -> None:
            raise RuntimeError("boom")

        bus.subscribe(ParticleSpawnedEvent, broken)
        bus.subscribe(ParticleSpawnedEvent, received.append)
        bus.emit(ParticleSpawnedEvent(particle_id=9))

        assert [e.particle_id for e in received] == [9]
        assert "Error in event subscriber" in caplog.text

    def test_removal_reason_values(self) -> None:
        assert [r.value for r in RemovalReason] == ["eaten", "floor", "surface"]
