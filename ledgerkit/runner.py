"""Runs fixture scenarios and collects the events they produce."""

import asyncio
import logging
from typing import List

from ledgerkit.currency import Currency
from ledgerkit.events import CanonicalEvent
from ledgerkit.fixture import Fixture

logger = logging.getLogger(__name__)


class SimulatorRunner:
    """Plays fixtures in order, honouring each event's delay."""

    def __init__(self) -> None:
        self.fixtures: List[Fixture] = []

    def add_fixture(self, fixture: Fixture) -> None:
        self.fixtures.append(fixture)

    async def run_all(self) -> List[CanonicalEvent]:
        """Run every loaded fixture and return all generated events."""
        all_events: List[CanonicalEvent] = []
        for fixture in self.fixtures:
            logger.info("running fixture %s", fixture.name)
            events = fixture.to_canonical_events()
            for spec, event in zip(fixture.events, events):
                if spec.delay_ms:
                    await asyncio.sleep(spec.delay_ms / 1000)
                logger.info("generated event %s kind=%s", event.event_id, event.kind)
            all_events.extend(events)
        return all_events

    @classmethod
    def builtin_fixtures(cls) -> List[Fixture]:
        """The fixtures that ship with the simulator."""
        return [
            Fixture.successful_payment(5000, Currency.USD),
            Fixture.failed_payment(10000, Currency.USD),
            Fixture.refunded_payment(7500, Currency.EUR),
        ]