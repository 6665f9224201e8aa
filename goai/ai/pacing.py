"""
Cooperative pacing for the AI.

Every suspension point of a decision goes through a Pacer, so that a host UI gets the chance to repaint between steps.
While a budget of offline (bonus) cycles is available, waits are short and each one debits the budget.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from goai.core.config import DEFAULT_PACING, PacingSettings

logger = logging.getLogger(__name__)


@dataclass
class Pacer:
    stored_cycles: int = 0
    settings: PacingSettings = field(default=DEFAULT_PACING)

    async def wait_cycle(self, use_offline_cycles: bool = True) -> None:
        """Spend some time waiting. Significantly shorter if bonus cycles can be spent."""
        if use_offline_cycles and self.stored_cycles > 0:
            self.stored_cycles -= self.settings.cycle_cost
            await sleep(self.settings.short_delay_ms)
        else:
            await sleep(self.settings.long_delay_ms)

    async def scan_pause(self) -> None:
        """Yield once per scanned board row during full-board scans"""
        await sleep(self.settings.scan_delay_ms)


async def sleep(milliseconds: int) -> None:
    """A zero delay still yields to the event loop."""
    await asyncio.sleep(milliseconds / 1000)
