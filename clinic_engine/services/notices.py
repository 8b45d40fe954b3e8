import asyncio
import logging

from clinic_engine.models.notices import ConsultationNotice

logger = logging.getLogger(__name__)

DEFAULT_BACKLOG = 10


class EncounterNotifier:
    """Hands consultation notices to the screens showing an encounter.

    Each subscriber holds at most ``backlog`` notices. When a screen falls
    behind, the oldest notice is discarded so the latest outcome is the one
    the clinician sees.
    """

    def __init__(self, backlog: int = DEFAULT_BACKLOG) -> None:
        self._backlog = backlog
        self._screens: dict[str, list[asyncio.Queue]] = {}

    def subscribe(self, encounter_id: str) -> asyncio.Queue:
        queue: asyncio.Queue = asyncio.Queue(self._backlog)
        self._screens.setdefault(encounter_id, []).append(queue)
        return queue

    def unsubscribe(self, encounter_id: str, queue: asyncio.Queue) -> None:
        screens = self._screens.get(encounter_id, [])
        if queue in screens:
            screens.remove(queue)
        if not screens:
            self._screens.pop(encounter_id, None)

    def notify(self, notice: ConsultationNotice) -> int:
        """Deliver ``notice``; returns how many screens received it."""
        screens = self._screens.get(notice.encounter_id, [])
        for queue in screens:
            if queue.full():
                dropped = queue.get_nowait()
                logger.debug("Dropped stale %s notice for %s", dropped.kind.value, notice.encounter_id)
            queue.put_nowait(notice)
        if not screens:
            logger.debug("No screen open for encounter %s; %s not shown", notice.encounter_id, notice.kind.value)
        return len(screens)
