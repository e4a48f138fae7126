from typing import Callable, List, Optional

from ..models.schemas import Topic
from ..services.topic_catalog import find_topic, list_topics
from .controller import SessionController


class CoachHome:
    """Topic picker; owns at most one session at a time."""

    def __init__(self, session_factory: Callable[[str], SessionController]):
        self.session_factory = session_factory
        self.session: Optional[SessionController] = None

    @property
    def topics(self) -> List[Topic]:
        return list_topics()

    async def select_topic(self, topic_id: str) -> Optional[SessionController]:
        if find_topic(topic_id) is None:
            return None
        if self.session is not None:
            self.back()
        self.session = self.session_factory(topic_id)
        await self.session.mount()
        return self.session

    def back(self) -> None:
        if self.session is not None:
            self.session.teardown()
        self.session = None
