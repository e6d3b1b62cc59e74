"""Package/status store observed by the display layer."""

import logging
from typing import Callable, List, Optional

from .models import AgentRole, AgentStatus, FilmPackage, StoryInput, StoryboardImage

logger = logging.getLogger(__name__)

Listener = Callable[[str, "ProductionStore"], None]


class ProductionStore:
    """Holds the film package and per-role status for one production run.

    Every mutation is published to subscribed listeners as ``(event, store)``.
    Pipeline steps never read artifacts back from here; it only mirrors
    what the coordinators have produced.
    """

    def __init__(self, story_input: Optional[StoryInput] = None):
        self.package = FilmPackage(input=story_input or StoryInput(content=""))
        self.statuses: List[AgentStatus] = []
        self.active_role: Optional[AgentRole] = None
        self.is_processing = False
        self.is_generating_images = False
        self.error: Optional[str] = None
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self, event: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception as e:
                logger.error(f"Store listener failed on '{event}': {str(e)}", exc_info=True)

    def status_for(self, role: AgentRole) -> Optional[AgentStatus]:
        return next((s for s in self.statuses if s.id == role), None)

    @property
    def processing_role(self) -> Optional[AgentRole]:
        status = next((s for s in self.statuses if s.is_processing), None)
        return status.id if status else None

    def reset(self, story_input: StoryInput, roles: List[AgentRole]) -> None:
        """Start a new run: fresh package, every role in ``roles`` pending."""
        self.package = FilmPackage(input=story_input)
        self.statuses = [AgentStatus.for_role(role) for role in roles]
        self.active_role = roles[0] if roles else None
        self.is_generating_images = False
        self.error = None
        self._publish("reset")

    def set_processing(self, is_processing: bool) -> None:
        self.is_processing = is_processing
        self._publish("processing")

    def mark_processing(self, role: AgentRole) -> None:
        status = self.status_for(role)
        if status is None:
            raise ValueError(f"{role.value} is not part of the active sequence")
        if status.is_complete:
            raise ValueError(f"{role.value} already completed in this run")
        current = self.processing_role
        if current is not None and current != role:
            raise ValueError(f"{current.value} is still processing")

        status.is_processing = True
        self.active_role = role
        self._publish("status")

    def mark_complete(self, role: AgentRole) -> None:
        status = self.status_for(role)
        if status is None or not status.is_processing:
            raise ValueError(f"{role.value} is not processing")

        status.is_processing = False
        status.is_complete = True
        self._publish("status")

    def clear_processing(self, role: AgentRole) -> None:
        """Drop the processing flag of an aborted role without completing it."""
        status = self.status_for(role)
        if status is not None and status.is_processing:
            status.is_processing = False
            self._publish("status")

    def set_artifact(self, role: AgentRole, content: str) -> None:
        self.package.set_artifact(role, content)
        self._publish("artifact")

    def set_storyboard_prompts(self, prompts: List[str]) -> None:
        self.package.storyboard_prompts = list(prompts)
        self._publish("storyboard_prompts")

    def set_images(self, images: List[StoryboardImage]) -> None:
        # Always publish a copy so listeners never see later slot updates mutate it
        self.package.generated_images = list(images)
        self._publish("images")

    def set_generating_images(self, flag: bool) -> None:
        self.is_generating_images = flag
        self._publish("generating_images")

    def set_error(self, message: str) -> None:
        self.error = message
        self._publish("error")

    def select_role(self, role: AgentRole) -> None:
        self.active_role = AgentRole(role)
        self._publish("selection")
