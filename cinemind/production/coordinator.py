from typing import Awaitable, Callable, Dict, Any, List, Optional, Tuple
import asyncio
import logging

from ..generation.client import GenerationClient
from ..models import AgentOutput, AgentRole, InputType, StoryInput
from ..store import ProductionStore
from ..storyboard.coordinator import StoryboardCoordinator
from .agents.scriptwriter_agent import ScriptwriterAgent
from .agents.director_agent import DirectorAgent
from .agents.cinematographer_agent import CinematographerAgent
from .agents.producer_agent import ProducerAgent
from .agents.editor_agent import EditorAgent
from .agents.marketing_agent import MarketingAgent

logger = logging.getLogger(__name__)

RolePredicate = Callable[[StoryInput, bool], bool]


def _always(story_input: StoryInput, rewrite_script: bool) -> bool:
    return True


def _needs_scriptwriter(story_input: StoryInput, rewrite_script: bool) -> bool:
    return story_input.input_type == InputType.LOGLINE or rewrite_script


# Pipeline membership, in execution order
PIPELINE: List[Tuple[AgentRole, RolePredicate]] = [
    (AgentRole.SCRIPTWRITER, _needs_scriptwriter),
    (AgentRole.DIRECTOR, _always),
    (AgentRole.CINEMATOGRAPHER, _always),
    (AgentRole.PRODUCER, _always),
    (AgentRole.EDITOR, _always),
    (AgentRole.MARKETING, _always),
]


def active_roles(story_input: StoryInput, rewrite_script: bool = False) -> List[AgentRole]:
    """Evaluate the pipeline predicates once for a run."""
    return [role for role, predicate in PIPELINE if predicate(story_input, rewrite_script)]


class ProductionCoordinator:
    """Runs the text agents strictly in sequence, then launches the storyboard phase.

    Each step receives the artifacts returned by the earlier steps of this
    run; the store only mirrors progress for the display layer.
    """

    def __init__(
        self,
        client: Optional[GenerationClient] = None,
        store: Optional[ProductionStore] = None,
        storyboard: Optional[StoryboardCoordinator] = None,
    ):
        logger.info("Initializing ProductionCoordinator")
        self.client = client or GenerationClient()
        self.store = store or ProductionStore()

        self.scriptwriter = ScriptwriterAgent(self.client)
        self.director = DirectorAgent(self.client)
        self.cinematographer = CinematographerAgent(self.client)
        self.producer = ProducerAgent(self.client)
        self.editor = EditorAgent(self.client)
        self.marketing = MarketingAgent(self.client)
        self.storyboard = storyboard or StoryboardCoordinator(self.client, self.store)

        self.asset_task: Optional[asyncio.Task] = None

        self._steps: Dict[AgentRole, Callable[[StoryInput, Dict[AgentRole, str]], Awaitable[AgentOutput]]] = {
            AgentRole.SCRIPTWRITER: self._run_scriptwriter,
            AgentRole.DIRECTOR: self._run_director,
            AgentRole.CINEMATOGRAPHER: self._run_cinematographer,
            AgentRole.PRODUCER: self._run_producer,
            AgentRole.EDITOR: self._run_editor,
            AgentRole.MARKETING: self._run_marketing,
        }

    async def _run_scriptwriter(self, story_input: StoryInput, artifacts: Dict[AgentRole, str]) -> AgentOutput:
        return await self.scriptwriter.write_script(story_input)

    async def _run_director(self, story_input: StoryInput, artifacts: Dict[AgentRole, str]) -> AgentOutput:
        # Uploaded content goes straight to the director when no script was written
        script_text = artifacts.get(AgentRole.SCRIPTWRITER) or story_input.content
        return await self.director.break_down(story_input, script_text)

    async def _run_cinematographer(self, story_input: StoryInput, artifacts: Dict[AgentRole, str]) -> AgentOutput:
        return await self.cinematographer.plan_shots(story_input, artifacts[AgentRole.DIRECTOR])

    async def _run_producer(self, story_input: StoryInput, artifacts: Dict[AgentRole, str]) -> AgentOutput:
        return await self.producer.plan_budget(story_input, artifacts[AgentRole.CINEMATOGRAPHER])

    async def _run_editor(self, story_input: StoryInput, artifacts: Dict[AgentRole, str]) -> AgentOutput:
        return await self.editor.plan_edit(
            story_input,
            artifacts[AgentRole.DIRECTOR],
            artifacts[AgentRole.PRODUCER],
        )

    async def _run_marketing(self, story_input: StoryInput, artifacts: Dict[AgentRole, str]) -> AgentOutput:
        return await self.marketing.write_campaign(story_input, artifacts[AgentRole.DIRECTOR])

    async def produce(self, story_input: StoryInput, rewrite_script: bool = False) -> Dict[str, Any]:
        """Run one production through the sequential text pipeline.

        On success the storyboard phase is started as a separate task
        (``asset_task``) and this method returns without waiting for it.
        A failing step stops the run; artifacts completed before it stay.

        Args:
            story_input: Run configuration and raw content
            rewrite_script: Polish an uploaded script before breaking it down

        Returns:
            Dict with ``status`` (success, failed or skipped), ``completed_roles``,
            ``failed_role``, ``fallback_roles`` and ``error``
        """
        if not story_input.has_content:
            logger.warning("Production requested without content, nothing to do")
            return {
                "status": "skipped",
                "completed_roles": [],
                "failed_role": None,
                "fallback_roles": [],
                "error": None,
            }

        # A storyboard still running for the previous run must not write into this one
        if self.asset_task is not None and not self.asset_task.done():
            logger.warning("Cancelling storyboard phase of the previous run")
            self.asset_task.cancel()
        self.asset_task = None
        roles = active_roles(story_input, rewrite_script)
        logger.info(f"Starting production pipeline: {', '.join(role.value for role in roles)}")

        self.store.reset(story_input, roles)
        self.store.set_processing(True)

        artifacts: Dict[AgentRole, str] = {}
        fallback_roles: List[AgentRole] = []
        current: Optional[AgentRole] = None

        try:
            for step, role in enumerate(roles, start=1):
                current = role
                logger.info(f"Step {step}: {role.value}")
                self.store.mark_processing(role)

                output = await self._steps[role](story_input, artifacts)
                if not output.completed:
                    fallback_roles.append(role)

                artifacts[role] = output.content
                self.store.set_artifact(role, output.content)
                self.store.mark_complete(role)
            current = None

            self.asset_task = asyncio.create_task(
                self.storyboard.generate_storyboard(
                    artifacts[AgentRole.DIRECTOR],
                    artifacts[AgentRole.CINEMATOGRAPHER],
                )
            )

            logger.info("Production pipeline completed, storyboard phase started")
            return {
                "status": "success",
                "completed_roles": list(artifacts),
                "failed_role": None,
                "fallback_roles": fallback_roles,
                "error": None,
            }

        except Exception as e:
            logger.error(f"Pipeline breakdown at {current.value if current else 'setup'}: {str(e)}", exc_info=True)
            if current is not None:
                self.store.clear_processing(current)
            self.store.set_error(f"Production halted at {current.value if current else 'setup'}: {str(e)}")
            return {
                "status": "failed",
                "completed_roles": list(artifacts),
                "failed_role": current,
                "fallback_roles": fallback_roles,
                "error": str(e),
            }
        finally:
            self.store.set_processing(False)

    async def wait_for_assets(self) -> Optional[Dict[str, Any]]:
        """Await the storyboard phase of the last successful run, if any."""
        if self.asset_task is None:
            return None
        return await self.asset_task

    async def produce_all(self, story_input: StoryInput, rewrite_script: bool = False) -> Dict[str, Any]:
        """Run the text pipeline and wait for its storyboard phase."""
        result = await self.produce(story_input, rewrite_script)
        if result["status"] == "success":
            result["storyboard"] = await self.wait_for_assets()
        return result
