"""Production coordinator unit tests

Tests the sequential text pipeline with a mocked generation client:
- role sequence and Scriptwriter inclusion
- artifacts threaded from step to step
- abort without rollback on a failing step
- storyboard phase launched only after the last role completes

No real API calls.
"""

import asyncio

import pytest

from cinemind.generation.client import GenerationError
from cinemind.models import AgentRole, InputType, StoryInput
from cinemind.production.coordinator import ProductionCoordinator, active_roles
from tests.mocks.generation_client import MockGenerationClient

ALL_ROLES = [
    AgentRole.SCRIPTWRITER,
    AgentRole.DIRECTOR,
    AgentRole.CINEMATOGRAPHER,
    AgentRole.PRODUCER,
    AgentRole.EDITOR,
    AgentRole.MARKETING,
]


def _coordinator(client, store):
    return ProductionCoordinator(client=client, store=store)


class TestActiveRoles:
    def test_logline_includes_scriptwriter_first(self, logline_input):
        assert active_roles(logline_input) == ALL_ROLES

    def test_logline_ignores_rewrite_flag(self, logline_input):
        assert active_roles(logline_input, rewrite_script=True) == ALL_ROLES

    def test_script_without_rewrite_drops_scriptwriter(self, script_input):
        assert active_roles(script_input) == ALL_ROLES[1:]

    def test_script_with_rewrite_keeps_scriptwriter(self, script_input):
        assert active_roles(script_input, rewrite_script=True) == ALL_ROLES


class TestSequentialPipeline:
    @pytest.mark.asyncio
    async def test_example_run(self, logline_input, store):
        client = MockGenerationClient(structured={"prompts": ["p1", "p2", "p3", "p4"]})
        coordinator = _coordinator(client, store)

        result = await coordinator.produce_all(logline_input)

        assert result["status"] == "success"
        assert result["completed_roles"] == ALL_ROLES
        assert client.keys() == ["scriptwriter", "director", "cinematographer", "producer", "editor", "marketing"]
        assert store.package.populated_roles() == ALL_ROLES
        assert all(status.is_complete for status in store.statuses)
        assert store.is_processing is False
        assert result["storyboard"]["status"] == "success"
        assert len(store.package.generated_images) == 4

    @pytest.mark.asyncio
    async def test_completion_follows_prefix_order(self, logline_input, store):
        snapshots = []

        def on_change(event, changed_store):
            if event == "status":
                snapshots.append((
                    [s.is_complete for s in changed_store.statuses],
                    sum(1 for s in changed_store.statuses if s.is_processing),
                ))

        store.subscribe(on_change)
        await _coordinator(MockGenerationClient(), store).produce(logline_input)

        for completes, processing in snapshots:
            assert processing <= 1
            done = completes.count(True)
            assert completes == [True] * done + [False] * (len(completes) - done)
        assert snapshots[-1][0] == [True] * len(ALL_ROLES)

    @pytest.mark.asyncio
    async def test_processing_flag_set_during_steps(self, logline_input, store):
        flags = []
        client = MockGenerationClient()
        client.on_call = lambda call: flags.append((call["kind"], store.is_processing, store.processing_role))

        await _coordinator(client, store).produce(logline_input)

        text_flags = [f for f in flags if f[0] == "text"]
        assert all(is_processing for _, is_processing, _ in text_flags)
        assert [role for _, _, role in text_flags] == ALL_ROLES

    @pytest.mark.asyncio
    async def test_director_reads_generated_script(self, logline_input, store):
        client = MockGenerationClient(texts={"scriptwriter": "GENERATED SCREENPLAY"})
        await _coordinator(client, store).produce(logline_input)

        assert "GENERATED SCREENPLAY" in client.prompt_for("director")
        assert store.package.generated_script == "GENERATED SCREENPLAY"

    @pytest.mark.asyncio
    async def test_script_upload_goes_straight_to_director(self, script_input, store):
        client = MockGenerationClient()
        result = await _coordinator(client, store).produce(script_input)

        assert result["status"] == "success"
        assert "scriptwriter" not in client.keys()
        assert "A waitress counts tips" in client.prompt_for("director")
        assert store.package.generated_script is None
        assert [s.id for s in store.statuses] == ALL_ROLES[1:]

    @pytest.mark.asyncio
    async def test_script_rewrite_polishes_before_director(self, script_input, store):
        client = MockGenerationClient(texts={"scriptwriter": "POLISHED DRAFT"})
        await _coordinator(client, store).produce(script_input, rewrite_script=True)

        assert client.keys()[0] == "scriptwriter"
        assert "EXISTING SCRIPT CONTENT" in client.prompt_for("scriptwriter")
        assert "POLISHED DRAFT" in client.prompt_for("director")

    @pytest.mark.asyncio
    async def test_artifacts_threaded_to_dependents(self, logline_input, store):
        client = MockGenerationClient(texts={
            "director": "BREAKDOWN",
            "cinematographer": "SHOTS",
            "producer": "BUDGET",
        })
        await _coordinator(client, store).produce(logline_input)

        assert "BREAKDOWN" in client.prompt_for("cinematographer")
        assert "SHOTS" in client.prompt_for("producer")
        assert "BREAKDOWN" in client.prompt_for("editor")
        assert "BUDGET" in client.prompt_for("editor")
        assert "BREAKDOWN" in client.prompt_for("marketing")

    @pytest.mark.asyncio
    async def test_fallback_sentinel_is_stored_and_run_continues(self, logline_input, store):
        client = MockGenerationClient(texts={"director": "   "})
        result = await _coordinator(client, store).produce(logline_input)

        assert result["status"] == "success"
        assert result["fallback_roles"] == [AgentRole.DIRECTOR]
        assert store.package.script_breakdown == "Director failed to generate output."
        assert "Director failed to generate output." in client.prompt_for("cinematographer")

    @pytest.mark.asyncio
    async def test_real_answer_never_yields_sentinel(self, logline_input, store):
        client = MockGenerationClient(texts={"director": "A real breakdown"})
        await _coordinator(client, store).produce(logline_input)
        assert store.package.script_breakdown == "A real breakdown"


class TestFailures:
    @pytest.mark.asyncio
    async def test_failing_step_aborts_remaining_roles(self, logline_input, store):
        client = MockGenerationClient(texts={"producer": GenerationError("Backend Error (500): quota")})
        coordinator = _coordinator(client, store)

        result = await coordinator.produce(logline_input)

        assert result["status"] == "failed"
        assert result["failed_role"] == AgentRole.PRODUCER
        assert "quota" in result["error"]
        assert client.keys() == ["scriptwriter", "director", "cinematographer", "producer"]

        package = store.package
        assert package.generated_script is not None
        assert package.script_breakdown is not None
        assert package.shot_list is not None
        assert package.budget_report is None
        assert package.edit_plan is None
        assert package.marketing_copy is None

        producer = store.status_for(AgentRole.PRODUCER)
        assert producer.is_processing is False
        assert producer.is_complete is False
        assert store.is_processing is False
        assert "Producer" in store.error

    @pytest.mark.asyncio
    async def test_failed_run_never_starts_storyboard(self, logline_input, store):
        client = MockGenerationClient(texts={"marketing": GenerationError("timeout")})
        coordinator = _coordinator(client, store)

        await coordinator.produce(logline_input)

        assert coordinator.asset_task is None
        assert await coordinator.wait_for_assets() is None
        assert client.keys("structured") == []

    @pytest.mark.asyncio
    async def test_empty_content_is_a_no_op(self, store):
        client = MockGenerationClient()
        result = await _coordinator(client, store).produce(StoryInput(content="  ", input_type=InputType.LOGLINE))

        assert result["status"] == "skipped"
        assert client.calls == []
        assert store.statuses == []
        assert store.is_processing is False

    @pytest.mark.asyncio
    async def test_new_run_resets_previous_package(self, logline_input, store):
        coordinator = _coordinator(MockGenerationClient(), store)
        await coordinator.produce_all(logline_input)

        coordinator.client.texts = {"director": GenerationError("down")}
        await coordinator.produce(logline_input)

        assert store.package.generated_script is not None
        assert store.package.shot_list is None
        assert store.package.generated_images == []

    @pytest.mark.asyncio
    async def test_new_run_cancels_pending_storyboard(self, logline_input, store):
        client = MockGenerationClient(structured={"prompts": ["OLD1"]})
        coordinator = _coordinator(client, store)
        await coordinator.produce(logline_input)
        previous_task = coordinator.asset_task

        client.texts = {"director": GenerationError("down")}
        second = StoryInput(content="second", input_type=InputType.SCRIPT)
        result = await coordinator.produce(second)
        await asyncio.gather(previous_task, return_exceptions=True)

        assert result["status"] == "failed"
        assert previous_task.cancelled()
        assert coordinator.asset_task is None
        assert store.package.input.content == "second"
        assert store.package.storyboard_prompts == []
        assert store.package.generated_images == []
        assert client.keys("structured") == []
        assert client.keys("image") == []


class TestAssetHandoff:
    @pytest.mark.asyncio
    async def test_storyboard_starts_after_marketing_completes(self, logline_input, store):
        observed = []
        client = MockGenerationClient()

        def on_call(call):
            if call["kind"] == "structured":
                observed.append(store.status_for(AgentRole.MARKETING).is_complete)

        client.on_call = on_call
        coordinator = _coordinator(client, store)
        await coordinator.produce(logline_input)
        await coordinator.wait_for_assets()

        assert observed == [True]

    @pytest.mark.asyncio
    async def test_storyboard_uses_breakdown_and_shot_list(self, logline_input, store):
        client = MockGenerationClient(texts={"director": "BREAKDOWN", "cinematographer": "SHOTS"})
        coordinator = _coordinator(client, store)
        await coordinator.produce_all(logline_input)

        prompt = client.prompt_for("storyboard")
        assert "BREAKDOWN" in prompt
        assert "SHOTS" in prompt

    @pytest.mark.asyncio
    async def test_storyboard_failure_does_not_fail_production(self, logline_input, store):
        client = MockGenerationClient(structured=GenerationError("Backend Error (502)"))
        result = await _coordinator(client, store).produce_all(logline_input)

        assert result["status"] == "success"
        assert result["storyboard"]["status"] == "failed"
        assert store.error is None
        assert store.is_generating_images is False
