"""Tests for GenerationController command flows.

Tests cover:
- Validation before any gateway call
- In-flight flags around the prompt and paste flows
- Independent settling of the paste fan-out
- MCQ two-strike retry through the controller
- Stale result discarding after a newer command
- Save / load round trip
"""

import asyncio

import pytest

from client.mcq_retry import McqPhase
from client.placeholders import prompt_placeholders
from client.transitions import MCQ_RETRY_MESSAGE
from config.placement_config import GENERATING_TEXT_MARKER
from models.content import GeneratedContent, GenerationMode, SocialPostType, UserLevel
from models.errors import GatewayError
from tests.helpers import blocking, make_image, make_mcq, make_text


async def until(event: asyncio.Event):
    await asyncio.wait_for(event.wait(), timeout=1)


# =============================================================================
# Validation
# =============================================================================

class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("prompt", ["", "   ", "\n\t"])
    async def test_blank_prompt_changes_no_content(self, controller, content_gateway, prompt):
        before = controller.snapshot

        await controller.generate_from_prompt(prompt)

        after = controller.snapshot
        assert after.current_text == before.current_text
        assert after.current_images is before.current_images
        assert after.current_mcqs is before.current_mcqs
        assert after.last_error == "Please enter a prompt to generate content"
        content_gateway.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_prompt_requires_identity(self, anonymous_controller, content_gateway):
        await anonymous_controller.generate_from_prompt("Volcanoes")

        assert anonymous_controller.snapshot.last_error == "Please sign in to generate content"
        content_gateway.generate_content.assert_not_called()

    @pytest.mark.asyncio
    async def test_blank_paste_is_rejected(self, controller, content_gateway):
        await controller.process_pasted_text("  ")

        assert controller.snapshot.last_error == "Please paste some text to process"
        content_gateway.generate_images.assert_not_called()
        content_gateway.generate_mcqs.assert_not_called()

    @pytest.mark.asyncio
    async def test_paste_requires_identity(self, anonymous_controller, content_gateway):
        await anonymous_controller.process_pasted_text("Some text")

        assert anonymous_controller.snapshot.last_error == "Please sign in to process text"
        content_gateway.generate_images.assert_not_called()

    @pytest.mark.asyncio
    async def test_uses_stored_prompt_when_none_given(self, controller, content_gateway):
        controller.set_prompt("Stored prompt")

        await controller.generate_from_prompt()

        content_gateway.generate_content.assert_awaited_once_with("Stored prompt")


# =============================================================================
# Prompt flow
# =============================================================================

class TestPromptFlow:
    @pytest.mark.asyncio
    async def test_flags_set_before_gateway_resolves(self, controller, content_gateway, generated_content):
        side_effect, release, started = blocking(result=generated_content)
        content_gateway.generate_content.side_effect = side_effect

        task = asyncio.create_task(controller.generate_from_prompt("Volcanoes"))
        await until(started)

        flags = controller.snapshot.flags
        assert flags.text_in_flight and flags.images_in_flight and flags.mcqs_in_flight
        assert controller.snapshot.current_text == GENERATING_TEXT_MARKER
        assert controller.snapshot.current_images == prompt_placeholders()

        release.set()
        await task
        assert not controller.snapshot.flags.generating

    @pytest.mark.asyncio
    async def test_first_commit_already_has_flags(self, controller):
        seen = []
        controller.subscribe(seen.append)

        await controller.generate_from_prompt("Volcanoes")

        assert seen[0].flags.text_in_flight
        assert not seen[-1].flags.generating

    @pytest.mark.asyncio
    async def test_success_replaces_content(self, controller, generated_content):
        await controller.generate_from_prompt("Volcanoes")

        snapshot = controller.snapshot
        assert snapshot.current_text == generated_content.text
        assert snapshot.current_images == generated_content.images
        assert snapshot.current_mcqs == generated_content.mcqs
        assert snapshot.last_error is None

    @pytest.mark.asyncio
    async def test_failure_clears_flags_and_records_error(self, controller, content_gateway):
        content_gateway.generate_content.side_effect = GatewayError("Failed to generate content: quota")

        await controller.generate_from_prompt("Volcanoes")

        snapshot = controller.snapshot
        assert not snapshot.flags.generating
        assert snapshot.last_error == "Failed to generate content: quota"
        assert snapshot.current_images == prompt_placeholders()

    @pytest.mark.asyncio
    async def test_error_never_escapes(self, controller, content_gateway):
        content_gateway.generate_content.side_effect = GatewayError("boom")

        # must not raise
        await controller.generate_from_prompt("Volcanoes")


# =============================================================================
# Paste flow
# =============================================================================

class TestPasteFlow:
    @pytest.mark.asyncio
    async def test_short_text_gets_one_placeholder_at_last_line(self, controller, content_gateway):
        side_effect, release, started = blocking(result=[])
        content_gateway.generate_images.side_effect = side_effect

        task = asyncio.create_task(controller.process_pasted_text(make_text(4)))
        await until(started)

        images = controller.snapshot.current_images
        assert [image.after_line for image in images] == [3]
        assert images[0].is_placeholder

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_twenty_lines_get_placeholders_at_5_10_15(self, controller, content_gateway):
        side_effect, release, started = blocking(result=[])
        content_gateway.generate_images.side_effect = side_effect

        task = asyncio.create_task(controller.process_pasted_text(make_text(20)))
        await until(started)

        assert [image.after_line for image in controller.snapshot.current_images] == [5, 10, 15]

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_image_failure_keeps_placeholders(self, controller, content_gateway):
        side_effect, release, started = blocking(error=GatewayError("Pexels API key is not configured"))
        content_gateway.generate_images.side_effect = side_effect

        task = asyncio.create_task(controller.process_pasted_text(make_text(20)))
        await until(started)
        placeholders = controller.snapshot.current_images

        release.set()
        await task

        assert controller.snapshot.current_images is placeholders
        assert controller.snapshot.mcq_phase == McqPhase.SUCCESS

    @pytest.mark.asyncio
    async def test_empty_image_result_clears_placeholders(self, controller, content_gateway):
        content_gateway.generate_images.return_value = []

        await controller.process_pasted_text(make_text(20))

        assert controller.snapshot.current_images == ()

    @pytest.mark.asyncio
    async def test_images_settle_independently_of_mcqs(self, controller, content_gateway):
        mcq_effect, release_mcqs, mcqs_started = blocking(result=[make_mcq()])
        content_gateway.generate_mcqs.side_effect = mcq_effect
        images_seen = asyncio.Event()

        def on_change(snapshot):
            if not snapshot.flags.images_in_flight:
                images_seen.set()

        controller.subscribe(on_change)
        task = asyncio.create_task(controller.process_pasted_text(make_text(20)))
        await until(mcqs_started)
        await until(images_seen)

        assert not controller.snapshot.flags.images_in_flight
        assert controller.snapshot.flags.mcqs_in_flight

        release_mcqs.set()
        await task

        assert not controller.snapshot.flags.generating
        assert controller.snapshot.current_mcqs == (make_mcq(),)

    @pytest.mark.asyncio
    async def test_success_applies_both_results(self, controller):
        await controller.process_pasted_text(make_text(20))

        snapshot = controller.snapshot
        assert snapshot.current_text == make_text(20)
        assert snapshot.current_images == (make_image(5, 1), make_image(10, 2))
        assert len(snapshot.current_mcqs) == 3
        assert snapshot.mcq_phase == McqPhase.SUCCESS


# =============================================================================
# MCQ retry
# =============================================================================

class TestMcqRetry:
    @pytest.mark.asyncio
    async def test_two_strikes(self, controller, content_gateway):
        content_gateway.generate_mcqs.side_effect = GatewayError("Quota exceeded")

        await controller.process_pasted_text(make_text(20))
        assert controller.snapshot.mcq_phase == McqPhase.FAILED_ONCE
        assert controller.snapshot.mcq.retry_offered
        assert controller.snapshot.mcq_error_message == MCQ_RETRY_MESSAGE

        await controller.retry_mcq_generation()
        assert controller.snapshot.mcq_phase == McqPhase.FAILED_TWICE
        assert controller.snapshot.mcq_error_message == "Quota exceeded"
        assert content_gateway.generate_mcqs.await_count == 2

    @pytest.mark.asyncio
    async def test_retry_success(self, controller, content_gateway):
        content_gateway.generate_mcqs.side_effect = [GatewayError("flaky"), [make_mcq(7)]]

        await controller.process_pasted_text(make_text(20))
        await controller.retry_mcq_generation()

        assert controller.snapshot.mcq_phase == McqPhase.SUCCESS
        assert controller.snapshot.current_mcqs == (make_mcq(7),)
        assert controller.snapshot.mcq_error_message is None

    @pytest.mark.asyncio
    async def test_retry_from_failed_twice_makes_a_real_call(self, controller, content_gateway):
        content_gateway.generate_mcqs.side_effect = [GatewayError("a"), GatewayError("b"), [make_mcq()]]
        await controller.process_pasted_text(make_text(20))
        await controller.retry_mcq_generation()
        assert controller.snapshot.mcq_phase == McqPhase.FAILED_TWICE

        await controller.retry_mcq_generation()

        assert content_gateway.generate_mcqs.await_count == 3
        assert controller.snapshot.mcq_phase == McqPhase.SUCCESS

    @pytest.mark.asyncio
    async def test_retry_ignored_after_success(self, controller, content_gateway):
        await controller.process_pasted_text(make_text(20))

        await controller.retry_mcq_generation()

        assert content_gateway.generate_mcqs.await_count == 1
        assert controller.snapshot.mcq_phase == McqPhase.SUCCESS

    @pytest.mark.asyncio
    async def test_retry_after_prompt_flow_replaces_questions(self, controller, content_gateway):
        await controller.generate_from_prompt("Volcanoes")
        assert controller.snapshot.mcq_phase == McqPhase.IDLE

        await controller.retry_mcq_generation()

        content_gateway.generate_mcqs.assert_awaited_once_with(make_text(12), None)
        assert controller.snapshot.mcq_phase == McqPhase.SUCCESS
        assert controller.snapshot.current_mcqs == (make_mcq(1), make_mcq(2), make_mcq(3))

    @pytest.mark.asyncio
    async def test_retry_passes_difficulty(self, controller, content_gateway):
        from models.content import DifficultyLevel

        content_gateway.generate_mcqs.side_effect = [GatewayError("flaky"), [make_mcq()]]
        await controller.process_pasted_text(make_text(20))

        await controller.retry_mcq_generation(DifficultyLevel.HARD)

        content_gateway.generate_mcqs.assert_awaited_with(make_text(20), DifficultyLevel.HARD)


# =============================================================================
# Stale results
# =============================================================================

class TestStaleResults:
    @pytest.mark.asyncio
    async def test_late_prompt_result_is_discarded_after_clear(self, controller, content_gateway, generated_content):
        side_effect, release, started = blocking(result=generated_content)
        content_gateway.generate_content.side_effect = side_effect

        task = asyncio.create_task(controller.generate_from_prompt("Volcanoes"))
        await until(started)
        controller.clear()
        release.set()
        await task

        assert controller.snapshot.current_text == ""
        assert controller.snapshot.current_images == ()

    @pytest.mark.asyncio
    async def test_late_result_does_not_overwrite_newer_generation(self, controller, content_gateway):
        old = GeneratedContent(text="old text")
        new = GeneratedContent(text="new text")
        side_effect, release, started = blocking(result=old)
        content_gateway.generate_content.side_effect = side_effect

        first = asyncio.create_task(controller.generate_from_prompt("first"))
        await until(started)
        content_gateway.generate_content.side_effect = None
        content_gateway.generate_content.return_value = new
        await controller.generate_from_prompt("second")
        release.set()
        await first

        assert controller.snapshot.current_text == "new text"
        assert not controller.snapshot.flags.generating

    @pytest.mark.asyncio
    async def test_clear_bumps_epoch(self, controller):
        epoch = controller.snapshot.epoch

        controller.clear()

        assert controller.snapshot.epoch == epoch + 1


# =============================================================================
# Social post
# =============================================================================

class TestSocialPost:
    @pytest.mark.asyncio
    async def test_post_is_stored(self, controller, content_gateway):
        await controller.process_pasted_text(make_text(20))

        await controller.generate_social_post(SocialPostType.TIPS_CAROUSEL, UserLevel.BEGINNER)

        assert controller.snapshot.social_post == "Five things I learned today"
        content_gateway.generate_social_post.assert_awaited_once_with(
            make_text(20), SocialPostType.TIPS_CAROUSEL, UserLevel.BEGINNER
        )

    @pytest.mark.asyncio
    async def test_requires_content(self, controller, content_gateway):
        await controller.generate_social_post(SocialPostType.STATS_BASED)

        assert controller.snapshot.last_error == "No content available to generate social media post"
        content_gateway.generate_social_post.assert_not_called()

    @pytest.mark.asyncio
    async def test_failure_sets_error(self, controller, content_gateway):
        content_gateway.generate_social_post.side_effect = GatewayError("Failed to generate social media post")
        await controller.process_pasted_text(make_text(20))

        await controller.generate_social_post(SocialPostType.STATS_BASED)

        assert controller.snapshot.social_post == ""
        assert controller.snapshot.last_error == "Failed to generate social media post"
        assert not controller.snapshot.flags.social_post_in_flight


# =============================================================================
# Saved content
# =============================================================================

class TestSavedContent:
    @pytest.mark.asyncio
    async def test_save_then_load_round_trip(self, controller, persistence):
        await controller.generate_from_prompt("Volcanoes")
        original = controller.snapshot

        item = await controller.save_current("My volcano notes")
        controller.clear()
        controller.load_saved_item(item)

        loaded = controller.snapshot
        assert loaded.current_text == original.current_text
        assert loaded.current_images == original.current_images
        assert loaded.current_mcqs == original.current_mcqs
        assert persistence.items[item.id].title == "My volcano notes"

    @pytest.mark.asyncio
    async def test_save_adds_to_saved_items(self, controller):
        await controller.process_pasted_text(make_text(8))

        item = await controller.save_current("Notes")

        assert controller.snapshot.saved_items == (item,)
        assert not controller.snapshot.flags.saving

    @pytest.mark.asyncio
    async def test_save_requires_title(self, controller, persistence):
        await controller.process_pasted_text(make_text(8))

        assert await controller.save_current("  ") is None
        assert controller.snapshot.last_error == "Please enter a title for your content"
        assert persistence.items == {}

    @pytest.mark.asyncio
    async def test_save_blocked_while_generating(self, controller, content_gateway, persistence):
        side_effect, release, started = blocking(result=[])
        content_gateway.generate_images.side_effect = side_effect
        task = asyncio.create_task(controller.process_pasted_text(make_text(8)))
        await until(started)

        assert await controller.save_current("Too early") is None
        assert persistence.items == {}

        release.set()
        await task

    @pytest.mark.asyncio
    async def test_refresh_and_delete(self, controller, persistence):
        await controller.process_pasted_text(make_text(8))
        first = await controller.save_current("First")
        second = await controller.save_current("Second")

        await controller.refresh_saved_items()
        assert [item.id for item in controller.snapshot.saved_items] == [second.id, first.id]

        await controller.delete_saved_item(first.id)
        assert controller.snapshot.saved_items == (second,)

    @pytest.mark.asyncio
    async def test_delete_missing_item_sets_error(self, controller):
        await controller.delete_saved_item("missing")

        assert controller.snapshot.last_error == "Content not found or you don't have permission to delete it"

    @pytest.mark.asyncio
    async def test_load_cancels_in_flight_generation(self, controller, content_gateway, generated_content):
        await controller.process_pasted_text(make_text(8))
        item = await controller.save_current("Saved")
        side_effect, release, started = blocking(result=generated_content)
        content_gateway.generate_content.side_effect = side_effect

        task = asyncio.create_task(controller.generate_from_prompt("Something else"))
        await until(started)
        controller.load_saved_item(item)
        release.set()
        await task

        assert controller.snapshot.current_text == make_text(8)
        assert not controller.snapshot.flags.generating


class TestInputs:
    def test_mode_and_inputs(self, controller):
        controller.set_mode(GenerationMode.PASTE)
        controller.set_pasted_text("pasted")

        assert controller.snapshot.mode == GenerationMode.PASTE
        assert controller.snapshot.pasted_text == "pasted"

    def test_unsubscribe(self, controller):
        seen = []
        unsubscribe = controller.subscribe(seen.append)
        controller.set_prompt("a")
        unsubscribe()
        controller.set_prompt("b")

        assert len(seen) == 1
