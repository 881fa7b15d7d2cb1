"""
GenerationController: owns the generation snapshot and runs the commands the
presentation layer issues.

Every state change is one of the pure functions in client.transitions,
committed synchronously between awaits and then broadcast to subscribers.
Commands never raise ContentError: validation and gateway failures end up in
snapshot.last_error / snapshot.mcq_error_message.
"""
import asyncio
import logging
from typing import Awaitable, Callable, List, Optional

from client import transitions
from client.auth_session import AuthSession
from client.gateways import AIContentGateway, PersistenceGateway
from client.outcomes import Outcome, Success, settle
from client.state import GenerationSnapshot
from models.content import (
    DifficultyLevel,
    GenerationMode,
    SavedContentItem,
    SocialPostType,
    UserLevel,
)
from models.errors import ValidationError

logger = logging.getLogger(__name__)

Listener = Callable[[GenerationSnapshot], None]


class GenerationController:
    def __init__(
        self,
        content_gateway: AIContentGateway,
        persistence_gateway: PersistenceGateway,
        session: AuthSession,
    ):
        self._content = content_gateway
        self._persistence = persistence_gateway
        self._session = session
        self._snapshot = transitions.initial()
        self._listeners: List[Listener] = []

    @property
    def snapshot(self) -> GenerationSnapshot:
        return self._snapshot

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every committed snapshot; returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, snapshot: GenerationSnapshot) -> None:
        self._snapshot = snapshot
        for listener in list(self._listeners):
            listener(snapshot)

    def _is_current(self, epoch: int, what: str) -> bool:
        if self._snapshot.epoch != epoch:
            logger.debug(f"Discarding stale {what} result from epoch {epoch} (now {self._snapshot.epoch})")
            return False
        return True

    def _next_epoch(self) -> int:
        return self._snapshot.epoch + 1

    def _require_identity(self, message: str) -> None:
        if not self._session.is_authenticated:
            raise ValidationError(message)

    @staticmethod
    def _require_text(value: str, message: str) -> None:
        if not value.strip():
            raise ValidationError(message)

    def _reject(self, error: ValidationError) -> None:
        logger.info(f"Command rejected: {error.message}")
        self._commit(transitions.reject(self._snapshot, error.message))

    # Inputs

    def set_mode(self, mode: GenerationMode) -> None:
        self._commit(transitions.set_mode(self._snapshot, mode))

    def set_prompt(self, prompt_text: str) -> None:
        self._commit(transitions.set_prompt(self._snapshot, prompt_text))

    def set_pasted_text(self, pasted_text: str) -> None:
        self._commit(transitions.set_pasted_text(self._snapshot, pasted_text))

    # Generation

    async def generate_from_prompt(self, prompt_text: Optional[str] = None) -> None:
        """
        Generate text, images and questions from a prompt in one gateway call.
        A failure is terminal for this command; placeholders stay visible.
        """
        prompt = self._snapshot.prompt_text if prompt_text is None else prompt_text
        try:
            self._require_identity("Please sign in to generate content")
            self._require_text(prompt, "Please enter a prompt to generate content")
        except ValidationError as e:
            self._reject(e)
            return

        epoch = self._next_epoch()
        self._commit(transitions.begin_prompt_generation(self._snapshot, prompt, epoch))
        logger.info(f"[epoch {epoch}] Generating content for prompt of {len(prompt)} chars")

        outcome = await settle(self._content.generate_content(prompt))
        if not self._is_current(epoch, "prompt generation"):
            return
        if not isinstance(outcome, Success):
            logger.error(f"[epoch {epoch}] Content generation failed: {outcome.message}")
        self._commit(transitions.finish_prompt_generation(self._snapshot, outcome))

    async def _settle_tracked(
        self,
        awaitable: Awaitable,
        epoch: int,
        on_settled: Callable[[GenerationSnapshot], GenerationSnapshot],
    ) -> Outcome:
        outcome = await settle(awaitable)
        if self._snapshot.epoch == epoch:
            self._commit(on_settled(self._snapshot))
        return outcome

    async def process_pasted_text(self, pasted_text: Optional[str] = None) -> None:
        """
        Fetch images and questions for text the user already has. Both calls
        run concurrently and neither outcome affects the other; results are
        merged once both have settled.
        """
        text = self._snapshot.pasted_text if pasted_text is None else pasted_text
        try:
            self._require_identity("Please sign in to process text")
            self._require_text(text, "Please paste some text to process")
        except ValidationError as e:
            self._reject(e)
            return

        epoch = self._next_epoch()
        self._commit(transitions.begin_paste(self._snapshot, text, epoch))
        logger.info(f"[epoch {epoch}] Processing pasted text of {len(text)} chars")

        images_outcome, mcq_outcome = await asyncio.gather(
            self._settle_tracked(self._content.generate_images(text), epoch, transitions.images_settled),
            self._settle_tracked(self._content.generate_mcqs(text), epoch, transitions.mcqs_settled),
        )
        if not self._is_current(epoch, "pasted text"):
            return
        if not isinstance(images_outcome, Success):
            logger.warning(f"[epoch {epoch}] Image generation failed, keeping placeholders: {images_outcome.message}")
        if not isinstance(mcq_outcome, Success):
            logger.warning(f"[epoch {epoch}] MCQ generation failed: {mcq_outcome.message}")
        self._commit(transitions.finish_paste(self._snapshot, images_outcome, mcq_outcome))

    async def retry_mcq_generation(self, difficulty: Optional[DifficultyLevel] = None) -> None:
        """
        Ask for questions about the current text again. Ignored while text or
        questions are still being generated, and in the success phase. After
        a prompt generation the phase is idle, so a retry there replaces the
        questions that came with the content.
        """
        snapshot = self._snapshot
        try:
            self._require_identity("Please sign in to generate quiz questions")
        except ValidationError as e:
            self._reject(e)
            return

        if not snapshot.mcq.can_retry or snapshot.flags.mcqs_in_flight or snapshot.flags.text_in_flight:
            logger.info(f"Ignoring MCQ retry in phase {snapshot.mcq_phase.value}")
            return
        try:
            self._require_text(snapshot.current_text, "There is no content to generate quiz questions from")
        except ValidationError as e:
            self._reject(e)
            return

        epoch = snapshot.epoch
        self._commit(transitions.begin_mcq_retry(snapshot))
        logger.info(f"[epoch {epoch}] Retrying MCQ generation after {snapshot.mcq.consecutive_failures} failure(s)")

        outcome = await settle(self._content.generate_mcqs(snapshot.current_text, difficulty))
        if not self._is_current(epoch, "MCQ retry"):
            return
        self._commit(transitions.finish_mcq_retry(self._snapshot, outcome))

    async def generate_social_post(
        self,
        post_type: SocialPostType,
        user_level: Optional[UserLevel] = None,
    ) -> None:
        snapshot = self._snapshot
        try:
            self._require_identity("Please sign in to generate a social media post")
            if snapshot.flags.text_in_flight:
                raise ValidationError("Please wait until the content has been generated")
            self._require_text(snapshot.current_text, "No content available to generate social media post")
        except ValidationError as e:
            self._reject(e)
            return

        epoch = snapshot.epoch
        self._commit(transitions.begin_social_post(snapshot))
        outcome = await settle(self._content.generate_social_post(snapshot.current_text, post_type, user_level))
        if not self._is_current(epoch, "social post"):
            return
        self._commit(transitions.finish_social_post(self._snapshot, outcome))

    # Reset / saved content

    def clear(self) -> None:
        """Back to the initial snapshot; anything still in flight is discarded."""
        self._commit(transitions.initial(epoch=self._next_epoch()))

    def load_saved_item(self, item: SavedContentItem) -> None:
        self._commit(transitions.load_item(self._snapshot, item, self._next_epoch()))
        logger.info(f"Loaded saved content {item.id}")

    async def save_current(self, title: str) -> Optional[SavedContentItem]:
        """Persist the current content fields under a title."""
        snapshot = self._snapshot
        try:
            self._require_identity("Please sign in to save content")
            self._require_text(title, "Please enter a title for your content")
            if snapshot.flags.generating:
                raise ValidationError("Please wait until generation has finished before saving")
            self._require_text(snapshot.current_text, "There is no content to save")
        except ValidationError as e:
            self._reject(e)
            return None

        self._commit(transitions.begin_save(snapshot))
        outcome = await settle(self._persistence.save(
            title=title.strip(),
            text=snapshot.current_text,
            images=snapshot.current_images,
            mcqs=snapshot.current_mcqs,
            social_post=snapshot.social_post,
        ))
        self._commit(transitions.finish_save(self._snapshot, outcome))
        return outcome.value if isinstance(outcome, Success) else None

    async def refresh_saved_items(self) -> None:
        try:
            self._require_identity("Please sign in to view saved content")
        except ValidationError as e:
            self._reject(e)
            return

        self._commit(transitions.begin_saved_listing(self._snapshot))
        outcome = await settle(self._persistence.list_items())
        self._commit(transitions.finish_saved_listing(self._snapshot, outcome))

    async def delete_saved_item(self, item_id: str) -> None:
        try:
            self._require_identity("Please sign in to delete saved content")
        except ValidationError as e:
            self._reject(e)
            return

        outcome = await settle(self._persistence.delete(item_id))
        self._commit(transitions.finish_delete(self._snapshot, item_id, outcome))
