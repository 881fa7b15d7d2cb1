"""
Pure state transitions: every function takes a snapshot (plus input) and
returns a new snapshot. The controller is the only caller and owns the
side effects around them.
"""
from typing import Sequence

from client.mcq_retry import McqEvent, McqPhase, McqRetryState, advance
from client.outcomes import Outcome, Success
from client.placeholders import paste_placeholders, prompt_placeholders
from client.state import GenerationFlags, GenerationSnapshot
from config.placement_config import GENERATING_TEXT_MARKER
from models.content import GeneratedContent, GenerationMode, ImagePlacement, MCQuestion, SavedContentItem

MCQ_RETRY_MESSAGE = "We couldn't generate quiz questions for this text. Please try again."


def _flags(snapshot: GenerationSnapshot, **changes) -> GenerationFlags:
    return snapshot.flags.model_copy(update=changes)


def initial(epoch: int = 0) -> GenerationSnapshot:
    return GenerationSnapshot(epoch=epoch)


def reject(snapshot: GenerationSnapshot, message: str) -> GenerationSnapshot:
    return snapshot.model_copy(update={"last_error": message})


def set_mode(snapshot: GenerationSnapshot, mode: GenerationMode) -> GenerationSnapshot:
    return snapshot.model_copy(update={"mode": mode})


def set_prompt(snapshot: GenerationSnapshot, prompt_text: str) -> GenerationSnapshot:
    return snapshot.model_copy(update={"prompt_text": prompt_text})


def set_pasted_text(snapshot: GenerationSnapshot, pasted_text: str) -> GenerationSnapshot:
    return snapshot.model_copy(update={"pasted_text": pasted_text})


# Prompt flow

def begin_prompt_generation(snapshot: GenerationSnapshot, prompt_text: str, epoch: int) -> GenerationSnapshot:
    return snapshot.model_copy(update={
        "epoch": epoch,
        "prompt_text": prompt_text,
        "current_text": GENERATING_TEXT_MARKER,
        "current_images": prompt_placeholders(),
        "current_mcqs": (),
        "social_post": "",
        "flags": _flags(snapshot, text_in_flight=True, images_in_flight=True, mcqs_in_flight=True),
        "mcq": McqRetryState(),
        "last_error": None,
        "mcq_error_message": None,
    })


def finish_prompt_generation(snapshot: GenerationSnapshot, outcome: "Outcome[GeneratedContent]") -> GenerationSnapshot:
    flags = _flags(snapshot, text_in_flight=False, images_in_flight=False, mcqs_in_flight=False)
    if isinstance(outcome, Success):
        content = outcome.value
        return snapshot.model_copy(update={
            "flags": flags,
            "current_text": content.text,
            "current_images": tuple(content.images),
            "current_mcqs": tuple(content.mcqs),
        })
    # placeholders stay visible next to the error
    return snapshot.model_copy(update={"flags": flags, "last_error": outcome.message})


# Paste flow

def begin_paste(snapshot: GenerationSnapshot, pasted_text: str, epoch: int) -> GenerationSnapshot:
    return snapshot.model_copy(update={
        "epoch": epoch,
        "pasted_text": pasted_text,
        "current_text": pasted_text,
        "current_images": paste_placeholders(pasted_text),
        "current_mcqs": (),
        "social_post": "",
        "flags": _flags(
            snapshot,
            text_in_flight=False,
            images_in_flight=True,
            mcqs_in_flight=True,
            pasted_text_in_flight=True,
        ),
        "mcq": advance(snapshot.mcq, McqEvent.START),
        "last_error": None,
        "mcq_error_message": None,
    })


def images_settled(snapshot: GenerationSnapshot) -> GenerationSnapshot:
    return snapshot.model_copy(update={"flags": _flags(snapshot, images_in_flight=False)})


def mcqs_settled(snapshot: GenerationSnapshot) -> GenerationSnapshot:
    return snapshot.model_copy(update={"flags": _flags(snapshot, mcqs_in_flight=False)})


def _mcq_outcome_changes(snapshot: GenerationSnapshot, outcome: "Outcome[Sequence[MCQuestion]]") -> dict:
    if isinstance(outcome, Success):
        return {
            "current_mcqs": tuple(outcome.value),
            "mcq": advance(snapshot.mcq, McqEvent.SUCCEEDED),
            "mcq_error_message": None,
        }
    mcq = advance(snapshot.mcq, McqEvent.FAILED)
    message = MCQ_RETRY_MESSAGE if mcq.phase == McqPhase.FAILED_ONCE else outcome.message
    return {"current_mcqs": (), "mcq": mcq, "mcq_error_message": message}


def finish_paste(
    snapshot: GenerationSnapshot,
    images_outcome: "Outcome[Sequence[ImagePlacement]]",
    mcq_outcome: "Outcome[Sequence[MCQuestion]]",
) -> GenerationSnapshot:
    changes = {
        "flags": _flags(snapshot, images_in_flight=False, mcqs_in_flight=False, pasted_text_in_flight=False),
    }
    # a failed image call keeps the placeholders it was showing
    if isinstance(images_outcome, Success):
        changes["current_images"] = tuple(images_outcome.value)
    changes.update(_mcq_outcome_changes(snapshot, mcq_outcome))
    return snapshot.model_copy(update=changes)


# MCQ retry

def begin_mcq_retry(snapshot: GenerationSnapshot) -> GenerationSnapshot:
    return snapshot.model_copy(update={
        "flags": _flags(snapshot, mcqs_in_flight=True),
        "mcq": advance(snapshot.mcq, McqEvent.RETRY),
        "mcq_error_message": None,
    })


def finish_mcq_retry(snapshot: GenerationSnapshot, outcome: "Outcome[Sequence[MCQuestion]]") -> GenerationSnapshot:
    changes = {"flags": _flags(snapshot, mcqs_in_flight=False)}
    changes.update(_mcq_outcome_changes(snapshot, outcome))
    return snapshot.model_copy(update=changes)


# Social post

def begin_social_post(snapshot: GenerationSnapshot) -> GenerationSnapshot:
    return snapshot.model_copy(update={
        "flags": _flags(snapshot, social_post_in_flight=True),
        "last_error": None,
    })


def finish_social_post(snapshot: GenerationSnapshot, outcome: "Outcome[str]") -> GenerationSnapshot:
    flags = _flags(snapshot, social_post_in_flight=False)
    if isinstance(outcome, Success):
        return snapshot.model_copy(update={"flags": flags, "social_post": outcome.value})
    return snapshot.model_copy(update={"flags": flags, "last_error": outcome.message})


# Saved content

def begin_save(snapshot: GenerationSnapshot) -> GenerationSnapshot:
    return snapshot.model_copy(update={"flags": _flags(snapshot, saving=True), "last_error": None})


def finish_save(snapshot: GenerationSnapshot, outcome: "Outcome[SavedContentItem]") -> GenerationSnapshot:
    flags = _flags(snapshot, saving=False)
    if isinstance(outcome, Success):
        return snapshot.model_copy(update={
            "flags": flags,
            "saved_items": (outcome.value,) + snapshot.saved_items,
        })
    return snapshot.model_copy(update={"flags": flags, "last_error": outcome.message})


def begin_saved_listing(snapshot: GenerationSnapshot) -> GenerationSnapshot:
    return snapshot.model_copy(update={"flags": _flags(snapshot, loading_saved=True)})


def finish_saved_listing(snapshot: GenerationSnapshot, outcome: "Outcome[Sequence[SavedContentItem]]") -> GenerationSnapshot:
    flags = _flags(snapshot, loading_saved=False)
    if isinstance(outcome, Success):
        return snapshot.model_copy(update={"flags": flags, "saved_items": tuple(outcome.value)})
    return snapshot.model_copy(update={"flags": flags, "last_error": outcome.message})


def finish_delete(snapshot: GenerationSnapshot, item_id: str, outcome: "Outcome[None]") -> GenerationSnapshot:
    if isinstance(outcome, Success):
        return snapshot.model_copy(update={
            "saved_items": tuple(item for item in snapshot.saved_items if item.id != item_id),
        })
    return reject(snapshot, outcome.message)


def load_item(snapshot: GenerationSnapshot, item: SavedContentItem, epoch: int) -> GenerationSnapshot:
    """Replace the content fields with a saved copy; nothing is generated."""
    return snapshot.model_copy(update={
        "epoch": epoch,
        "current_text": item.text,
        "current_images": tuple(item.images),
        "current_mcqs": tuple(item.mcqs),
        "social_post": item.social_post,
        "flags": GenerationFlags(loading_saved=snapshot.flags.loading_saved, saving=snapshot.flags.saving),
        "mcq": McqRetryState(),
        "last_error": None,
        "mcq_error_message": None,
    })
