"""
The snapshot the presentation layer reads. Frozen, with tuple collections, so
only the controller can produce a new one.
"""
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict

from client.mcq_retry import McqPhase, McqRetryState
from models.content import GenerationMode, ImagePlacement, MCQuestion, SavedContentItem


class GenerationFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    text_in_flight: bool = False
    images_in_flight: bool = False
    mcqs_in_flight: bool = False
    pasted_text_in_flight: bool = False
    social_post_in_flight: bool = False
    saving: bool = False
    loading_saved: bool = False

    @property
    def generating(self) -> bool:
        return (
            self.text_in_flight
            or self.images_in_flight
            or self.mcqs_in_flight
            or self.pasted_text_in_flight
        )


class GenerationSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    mode: GenerationMode = GenerationMode.GENERATE
    prompt_text: str = ""
    pasted_text: str = ""

    current_text: str = ""
    current_images: Tuple[ImagePlacement, ...] = ()
    current_mcqs: Tuple[MCQuestion, ...] = ()
    social_post: str = ""

    flags: GenerationFlags = GenerationFlags()
    mcq: McqRetryState = McqRetryState()

    last_error: Optional[str] = None
    mcq_error_message: Optional[str] = None

    saved_items: Tuple[SavedContentItem, ...] = ()

    # bumped by every command that starts over; results tagged with an older
    # epoch are discarded
    epoch: int = 0

    @property
    def mcq_phase(self) -> McqPhase:
        return self.mcq.phase
