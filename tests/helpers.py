"""Builders and fakes shared by the Explorer tests."""

import asyncio

from models.content import ImagePlacement, MCQuestion, SavedContentItem
from models.errors import NotFoundError


def make_mcq(n: int = 1, correct: int = 0) -> MCQuestion:
    return MCQuestion(
        prompt=f"Question {n}?",
        options=("A", "B", "C", "D"),
        correct_option_index=correct,
    )


def make_image(after_line: int, n: int = 1) -> ImagePlacement:
    return ImagePlacement(url=f"https://images.example.com/{n}.jpg", alt_text=f"photo {n}", after_line=after_line)


def make_text(lines: int) -> str:
    return "\n".join(f"Line {i} of the article." for i in range(lines))


class InMemoryPersistence:
    """Persistence gateway that keeps saved items in a dict."""

    def __init__(self, owner_id: str = "user-1"):
        self.owner_id = owner_id
        self.items = {}
        self._next_id = 1

    async def save(self, title, text, images, mcqs, social_post):
        item = SavedContentItem(
            id=f"item-{self._next_id}",
            owner_id=self.owner_id,
            title=title,
            text=text,
            images=tuple(images),
            mcqs=tuple(mcqs),
            social_post=social_post,
        )
        self._next_id += 1
        self.items[item.id] = item
        return item

    async def list_items(self):
        return list(reversed(list(self.items.values())))

    async def delete(self, item_id):
        if item_id not in self.items:
            raise NotFoundError("Content not found or you don't have permission to delete it")
        del self.items[item_id]


def blocking(result=None, error=None):
    """
    Build an async side effect that waits until its `release` event is set.
    Returns (side_effect, release, started).
    """
    release = asyncio.Event()
    started = asyncio.Event()

    async def side_effect(*args, **kwargs):
        started.set()
        await release.wait()
        if error is not None:
            raise error
        return result

    return side_effect, release, started
