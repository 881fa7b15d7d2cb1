"""
Tagged results for gateway calls, so merge logic branches on a value instead
of on caught exceptions.
"""
from dataclasses import dataclass
from typing import Awaitable, Generic, TypeVar, Union

from models.errors import ContentError

T = TypeVar("T")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    message: str
    kind: str = "gateway"


Outcome = Union[Success[T], Failure]


async def settle(awaitable: Awaitable[T]) -> "Outcome[T]":
    """Await a gateway call and capture a ContentError as a Failure."""
    try:
        return Success(await awaitable)
    except ContentError as e:
        return Failure(message=e.message, kind=e.kind)
