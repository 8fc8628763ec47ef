"""Result list state machine.

Every transition is funnelled through :func:`reduce`, which mutates the
store in place and returns the side effect the controller has to run, if any.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence, Union

from meli_search.domain.models import Item
from meli_search.services.exceptions import ErrorKind


@dataclass(slots=True, frozen=True)
class Initial:
    pass


@dataclass(slots=True, frozen=True)
class Loading:
    term: str


@dataclass(slots=True, frozen=True)
class Empty:
    term: str


@dataclass(slots=True, frozen=True)
class Error:
    term: str
    kind: ErrorKind


@dataclass(slots=True, frozen=True)
class Populated:
    term: str
    items: tuple[Item, ...]


ResultListState = Union[Initial, Loading, Empty, Error, Populated]


@dataclass(slots=True, frozen=True)
class InputChanged:
    term: str


@dataclass(slots=True, frozen=True)
class SearchSucceeded:
    sequence: int
    items: Sequence[Item]


@dataclass(slots=True, frozen=True)
class SearchFailed:
    sequence: int
    kind: ErrorKind


Event = Union[InputChanged, SearchSucceeded, SearchFailed]


@dataclass(slots=True, frozen=True)
class StartSearch:
    term: str
    sequence: int


@dataclass(slots=True)
class ResultListStore:
    state: ResultListState = field(default_factory=Initial)
    last_term: str | None = None
    sequence: int = 0


def reduce(store: ResultListStore, event: Event) -> StartSearch | None:
    if isinstance(event, InputChanged):
        if event.term == store.last_term:
            return None
        store.last_term = event.term
        # Any search still in flight is now stale.
        store.sequence += 1
        if not event.term:
            store.state = Initial()
            return None
        store.state = Loading(term=event.term)
        return StartSearch(term=event.term, sequence=store.sequence)

    if event.sequence != store.sequence:
        return None
    term = store.last_term or ""
    if isinstance(event, SearchFailed):
        store.state = Error(term=term, kind=event.kind)
    elif not event.items:
        store.state = Empty(term=term)
    else:
        store.state = Populated(term=term, items=tuple(event.items))
    return None


__all__ = [
    "Empty",
    "Error",
    "Event",
    "Initial",
    "InputChanged",
    "Loading",
    "Populated",
    "ResultListState",
    "ResultListStore",
    "SearchFailed",
    "SearchSucceeded",
    "StartSearch",
    "reduce",
]
