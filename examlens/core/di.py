from __future__ import annotations

__all__ = [
    "NotReady",
    "Provide",
    "as_",
    "inject",
]

import typing as t

import dependency_injector.wiring as wiring
from dependency_injector.wiring import Provide, TypeModifier

P = t.ParamSpec("P")
TReturn = t.TypeVar("TReturn")
TAs = t.TypeVar("TAs")


def inject(fn: t.Callable[P, TReturn]) -> t.Callable[P, TReturn]:
    """Mark `fn` for injection of `Provide[...]` defaults once its module is wired."""
    return t.cast(t.Callable[P, TReturn], wiring.inject(fn))


def as_(type_: t.Type[TAs]) -> TypeModifier:
    """Return custom type modifier."""
    # replace wiring.as_ because that one has typing issues
    return TypeModifier(type_)


class NotReady(object):
    """Placeholder for providers that are only overridden at boot."""

    _instance: t.ClassVar[NotReady | None] = None

    def __new__(cls) -> NotReady:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<NotReady>"
