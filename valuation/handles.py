"""
Shared, relinkable references to market objects.

Copies of a handle share a single link, so relinking through any
RelinkableHandle is seen by every holder of that link. Relinking is itself a
change: everything registered with the handle is notified.
"""

from __future__ import annotations

from typing import Generic, TypeVar

from valuation.observable import Observable, Observer

T = TypeVar("T")


class _Link(Observable, Observer, Generic[T]):
    def __init__(self, target: T | None, register_as_observer: bool) -> None:
        Observable.__init__(self)
        Observer.__init__(self)
        self._target: T | None = None
        self._is_observer = False
        self.link_to(target, register_as_observer)

    def link_to(self, target: T | None, register_as_observer: bool) -> None:
        if target is not self._target or register_as_observer != self._is_observer:
            if self._target is not None and self._is_observer:
                self.unregister_with(_as_observable(self._target))
            self._target = target
            self._is_observer = register_as_observer
            if self._target is not None and self._is_observer:
                self.register_with(_as_observable(self._target))
            self.notify_observers()

    def update(self) -> None:
        self.notify_observers()


def _as_observable(target: object) -> Observable | None:
    return target if isinstance(target, Observable) else None


class Handle(Generic[T]):
    """
    Read-only shared reference to a market object (curve, quote, ...).

    Observers register with the handle rather than with the target, so they
    keep receiving notifications after the handle is relinked.
    """

    def __init__(self, target: T | None = None, register_as_observer: bool = True) -> None:
        self._link: _Link[T] = _Link(target, register_as_observer)

    def current_link(self) -> T:
        """Return the target. Raises ValueError if the handle is empty."""
        if self._link._target is None:
            raise ValueError("empty Handle cannot be dereferenced")
        return self._link._target

    def __call__(self) -> T:
        return self.current_link()

    def empty(self) -> bool:
        return self._link._target is None

    def __bool__(self) -> bool:
        return not self.empty()

    def register_observer(self, observer: Observer) -> bool:
        return self._link.register_observer(observer)

    def unregister_observer(self, observer: Observer) -> bool:
        return self._link.unregister_observer(observer)

    def notify_observers(self) -> None:
        self._link.notify_observers()

    def same_link(self, other: "Handle[T]") -> bool:
        return self._link is other._link

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._link._target!r})"


class RelinkableHandle(Handle[T]):
    """Handle whose target can be swapped; every copy sharing the link follows."""

    def link_to(self, target: T | None, register_as_observer: bool = True) -> None:
        self._link.link_to(target, register_as_observer)

    def handle(self) -> Handle[T]:
        """Read-only view sharing this handle's link."""
        view: Handle[T] = Handle.__new__(Handle)
        view._link = self._link
        return view
