"""Tests for the observer/observable primitive."""

import gc

import pytest

from valuation.errors import NotificationError
from valuation.observable import Observable, Observer


class Recorder(Observer):
    """Counts update() calls."""

    def __init__(self) -> None:
        super().__init__()
        self.calls = 0

    def update(self) -> None:
        self.calls += 1


class Relay(Observable, Observer):
    """Observer that re-raises notifications to its own observers."""

    def __init__(self) -> None:
        Observable.__init__(self)
        Observer.__init__(self)
        self.calls = 0

    def update(self) -> None:
        self.calls += 1
        self.notify_observers()


def test_register_is_idempotent() -> None:
    """Registering twice keeps a single subscription and a single delivery."""
    subject = Observable()
    obs = Recorder()
    assert subject.register_observer(obs) is True
    assert subject.register_observer(obs) is False
    assert subject.observer_count() == 1
    subject.notify_observers()
    assert obs.calls == 1


def test_unregister_absent_is_noop() -> None:
    """Unregistering an unknown observer does nothing."""
    subject = Observable()
    obs = Recorder()
    assert subject.unregister_observer(obs) is False
    subject.register_observer(obs)
    assert subject.unregister_observer(obs) is True
    subject.notify_observers()
    assert obs.calls == 0


def test_notify_reaches_every_observer_once() -> None:
    """Each registered observer gets exactly one update per call."""
    subject = Observable()
    observers = [Recorder() for _ in range(5)]
    for obs in observers:
        obs.register_with(subject)
    subject.notify_observers()
    assert [o.calls for o in observers] == [1] * 5


def test_identity_keyed_registration() -> None:
    """Observers comparing equal are still distinct subscribers."""

    class EqualRecorder(Recorder):
        def __eq__(self, other: object) -> bool:
            return isinstance(other, EqualRecorder)

        __hash__ = None  # type: ignore[assignment]

    subject = Observable()
    a, b = EqualRecorder(), EqualRecorder()
    subject.register_observer(a)
    subject.register_observer(b)
    subject.notify_observers()
    assert (a.calls, b.calls) == (1, 1)


def test_reentrant_notification_does_not_redeliver() -> None:
    """An observer re-notifying the same subject does not cause duplicate deliveries."""
    subject = Observable()

    class Reentrant(Recorder):
        def update(self) -> None:
            super().update()
            subject.notify_observers()

    first = Reentrant()
    others = [Recorder() for _ in range(3)]
    first.register_with(subject)
    for obs in others:
        obs.register_with(subject)

    subject.notify_observers()

    assert first.calls == 1
    assert [o.calls for o in others] == [1, 1, 1]


def test_observer_added_during_notification_not_notified() -> None:
    """Subscribers registered mid-call are not part of that call."""
    subject = Observable()
    late = Recorder()

    class Adder(Recorder):
        def update(self) -> None:
            super().update()
            late.register_with(subject)

    adder = Adder()
    adder.register_with(subject)
    subject.notify_observers()
    assert adder.calls == 1
    assert late.calls == 0

    subject.notify_observers()
    assert late.calls == 1


def test_failing_observer_does_not_stop_fanout() -> None:
    """Continue-and-collect: all observers are visited and the failure is reported."""
    subject = Observable()

    class Failing(Observer):
        def update(self) -> None:
            raise RuntimeError("boom")

    failing = Failing()
    good = [Recorder(), Recorder()]
    failing.register_with(subject)
    for obs in good:
        obs.register_with(subject)

    with pytest.raises(NotificationError, match="boom") as info:
        subject.notify_observers()

    assert [o.calls for o in good] == [1, 1]
    assert len(info.value.errors) == 1
    assert isinstance(info.value.errors[0], RuntimeError)


def test_chained_propagation_is_composition() -> None:
    """Multi-hop delivery happens through observers that re-notify."""
    source = Observable()
    relay = Relay()
    leaf = Recorder()
    relay.register_with(source)
    leaf.register_with(relay)

    source.notify_observers()

    assert relay.calls == 1
    assert leaf.calls == 1


def test_diamond_fires_once_per_path() -> None:
    """O observes A and B, both observe C: O is notified once through each path."""
    c = Observable()
    a, b = Relay(), Relay()
    o = Recorder()
    a.register_with(c)
    b.register_with(c)
    o.register_with(a)
    o.register_with(b)

    c.notify_observers()

    assert (a.calls, b.calls) == (1, 1)
    assert o.calls == 2


def test_dead_observer_is_dropped() -> None:
    """Observers are held weakly and leave the set when collected."""
    subject = Observable()
    obs = Recorder()
    subject.register_observer(obs)
    assert subject.observer_count() == 1
    del obs
    gc.collect()
    assert subject.observer_count() == 0
    subject.notify_observers()


def test_unregister_with_all() -> None:
    """An observer can detach from everything it registered with."""
    s1, s2 = Observable(), Observable()
    obs = Recorder()
    obs.register_with(s1)
    obs.register_with(s2)
    assert len(obs.observables()) == 2

    obs.unregister_with_all()
    s1.notify_observers()
    s2.notify_observers()

    assert obs.calls == 0
    assert not s1.is_observed_by(obs)
    assert obs.observables() == []
