from __future__ import annotations

import pytest

from crux_context.base.cancellation import CancellationToken, CancelledError


def test_cancel_cascades_to_children():
    parent = CancellationToken()
    child = parent.child()
    assert not child.cancelled
    parent.cancel("turn aborted")
    assert child.cancelled
    assert child.reason == "turn aborted"
    with pytest.raises(CancelledError):
        child.raise_if_cancelled()


def test_child_of_cancelled_parent_starts_cancelled():
    parent = CancellationToken()
    parent.cancel()
    assert parent.child().cancelled


def test_child_cancel_does_not_affect_parent():
    parent = CancellationToken()
    parent.child().cancel()
    assert not parent.cancelled
    parent.raise_if_cancelled()
