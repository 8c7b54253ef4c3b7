"""Property-based tests for bidirectional forwarding using Hypothesis."""

from __future__ import annotations

import asyncio

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rpclink.forwarder import forward
from rpclink.ipc.contracts import END_OF_STREAM
from tests.helpers import ScriptedSession

pytestmark = pytest.mark.unit

messages = st.lists(
    st.dictionaries(
        st.sampled_from(["id", "method", "params", "result"]),
        st.one_of(st.integers(), st.text(max_size=8), st.none()),
        min_size=1,
    ),
    max_size=8,
)


def _run_forward(
    first_script: list[dict[str, object]],
    second_script: list[dict[str, object]],
) -> tuple[ScriptedSession, ScriptedSession, int]:
    calls = 0

    def finalizer() -> None:
        nonlocal calls
        calls += 1

    async def _scenario() -> tuple[ScriptedSession, ScriptedSession]:
        first = ScriptedSession([*first_script, END_OF_STREAM])
        second = ScriptedSession([*second_script, END_OF_STREAM])
        await forward(first, second, finalizer=finalizer)
        return first, second

    first, second = asyncio.run(_scenario())
    return first, second, calls


class TestForwardProperties:
    @given(messages, messages)
    def test_each_direction_preserves_order(self, from_a: list, from_b: list) -> None:
        a, b, finalizer_calls = _run_forward(from_a, from_b)

        assert b.written == [*from_a, END_OF_STREAM]
        assert a.written == [*from_b, END_OF_STREAM]
        assert finalizer_calls == 1

    @given(messages, messages)
    def test_swapping_sessions_mirrors_effects(self, from_a: list, from_b: list) -> None:
        a, b, _ = _run_forward(from_a, from_b)
        b_swapped, a_swapped, _ = _run_forward(from_b, from_a)

        assert a.written == a_swapped.written
        assert b.written == b_swapped.written
