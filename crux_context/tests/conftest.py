"""Pytest configuration for the context pipeline test suite.

Every test starts from a clean configuration: no ``CONTEXT_*`` environment
variables, no cached config file and no cached tokenizers. Tests that depend
on exact token figures use the ``conservative`` estimator (ceil(len / 4)), so
no tiktoken encoding files are needed.
"""

from __future__ import annotations

import os
from typing import Iterator, List

import pytest

from crux_context.base.logging import get_logger
from crux_context.base.models import Message, TrimOptions
from crux_context.base.tokens import clear_tokenizer_cache
from crux_context.config import reset_config_cache

from crux_context.tests.helpers import tool_step


@pytest.fixture(autouse=True)
def clean_context_state(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Isolate each test from environment-driven configuration."""

    for key in list(os.environ):
        if key.startswith("CONTEXT_"):
            monkeypatch.delenv(key, raising=False)
    reset_config_cache()
    clear_tokenizer_cache()
    get_logger()  # rebind the console handler to this test's stderr
    yield
    reset_config_cache()
    clear_tokenizer_cache()


@pytest.fixture()
def trim_options() -> TrimOptions:
    return TrimOptions(token_estimator="conservative")


@pytest.fixture()
def long_conversation() -> List[Message]:
    """System + user prompt followed by eight read_file steps of 1500 chars each.

    With the conservative estimator: system 5, user 6, each assistant call 22,
    each tool result 387 tokens; 3286 in total.
    """

    messages = [
        Message(role="system", content="sys"),
        Message(role="user", content="do it"),
    ]
    for i in range(1, 9):
        messages.extend(tool_step(i, "line\n" * 300))
    return messages
