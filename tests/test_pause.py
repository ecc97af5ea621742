"""Tests for the pause shown after a failed launch."""

import io

import pytest
import readchar
from rich.console import Console

from termdash.pause import wait_for_continue


@pytest.fixture
def out():
    return Console(file=io.StringIO(), width=80, highlight=False)


def _keys(*keys):
    pending = list(keys)
    return lambda: pending.pop(0)


@pytest.mark.parametrize("key", [readchar.key.ENTER, "\r", "q", readchar.key.CTRL_C])
def test_continue_keys(out, key):
    read = _keys("x", " ", key, "unreached")
    wait_for_continue(out=out, read_key=read)
    assert read() == "unreached"


def test_prints_message_as_plain_text(out):
    wait_for_continue("bad [exit] status", out=out, read_key=_keys("\r"))
    text = out.file.getvalue()
    assert "bad [exit] status" in text
    assert "Press Enter to return to the dashboard" in text


def test_interrupt_returns(out):
    def _interrupt():
        raise KeyboardInterrupt

    wait_for_continue(out=out, read_key=_interrupt)
