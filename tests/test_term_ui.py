import contextlib

import pytest
from prompt_toolkit import PromptSession
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from budget_dashboard import Period
from budget_dashboard.term_ui import prompt_period, resolve_period_input


@contextlib.contextmanager
def pipe_session():
    with create_pipe_input() as pipe:
        sess = PromptSession(input=pipe, output=DummyOutput())
        yield pipe, sess


@pytest.mark.parametrize(
    "text, expected",
    [
        ("", Period(2024, 3)),
        ("n", Period(2024, 4)),
        ("NEXT", Period(2024, 4)),
        ("p", Period(2024, 2)),
        ("2023-11", Period(2023, 11)),
        ("q", None),
    ],
)
def test_resolve_period_input(text, expected):
    assert resolve_period_input(text, Period(2024, 3)) == expected


def test_resolve_period_input_rejects_garbage():
    with pytest.raises(ValueError):
        resolve_period_input("soon", Period(2024, 3))


def test_prompt_period_enter_keeps_current():
    with pipe_session() as (pipe, sess):
        pipe.send_text("\r")
        assert prompt_period(Period(2024, 3), session=sess) == Period(2024, 3)


def test_prompt_period_accepts_explicit_month():
    with pipe_session() as (pipe, sess):
        pipe.send_text("2025-01\r")
        assert prompt_period(Period(2024, 3), session=sess) == Period(2025, 1)


def test_prompt_period_invalid_input_is_rejected_until_corrected():
    with pipe_session() as (pipe, sess):
        # Invalid text keeps the prompt open; clear it and go back one month.
        pipe.send_text("bogus\r\x01\x0bp\r")
        assert prompt_period(Period(2024, 3), session=sess) == Period(2024, 2)


def test_prompt_period_quit_and_eof():
    with pipe_session() as (pipe, sess):
        pipe.send_text("q\r")
        assert prompt_period(Period(2024, 3), session=sess) is None

    with pipe_session() as (pipe, sess):
        pipe.send_text("\x04")  # Ctrl-D
        assert prompt_period(Period(2024, 3), session=sess) is None


def test_prompt_period_at_the_last_representable_month():
    with pipe_session() as (pipe, sess):
        # "next" is rejected by the validator; going back still works.
        pipe.send_text("n\r\x01\x0bp\r")
        assert prompt_period(Period(9999, 12), session=sess) == Period(9999, 11)

    with pipe_session() as (pipe, sess):
        pipe.send_text("\r")
        assert prompt_period(Period(1, 1), session=sess) == Period(1, 1)
