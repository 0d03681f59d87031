# tests/test_auto_approve_script.py
"""Tests for the operator auto-approve command."""

import pytest

from campus_qa.scripts.auto_approve import build_parser, run
from campus_qa.services.lifecycle import get_auto_approve


def test_turn_on_and_off(db_session) -> None:
    assert run(db_session, "on") == "Auto-approve is enabled"
    assert get_auto_approve(db_session) is True

    assert run(db_session, "off") == "Auto-approve is disabled"
    assert get_auto_approve(db_session) is False


def test_status_without_settings_row(db_session) -> None:
    assert run(db_session, "status") == "Auto-approve is disabled"


def test_parser_rejects_unknown_state() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["maybe"])
