from __future__ import annotations

from aiogram.filters import Command
from aiogram.filters.command import CommandObject

import pytest

from src.app.handlers.commands import _get_command_args, _is_admin, create_commands_router
from src.app.handlers.grammar import _fix_keyboard, _parse_fix_data
from src.modules.text.domain.dictionary import DictionaryHolder
from src.modules.text.domain.models import GrammarIssue


def test_get_command_args_handles_none() -> None:
    assert _get_command_args(None) == ""


def test_get_command_args_trims_whitespace() -> None:
    command = CommandObject(prefix="/", command="grammar", args="  Their is a problem  ")
    assert _get_command_args(command) == "Their is a problem"


@pytest.mark.parametrize(
    "admins,user_id,expected",
    [
        (frozenset(), 123, False),
        (frozenset({123}), 123, True),
        (frozenset({123}), 456, False),
        (frozenset({123}), None, False),
    ],
)
def test_is_admin(admins: frozenset[int], user_id: int | None, expected: bool) -> None:
    assert _is_admin(user_id, admins) is expected


def test_fix_keyboard_offers_only_issues_with_suggestions() -> None:
    issues = {
        0: GrammarIssue(message="Typo", offset=0, length=5, replacements=("Their",)),
        1: GrammarIssue(message="Style", offset=6, length=2),
        2: GrammarIssue(message="Extra word", offset=9, length=4, replacements=("",)),
    }
    keyboard = _fix_keyboard(issues, check_id=7)
    assert keyboard is not None
    rows = keyboard.inline_keyboard
    assert [row[0].callback_data for row in rows] == ["fix:7:0", "fix:7:2"]
    assert rows[0][0].text == "1. Fix → Their"
    assert rows[1][0].text == "3. Fix → (remove)"


def test_fix_keyboard_keeps_report_numbers_after_a_fix() -> None:
    issues = {2: GrammarIssue(message="Typo", offset=4, length=3, replacements=("and",))}
    keyboard = _fix_keyboard(issues, check_id=3)
    assert keyboard is not None
    assert keyboard.inline_keyboard[0][0].text == "3. Fix → and"
    assert keyboard.inline_keyboard[0][0].callback_data == "fix:3:2"


def test_fix_keyboard_is_none_without_suggestions() -> None:
    assert _fix_keyboard({0: GrammarIssue(message="Style", offset=0, length=1)}, check_id=1) is None


@pytest.mark.parametrize(
    "data,expected",
    [
        ("fix:4:1", (4, 1)),
        ("fix:1", None),
        ("fix:a:b", None),
        ("fix:1:2:3", None),
        (None, None),
    ],
)
def test_parse_fix_data(data: str | None, expected: tuple[int, int] | None) -> None:
    assert _parse_fix_data(data) == expected


def test_commands_router_answers_only_slash_commands() -> None:
    router = create_commands_router(DictionaryHolder())
    commands = {
        command
        for handler in router.message.handlers
        for flt in handler.filters or []
        if isinstance(flt.callback, Command)
        for command in flt.callback.commands
    }
    assert commands == {"start", "help", "dictionary", "reload"}
    assert all(
        isinstance(flt.callback, Command) for handler in router.message.handlers for flt in handler.filters or []
    )
