from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
from aiogram.filters.command import CommandObject

from src.app.handlers.grammar import create_grammar_router
from src.modules.text.domain.models import GrammarIssue
from src.modules.text.infrastructure.documents import DocumentStore
from src.modules.text.services.grammar import GrammarCheckService

CHAT_ID = 42
ISSUES = [
    GrammarIssue(message="Two words", offset=0, length=4, replacements=("a lot",)),
    GrammarIssue(message="Typo", offset=8, length=3, replacements=("the",)),
]


class StaticChecker:
    async def check(self, text: str, *, language: str) -> list[GrammarIssue]:
        return list(ISSUES)


class FakeMessage:
    def __init__(self) -> None:
        self.chat = SimpleNamespace(id=CHAT_ID)
        self.answers: list[tuple[str, Any]] = []

    async def answer(self, text: str, **kwargs: Any) -> None:
        self.answers.append((text, kwargs.get("reply_markup")))


class FakeCallback:
    def __init__(self, data: str, message: FakeMessage) -> None:
        self.data = data
        self.message = message
        self.answers: list[str | None] = []

    async def answer(self, text: str | None = None, show_alert: bool = False) -> None:
        self.answers.append(text)


@pytest.fixture
def documents() -> DocumentStore:
    return DocumentStore()


@pytest.fixture
def handlers(documents: DocumentStore) -> SimpleNamespace:
    router = create_grammar_router(GrammarCheckService(StaticChecker()), documents)
    return SimpleNamespace(
        grammar=router.message.handlers[0].callback,
        fix=router.callback_query.handlers[0].callback,
    )


async def _run_grammar(handlers: SimpleNamespace, args: str | None) -> list[str]:
    message = FakeMessage()
    await handlers.grammar(message, CommandObject(prefix="/", command="grammar", args=args))
    keyboard = message.answers[-1][1]
    return [row[0].callback_data for row in keyboard.inline_keyboard]


async def _press(handlers: SimpleNamespace, data: str) -> FakeCallback:
    callback = FakeCallback(data, FakeMessage())
    await handlers.fix(callback)
    return callback


@pytest.mark.asyncio
async def test_fix_button_applies_the_issue_it_names_once(
    handlers: SimpleNamespace, documents: DocumentStore
) -> None:
    first, second = await _run_grammar(handlers, "alot of teh")

    pressed = await _press(handlers, first)
    assert pressed.answers == ["Applied"]
    assert documents.get(CHAT_ID).buffer.get_full_text() == "a lot of teh"

    again = await _press(handlers, first)
    assert again.answers == ["This suggestion is no longer available"]
    assert documents.get(CHAT_ID).buffer.get_full_text() == "a lot of teh"

    await _press(handlers, second)
    assert documents.get(CHAT_ID).buffer.get_full_text() == "a lot of the"


@pytest.mark.asyncio
async def test_buttons_from_an_older_check_are_rejected(
    handlers: SimpleNamespace, documents: DocumentStore
) -> None:
    old_buttons = await _run_grammar(handlers, "alot of teh")
    new_buttons = await _run_grammar(handlers, None)
    assert old_buttons != new_buttons

    stale = await _press(handlers, old_buttons[1])
    assert stale.answers == ["This suggestion is no longer available"]
    assert documents.get(CHAT_ID).buffer.get_full_text() == "alot of teh"

    await _press(handlers, new_buttons[1])
    assert documents.get(CHAT_ID).buffer.get_full_text() == "alot of the"


@pytest.mark.asyncio
async def test_buttons_for_a_replaced_document_are_rejected(
    handlers: SimpleNamespace, documents: DocumentStore
) -> None:
    buttons = await _run_grammar(handlers, "alot of teh")
    documents.open(CHAT_ID, "fresh text")

    stale = await _press(handlers, buttons[0])
    assert stale.answers == ["This suggestion is no longer available"]
    assert documents.get(CHAT_ID).buffer.get_full_text() == "fresh text"


@pytest.mark.asyncio
async def test_remaining_buttons_keep_their_report_numbers(handlers: SimpleNamespace) -> None:
    first, _ = await _run_grammar(handlers, "alot of teh")

    pressed = await _press(handlers, first)

    keyboard = pressed.message.answers[-1][1]
    assert [row[0].text for row in keyboard.inline_keyboard] == ["2. Fix → the"]
