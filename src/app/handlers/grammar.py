from __future__ import annotations

from html import escape
from typing import Mapping, Optional

from aiogram import F, Router
from aiogram.filters import Command, CommandObject
from aiogram.types import CallbackQuery, InlineKeyboardButton, InlineKeyboardMarkup, Message

from ...modules.text.domain.models import GrammarIssue
from ...modules.text.infrastructure.documents import DocumentStore
from ...modules.text.services.grammar import GrammarCheckService, rebase_issues
from ...modules.text.utils.report import format_grammar_report
from .commands import _get_command_args

MAX_FIX_BUTTONS = 20


class MessageNotifier:
    def __init__(self, message: Message) -> None:
        self._message = message

    async def notify(self, message: str) -> None:
        await self._message.answer(f"⚠️ {message}")


def _fix_keyboard(issues: Mapping[int, GrammarIssue], check_id: int) -> InlineKeyboardMarkup | None:
    # The button number is the issue's number in the report it was listed in
    buttons: list[list[InlineKeyboardButton]] = []
    for key in sorted(issues)[:MAX_FIX_BUTTONS]:
        issue = issues[key]
        if issue.suggestion is None:
            continue
        label = f"{key + 1}. Fix → {issue.suggestion or '(remove)'}"
        buttons.append([InlineKeyboardButton(text=label[:64], callback_data=f"fix:{check_id}:{key}")])
    if not buttons:
        return None
    return InlineKeyboardMarkup(inline_keyboard=buttons)


def _parse_fix_data(data: Optional[str]) -> Optional[tuple[int, int]]:
    parts = (data or "").split(":")
    if len(parts) != 3:
        return None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None


def create_grammar_router(service: GrammarCheckService, documents: DocumentStore) -> Router:
    router = Router(name="grammar")

    @router.message(Command("grammar"))
    async def grammar_cmd(message: Message, command: CommandObject) -> None:
        args = _get_command_args(command)
        if args:
            session = documents.open(message.chat.id, args)
        else:
            session = documents.get(message.chat.id)
            if session is None:
                await message.answer("Send me some text first, or put it right after /grammar.")
                return

        report = await service.check_document(session.buffer, MessageNotifier(message))
        if report is None:
            return
        check_id = session.track_issues(report.issues)
        await message.answer(
            escape(format_grammar_report(report.issues)),
            reply_markup=_fix_keyboard(session.issues, check_id),
        )

    @router.callback_query(F.data.startswith("fix:"))
    async def apply_fix(callback: CallbackQuery) -> None:
        if callback.message is None:
            await callback.answer()
            return
        parsed = _parse_fix_data(callback.data)
        if parsed is None:
            await callback.answer()
            return
        check_id, key = parsed
        session = documents.get(callback.message.chat.id)
        issue = session.pending_issue(check_id, key) if session is not None else None
        if session is None or issue is None:
            await callback.answer("This suggestion is no longer available", show_alert=True)
            return

        replacement = issue.suggestion
        if replacement is None or not service.apply_fix(session.buffer, issue):
            await callback.answer("Nothing to apply")
            return
        session.issues = rebase_issues(session.issues, key, replacement)
        await callback.answer("Applied")
        await callback.message.answer(
            f"<pre><code>{escape(session.buffer.get_full_text())}</code></pre>",
            reply_markup=_fix_keyboard(session.issues, session.check_id),
        )

    return router
