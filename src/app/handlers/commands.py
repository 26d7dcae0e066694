from __future__ import annotations

import logging
from html import escape
from pathlib import Path
from typing import Optional

from aiogram import Router
from aiogram.filters import Command, CommandObject
from aiogram.types import Message

from ...modules.text.domain.dictionary import DictionaryHolder
from ...modules.text.domain.errors import DictionaryLoadError

logger = logging.getLogger(__name__)

START_TEXT = (
    "✍️ I fix common misspellings and capitalize the start of every sentence.\n\n"
    "📝 Send me any text: it becomes your current document and I reply with the corrected version "
    "(\"teh\" → \"the\", \"hello. world\" → \"Hello. World\").\n\n"
    "🔎 /grammar checks the current document with LanguageTool and offers one-tap fixes. "
    "You can also pass the text right away: /grammar Their is a problem.\n\n"
    "📚 /dictionary shows how many corrections I know."
)

HELP_TEXT = START_TEXT


def _get_command_args(command: CommandObject | None) -> str:
    if command is None or not command.args:
        return ""
    return command.args.strip()


def _is_admin(user_id: int | None, admins: frozenset[int]) -> bool:
    # Enforce strict whitelist: if whitelist is empty, deny everyone
    if not admins:
        return False
    if user_id is None:
        return False
    return user_id in admins


def create_commands_router(
    dictionary: DictionaryHolder,
    *,
    dictionary_path: Optional[Path] = None,
    extend_defaults: bool = True,
    admin_user_ids: set[int] | None = None,
) -> Router:
    router = Router(name="commands")
    admins = frozenset(admin_user_ids or set())

    @router.message(Command("start"))
    async def start(message: Message) -> None:
        await message.answer(START_TEXT)

    @router.message(Command("help"))
    async def help_cmd(message: Message) -> None:
        await message.answer(HELP_TEXT)

    @router.message(Command("dictionary"))
    async def dictionary_cmd(message: Message, command: CommandObject) -> None:
        current = dictionary.current
        word = _get_command_args(command)
        if not word:
            await message.answer(f"📚 I know {len(current)} corrections.")
            return
        canonical = current.lookup(word)
        if canonical is None:
            await message.answer(f"\"{escape(word)}\" is not in the dictionary.")
        else:
            await message.answer(f"\"{escape(word)}\" → \"{escape(canonical)}\"")

    @router.message(Command("reload"))
    async def reload_cmd(message: Message) -> None:
        user_id = message.from_user.id if message.from_user else None
        # Non-admins get no reply at all
        if not _is_admin(user_id, admins):
            return
        if dictionary_path is None:
            await message.answer("DICTIONARY_PATH is not configured, nothing to reload.")
            return
        try:
            loaded = dictionary.reload(dictionary_path, extend_defaults=extend_defaults)
        except DictionaryLoadError as exc:
            logger.warning("Dictionary reload failed: %s", exc)
            await message.answer(f"Reload failed: {escape(str(exc))}")
            return
        await message.answer(f"Dictionary reloaded: {len(loaded)} corrections.")

    return router
