from __future__ import annotations

from html import escape

from aiogram import F, Router
from aiogram.enums import ParseMode
from aiogram.types import Message

from ...modules.text.infrastructure.documents import DocumentStore
from ...modules.text.services.autocorrect import AutocorrectService


def create_text_router(service: AutocorrectService, documents: DocumentStore) -> Router:
    router = Router(name="text_handler")

    @router.message(F.text & ~F.via_bot & ~F.text.startswith("/"))
    async def handle_text(message: Message) -> None:
        assert message.text is not None
        session = documents.open(message.chat.id, message.text)
        result = service.correct_document(session.buffer)
        formatted = f"<pre><code>{escape(result.corrected_text)}</code></pre>"
        await message.answer(formatted, parse_mode=ParseMode.HTML, disable_web_page_preview=True)
        await message.answer(f"🧹 {result.summary}")

    return router
