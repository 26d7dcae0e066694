from __future__ import annotations

import logging
from dataclasses import dataclass

import aiohttp
from aiogram import Bot, Dispatcher
from aiogram.client.default import DefaultBotProperties

from .config import AppConfig
from .handlers.commands import create_commands_router
from .handlers.grammar import create_grammar_router
from .handlers.text import create_text_router
from .handlers.unsupported import create_unsupported_router
from ..modules.text.domain.dictionary import DictionaryHolder
from ..modules.text.infrastructure.documents import DocumentStore
from ..modules.text.infrastructure.languagetool import LanguageToolClient
from ..modules.text.services.autocorrect import AutocorrectService
from ..modules.text.services.grammar import GrammarCheckService

logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    config: AppConfig
    dictionary: DictionaryHolder
    documents: DocumentStore
    http_session: aiohttp.ClientSession
    autocorrect_service: AutocorrectService
    grammar_service: GrammarCheckService

    @classmethod
    async def build(cls, config: AppConfig) -> "AppContainer":
        dictionary = DictionaryHolder(config.load_dictionary())
        logger.info("Dictionary ready with %d entries", len(dictionary.current))
        http_session = aiohttp.ClientSession()
        grammar_client = LanguageToolClient(
            http_session,
            config.languagetool_url,
            timeout_seconds=config.grammar_timeout_seconds,
        )
        return cls(
            config=config,
            dictionary=dictionary,
            documents=DocumentStore(),
            http_session=http_session,
            autocorrect_service=AutocorrectService(dictionary),
            grammar_service=GrammarCheckService(grammar_client, language=config.languagetool_language),
        )

    def create_bot(self) -> Bot:
        return Bot(
            token=self.config.telegram_bot_token,
            default=DefaultBotProperties(parse_mode="HTML"),
        )

    def create_dispatcher(self) -> Dispatcher:
        dispatcher = Dispatcher()
        dispatcher.include_router(
            create_commands_router(
                self.dictionary,
                dictionary_path=self.config.dictionary_path,
                extend_defaults=self.config.dictionary_extend_defaults,
                admin_user_ids=self.config.admin_user_ids,
            )
        )
        dispatcher.include_router(create_grammar_router(self.grammar_service, self.documents))
        dispatcher.include_router(create_text_router(self.autocorrect_service, self.documents))
        dispatcher.include_router(create_unsupported_router())
        dispatcher.shutdown.register(self.on_shutdown)
        return dispatcher

    async def on_shutdown(self, bot: Bot) -> None:
        await self.http_session.close()
