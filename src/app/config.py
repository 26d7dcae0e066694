from __future__ import annotations

import re

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..modules.text.domain.dictionary import DEFAULT_DICTIONARY, SpellingDictionary, build_dictionary
from ..modules.text.infrastructure.languagetool import DEFAULT_API_URL, DEFAULT_LANGUAGE


class AppConfig(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    telegram_bot_token: str = Field(..., alias="TELEGRAM_BOT_TOKEN")

    languagetool_url: str = Field(DEFAULT_API_URL, alias="LANGUAGETOOL_URL")
    languagetool_language: str = Field(DEFAULT_LANGUAGE, alias="LANGUAGETOOL_LANGUAGE")
    grammar_timeout_seconds: float = Field(15.0, gt=0, le=120, alias="GRAMMAR_TIMEOUT_SECONDS")

    dictionary_path: Optional[Path] = Field(None, alias="DICTIONARY_PATH")
    dictionary_extend_defaults: bool = Field(
        True,
        alias="DICTIONARY_EXTEND_DEFAULTS",
        description="Merge the file with the built-in word list instead of replacing it",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field("INFO", alias="LOG_LEVEL")

    # Keep the raw env value as a string to avoid dotenv provider attempting JSON decode
    admin_user_ids_raw: Optional[str] = Field(None, alias="ADMIN_USER_IDS")

    @property
    def admin_user_ids(self) -> set[int]:
        raw = self.admin_user_ids_raw
        if raw is None or raw == "":
            return set()
        tokens = [token for token in re.split(r"[\s,;]+", raw.strip()) if token]
        ids: set[int] = set()
        for token in tokens:
            try:
                ids.add(int(token))
            except ValueError:
                continue
        return ids

    def load_dictionary(self) -> SpellingDictionary:
        if self.dictionary_path is None:
            return DEFAULT_DICTIONARY
        return build_dictionary(self.dictionary_path, extend_defaults=self.dictionary_extend_defaults)
