from __future__ import annotations

from src.modules.text.domain.dictionary import DictionaryHolder, SpellingDictionary
from src.modules.text.domain.events import ChangeNotifier
from src.modules.text.infrastructure.buffer import TextBuffer
from src.modules.text.infrastructure.documents import DocumentStore
from src.modules.text.pipeline.correction import CorrectionPipeline, SpellingStage
from src.modules.text.services.autocorrect import AutocorrectService
from src.modules.text.utils.stats import format_stats


def test_document_flow_produces_summary() -> None:
    service = AutocorrectService()
    buffer = TextBuffer("teh dog barks. teh cat meows")

    result = service.correct_document(buffer)

    assert buffer.get_full_text() == "The dog barks. The cat meows"
    assert result.changed
    assert result.stats == {"spelling": 2, "capitalization": 2}
    assert result.summary == "Corrected spelling fixes: 2, capitalized letters: 2."


def test_clean_document_is_not_rewritten() -> None:
    notifier = ChangeNotifier()
    origins: list[str | None] = []
    notifier.subscribe(lambda _buffer, change: origins.append(change.origin))
    buffer = TextBuffer("Already clean. Nothing to do", notifier=notifier)

    result = AutocorrectService().correct_document(buffer)

    assert not result.changed
    assert result.summary == "Nothing to fix, the text already looks clean."
    assert origins == []


def test_document_rewrite_is_tagged_as_programmatic() -> None:
    notifier = ChangeNotifier()
    origins: list[str | None] = []
    notifier.subscribe(lambda _buffer, change: origins.append(change.origin))
    buffer = TextBuffer("adn so on", notifier=notifier)

    AutocorrectService().correct_document(buffer)

    assert origins == ["setValue"]


def test_correct_line_touches_only_that_line() -> None:
    buffer = TextBuffer("teh first\nteh second. adn third")
    result = AutocorrectService().correct_line(buffer, 1)
    assert buffer.get_full_text() == "teh first\nThe second. And third"
    assert result.stats["spelling"] == 2


def test_service_follows_dictionary_reload() -> None:
    holder = DictionaryHolder()
    service = AutocorrectService(holder)
    assert service.process("wrold").corrected_text == "Wrold"

    holder.replace(SpellingDictionary({"wrold": "world"}))
    assert service.process("wrold").corrected_text == "World"
    assert service.dictionary is holder


def test_custom_pipeline_skips_capitalization() -> None:
    service = AutocorrectService(pipeline=CorrectionPipeline([SpellingStage()]))
    assert service.process("teh end. teh start").corrected_text == "the end. the start"


def test_format_stats_lists_only_non_zero_counters() -> None:
    assert format_stats({"spelling": 0, "capitalization": 3}) == "Corrected capitalized letters: 3."
    assert format_stats({}) == "Nothing to fix, the text already looks clean."


def test_document_store_keeps_one_session_per_chat() -> None:
    store = DocumentStore()
    first = store.open(1, "teh")
    store.open(2, "other")
    assert store.get(1) is first
    assert len(store) == 2

    replaced = store.open(1, "new text")
    assert store.get(1) is replaced
    assert replaced.buffer.get_full_text() == "new text"
    assert replaced.issues == {}
    assert replaced.check_id == 0

    store.close(1)
    assert store.get(1) is None
