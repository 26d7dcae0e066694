from __future__ import annotations

import json
import logging
import re
import threading
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Union

from .errors import DictionaryLoadError

logger = logging.getLogger(__name__)

RE_TOKEN = re.compile(r"\w+")

DEFAULT_ENTRIES: dict[str, str] = {
    "teh": "the",
    "recieve": "receive",
    "definately": "definitely",
    "adn": "and",
    "thier": "their",
    "seperate": "separate",
    "accomodate": "accommodate",
    "acheive": "achieve",
    "beleive": "believe",
    "embarass": "embarrass",
    "neccessary": "necessary",
    "grammer": "grammar",
    "miniscule": "minuscule",
    "ocassion": "occasion",
    "pharoah": "pharaoh",
    "publically": "publicly",
    "independant": "independent",
    "judgement": "judgment",
    "congradulations": "congratulations",
    "supercede": "supersede",
    "irresistable": "irresistible",
    "maintanence": "maintenance",
    "privelege": "privilege",
    "begining": "beginning",
    "bussiness": "business",
    "wierd": "weird",
    "truely": "truly",
    "alot": "a lot",
    "alltogether": "altogether",
    "untill": "until",
    "liason": "liaison",
    "adress": "address",
    "calender": "calendar",
    "existance": "existence",
    "foriegn": "foreign",
    "goverment": "government",
    "harrass": "harass",
    "hierachy": "hierarchy",
    "heirarchy": "hierarchy",
    "mischevious": "mischievous",
    "noticable": "noticeable",
    "perseverence": "perseverance",
    "preceed": "precede",
    "succesfully": "successfully",
    "tommorow": "tomorrow",
    "unforseen": "unforeseen",
    "vaccum": "vacuum",
    "writen": "written",
    "curiousity": "curiosity",
    "familar": "familiar",
    "guage": "gauge",
    "knowlege": "knowledge",
    "millenium": "millennium",
    "possesion": "possession",
    "reccommend": "recommend",
    "sissors": "scissors",
    "streighth": "strength",
    "thourough": "thorough",
    "tounge": "tongue",
}


class SpellingDictionary(Mapping[str, str]):
    """Read-only mapping from lowercase misspelling to canonical spelling."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Mapping[str, str]] = None) -> None:
        normalized = {key.lower(): value for key, value in (entries or {}).items()}
        self._entries: Mapping[str, str] = MappingProxyType(normalized)

    def lookup(self, word: str) -> Optional[str]:
        return self._entries.get(word.lower())

    def merged_with(self, extra: Mapping[str, str]) -> "SpellingDictionary":
        combined = dict(self._entries)
        combined.update({key.lower(): value for key, value in extra.items()})
        return SpellingDictionary(combined)

    def __getitem__(self, key: str) -> str:
        return self._entries[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"SpellingDictionary({len(self)} entries)"


DEFAULT_DICTIONARY = SpellingDictionary(DEFAULT_ENTRIES)


def chained_keys(dictionary: Mapping[str, str]) -> list[str]:
    """
    Keys whose correction contains a word the dictionary would correct again.

    ``{"a": "b", "b": "c"}`` turns ``a`` into ``b`` on one pass and into ``c``
    on the next, so correcting twice would not give the same text.
    """
    chained: list[str] = []
    for key, value in dictionary.items():
        for token in RE_TOKEN.findall(value):
            target = dictionary.get(token.lower())
            if target is not None and target != token:
                chained.append(key)
                break
    return chained


def _ensure_no_chains(dictionary: SpellingDictionary, source: Path) -> SpellingDictionary:
    chained = chained_keys(dictionary)
    if chained:
        raise DictionaryLoadError(
            f"Dictionary {source} has corrections that would be corrected again: {', '.join(sorted(chained))}"
        )
    return dictionary


def load_dictionary(path: Path) -> SpellingDictionary:
    """
    Read a JSON object of ``{"misspelling": "correction"}`` pairs.

    Keys that are not a single word token can never be matched by the
    tokenizer, so they are skipped with a warning instead of failing the load.
    """
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DictionaryLoadError(f"Cannot read dictionary file {path}") from exc
    except json.JSONDecodeError as exc:
        raise DictionaryLoadError(f"Dictionary file {path} is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise DictionaryLoadError(f"Dictionary file {path} must contain a JSON object")

    entries: dict[str, str] = {}
    for key, value in raw.items():
        if not isinstance(value, str) or not value:
            raise DictionaryLoadError(f"Correction for {key!r} must be a non-empty string")
        if not RE_TOKEN.fullmatch(key):
            logger.warning("Skipping dictionary key %r: not a single word", key)
            continue
        entries[key] = value

    dictionary = _ensure_no_chains(SpellingDictionary(entries), path)
    logger.info("Loaded %d dictionary corrections from %s", len(dictionary), path)
    return dictionary


def build_dictionary(path: Path, *, extend_defaults: bool = True) -> SpellingDictionary:
    """Load ``path``, on top of the built-in corrections unless ``extend_defaults`` is off."""
    loaded = load_dictionary(path)
    if extend_defaults:
        loaded = _ensure_no_chains(DEFAULT_DICTIONARY.merged_with(loaded), path)
    return loaded


class DictionaryHolder:
    """Shares one dictionary between correctors and swaps it atomically on reload."""

    def __init__(self, dictionary: SpellingDictionary = DEFAULT_DICTIONARY) -> None:
        self._dictionary = dictionary
        self._lock = threading.Lock()

    @property
    def current(self) -> SpellingDictionary:
        return self._dictionary

    def replace(self, dictionary: SpellingDictionary) -> SpellingDictionary:
        with self._lock:
            previous = self._dictionary
            self._dictionary = dictionary
        logger.debug("Dictionary replaced: %d -> %d entries", len(previous), len(dictionary))
        return previous

    def reload(self, path: Path, *, extend_defaults: bool = True) -> SpellingDictionary:
        loaded = build_dictionary(path, extend_defaults=extend_defaults)
        self.replace(loaded)
        return loaded


DictionarySource = Union[SpellingDictionary, DictionaryHolder]


def as_holder(source: DictionarySource) -> DictionaryHolder:
    if isinstance(source, DictionaryHolder):
        return source
    return DictionaryHolder(source)
