from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from .letters import CHAR_TO_INDEX, strip_vowels, tokenize
from .methods import GematriaMethod, Strategy, strategy_for

logger = logging.getLogger(__name__)

CacheKey = Tuple[GematriaMethod, str]

@dataclass(frozen=True)
class GematriaResult:
    value: int
    method: GematriaMethod
    word: str

class GematriaContext:
    """
    Calculates gematria values of characters, words and phrases.

    Holds the letter index table, the active calculation strategy, an optional
    cache and the vowel-preservation flag. The cache is keyed on
    (method, text), so switching methods never invalidates it. Whether there
    is a cache at all is fixed at construction.

    Not thread safe: the cache is a plain dict.
    """

    def __init__(
        self,
        method: GematriaMethod = GematriaMethod.MISPAR_HECHRECHI,
        enable_cache: bool = False,
        preserve_vowels: bool = False,
        char_to_index: Mapping[str, int] = CHAR_TO_INDEX,
    ):
        self._char_to_index = char_to_index
        self._strategy: Strategy = strategy_for(method, char_to_index)
        self._cache: Optional[Dict[CacheKey, int]] = {} if enable_cache else None
        self._preserve_vowels = preserve_vowels

    @classmethod
    def default(cls) -> "GematriaContext":
        return GematriaBuilder().init_gematria()

    @property
    def method(self) -> GematriaMethod:
        return self._strategy.method

    @property
    def cache_enabled(self) -> bool:
        return self._cache is not None

    @property
    def preserve_vowels(self) -> bool:
        return self._preserve_vowels

    def set_method(self, method: GematriaMethod) -> None:
        # build first: on failure the current strategy stays in place
        strategy = strategy_for(method, self._char_to_index)
        logger.debug("Switching method %s -> %s", self._strategy.method.value, strategy.method.value)
        self._strategy = strategy

    def get_character_index(self, ch: str) -> Optional[int]:
        return self._char_to_index.get(ch)

    def _handle_vowels(self, text: str) -> str:
        return text if self._preserve_vowels else strip_vowels(text)

    def _sum_values(self, text: str) -> int:
        total = 0
        for ch in text:
            idx = self._char_to_index.get(ch)
            if idx is not None:
                total += self._strategy.value_for_index(idx)
        return total

    def value_of_character(self, ch: str) -> int:
        """Value of a single character; 0 for anything that isn't a Hebrew letter."""
        key = (self.method, ch)
        if self._cache is not None and key in self._cache:
            return self._cache[key]

        idx = self._char_to_index.get(ch)
        if idx is None:
            return 0
        value = self._strategy.value_for_index(idx)
        if self._cache is not None:
            self._cache[key] = value
        return value

    def calculate(self, text: str) -> GematriaResult:
        """Gematria value of a word or phrase under the current method."""
        method = self.method
        processed = self._handle_vowels(text)

        if self._cache is not None:
            key = (method, processed)
            value = self._cache.get(key)
            if value is None:
                logger.debug("Cache miss for %r under %s", processed, method.value)
                value = self._sum_values(processed)
                self._cache[key] = value
            return GematriaResult(value=value, method=method, word=processed)

        return GematriaResult(value=self._sum_values(processed), method=method, word=processed)

    def _words_with_value(self, target_value: int, text: str) -> List[str]:
        matches: List[str] = []
        for word in tokenize(text):
            processed = self._handle_vowels(word)
            if self.calculate(processed).value == target_value:
                matches.append(processed)
        return matches

    def search_matching_words(self, target_word: str, text: str) -> List[str]:
        """Words in `text` whose value equals that of `target_word` (the word itself included)."""
        target_value = self.calculate(target_word).value
        return self._words_with_value(target_value, text)

    def search_matching_values(self, target_value: int, text: str) -> List[str]:
        return self._words_with_value(target_value, text)

    def group_words_by_gematria(self, text: str) -> List[Tuple[int, List[str]]]:
        """
        Group the words of `text` by value.

        Words are deduplicated per group (first occurrence wins), groups with a
        single word are dropped, and the result is ordered by group size
        (largest first) then by value (smallest first).

        Example:
          group_words_by_gematria("נכנס יין יצא סוד") == [(70, ["יין", "סוד"])]
        """
        grouped: Dict[int, List[str]] = {}
        for word in tokenize(text):
            processed = self._handle_vowels(word)
            value = self.calculate(processed).value
            bucket = grouped.setdefault(value, [])
            if processed not in bucket:
                bucket.append(processed)

        groups = [(value, words) for value, words in grouped.items() if len(words) > 1]
        groups.sort(key=lambda g: (-len(g[1]), g[0]))
        return groups

class GematriaBuilder:
    """
    Fluent configuration for a GematriaContext.

      ctx = (GematriaBuilder()
             .with_method(GematriaMethod.MISPAR_GADOL)
             .with_cache(True)
             .with_vowels(True)
             .init_gematria())

    A builder is single-use: init_gematria() consumes it.
    """

    def __init__(self):
        self._method: Optional[GematriaMethod] = None
        self._enable_cache = False
        self._preserve_vowels = False
        self._consumed = False

    def with_method(self, method: GematriaMethod) -> "GematriaBuilder":
        self._method = GematriaMethod(method)
        return self

    def with_cache(self, enable: bool) -> "GematriaBuilder":
        self._enable_cache = enable
        return self

    def with_vowels(self, preserve_vowels: bool) -> "GematriaBuilder":
        self._preserve_vowels = preserve_vowels
        return self

    def init_gematria(self) -> GematriaContext:
        if self._consumed:
            raise RuntimeError("GematriaBuilder was already used; create a new one")
        self._consumed = True
        return GematriaContext(
            method=self._method or GematriaMethod.MISPAR_HECHRECHI,
            enable_cache=self._enable_cache,
            preserve_vowels=self._preserve_vowels,
        )

def gematria(text: str, method: GematriaMethod = GematriaMethod.MISPAR_HECHRECHI) -> int:
    """
    One-off value of a character or phrase, vowels left in place.

    Example:
      gematria("בעזרת השם") == 1024
    """
    ctx = GematriaBuilder().with_method(method).with_vowels(True).init_gematria()
    return ctx.calculate(text).value
