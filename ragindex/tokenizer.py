# ragindex/tokenizer.py
"""
Tokenizer module.

Strings are normalized into terms for the retrieval index: lowercased,
stripped of punctuation, split on whitespace and filtered by length,
stopwords and script purity.

A Script bundles the target alphabet with its hand-tuned stopword list,
so one tokenizer serves exactly one language family.
"""

import os
import re
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional

import nltk
from nltk.corpus import stopwords
from nltk.tokenize import WhitespaceTokenizer

from .errors import ConfigError

# Share of a word's characters that must come from the target alphabet
MIN_SCRIPT_RATIO = 0.6
MIN_TOKEN_LENGTH = 2


@dataclass(frozen=True)
class Script:
    """
    Target script of a tokenizer.

    Parameters:
        name : str
            Preset name, as used in configuration.
        alphabet : str
            Lowercase letters of the script.
        stopwords : FrozenSet[str]
            Closed list of short grammatical words to drop.
    """
    name: str
    alphabet: str
    stopwords: FrozenSet[str]


LATIN = Script(
    name="latin",
    alphabet="abcdefghijklmnopqrstuvwxyz",
    stopwords=frozenset({
        "a", "an", "and", "are", "as", "at", "be", "but", "by", "for", "from",
        "has", "have", "he", "her", "his", "if", "in", "into", "is", "it", "its",
        "me", "my", "no", "not", "of", "on", "or", "our", "she", "so", "than",
        "that", "the", "their", "them", "then", "there", "these", "they", "this",
        "to", "too", "us", "was", "we", "were", "what", "when", "which", "who",
        "will", "with", "you", "your",
    }),
)

CYRILLIC = Script(
    name="cyrillic",
    alphabet="абвгдеёжзийклмнопрстуфхцчшщъыьэюя",
    stopwords=frozenset({
        "и", "в", "на", "с", "по", "для", "не", "что", "это", "как", "так",
        "из", "у", "к", "о", "за", "от", "то", "же", "все", "но", "вы", "бы",
        "а", "мне", "вот", "до", "ну", "ли", "если", "уже", "или", "ни", "быть",
        "был", "про", "при", "год", "очень", "может", "есть",
    }),
)

SCRIPTS: Dict[str, Script] = {s.name: s for s in (LATIN, CYRILLIC)}


def get_script(name: str) -> Script:
    try:
        return SCRIPTS[name.strip().lower()]
    except KeyError:
        raise ConfigError(
            f"Unknown script {name!r}, expected one of: {', '.join(sorted(SCRIPTS))}"
        ) from None


class Tokenizer:
    """
    The Tokenizer class.

    Responsibilities:
      - Lowercase and strip every character that is neither an ASCII word
        character, whitespace nor a letter of the target script.
      - Split on whitespace runs.
      - Drop short words, stopwords and words written mostly outside the
        target alphabet (stray foreign fragments, digit-heavy noise).

    Parameters:
        script : Script | str
            Target script or its preset name. Defaults to latin.
        custom_stopwords : Optional[Iterable[str]]
            Replaces the script's stopword list when given. Lowercased.
        extra_stopwords : Optional[Iterable[str]]
            Added on top of the stopword list. Lowercased.
        nltk_stopwords : Optional[str]
            Language of nltk's stopword corpus to merge in, e.g. "russian".
        nltk_dir : str
            Where nltk resources are looked up and downloaded. Appended to
            the process-wide nltk.data.path when nltk_stopwords is set.
        nltk_download : bool
            Download the nltk stopword corpus before reading it.
    """
    def __init__(self, script="latin", custom_stopwords: Optional[Iterable[str]] = None,
                 extra_stopwords: Optional[Iterable[str]] = None,
                 nltk_stopwords: Optional[str] = None,
                 nltk_dir: str = "nltk_data", nltk_download: bool = False):

        self.script = get_script(script) if isinstance(script, str) else script
        self.alphabet = frozenset(self.script.alphabet)

        if custom_stopwords is not None:
            words = {w.lower() for w in custom_stopwords}
        else:
            words = set(self.script.stopwords)
        if extra_stopwords is not None:
            words.update(w.lower() for w in extra_stopwords)

        # nltk stopword corpus, only on request
        if nltk_stopwords:
            if nltk_download:
                os.makedirs(nltk_dir, exist_ok=True)
                nltk.download("stopwords", download_dir=nltk_dir, quiet=True)
            if nltk_dir not in nltk.data.path:
                nltk.data.path.append(nltk_dir)
            words.update(stopwords.words(nltk_stopwords))
        self.stopwords = frozenset(words)

        # ASCII word characters, whitespace and script letters survive
        self._strip_re = re.compile(
            r"[^0-9A-Za-z_\s" + re.escape(self.script.alphabet) + r"]"
        )
        self._splitter = WhitespaceTokenizer()

    def tokenize(self, text: str) -> List[str]:
        """
        Tokenize an input string into normalized terms.

        Parameters
        ----------
        text : str
            The raw text (document body or query string).

        Returns
        -------
        List[str]
            Terms in original order, duplicates kept.
        """
        if not text:
            return []

        text = self._strip_re.sub(" ", text.lower())

        tokens = []
        for word in self._splitter.tokenize(text):
            if len(word) < MIN_TOKEN_LENGTH:
                continue

            if word in self.stopwords:
                continue

            if not self.in_script(word):
                continue

            tokens.append(word)

        return tokens

    def in_script(self, word: str) -> bool:
        """
        Script purity check: at least MIN_SCRIPT_RATIO of the characters
        belong to the target alphabet.
        """
        if not word:
            return False
        hits = sum(1 for ch in word if ch in self.alphabet)
        return hits > 0 and hits / len(word) >= MIN_SCRIPT_RATIO

    def token_stream(self, stream: Iterable[str]) -> Iterator[str]:
        """
        Tokenize every text of an iterable, yielding terms in order.
        """
        for text in stream:
            for token in self.tokenize(text):
                yield token
