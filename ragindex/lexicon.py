# ragindex/lexicon.py
from typing import Dict, Iterable, List, Optional


class Lexicon:
    """
    Vocabulary: maps each term to a dense slot index.

    Slots are handed out in first-seen order and never reused, so
    size == max(slot) + 1 at all times.
    """

    def __init__(self):
        self.next_id: int = 0
        self.term_to_id: Dict[str, int] = dict()
        self.terms: List[str] = list()

    @classmethod
    def from_token_lists(cls, token_lists: Iterable[Iterable[str]]) -> "Lexicon":
        # Traversal order decides slot order, keep it stable
        lexicon = cls()
        for tokens in token_lists:
            for term in tokens:
                lexicon.get_id(term)
        return lexicon

    def get_id(self, term: str) -> int:
        if term in self.term_to_id:
            return self.term_to_id[term]

        term_id = self.next_id
        self.term_to_id[term] = term_id
        self.next_id += 1

        self.terms.append(term)
        return term_id

    def lookup(self, term: str) -> Optional[int]:
        """Slot of a known term, None otherwise. Never grows the lexicon."""
        return self.term_to_id.get(term)

    def get_term(self, term_id: int) -> Optional[str]:
        if term_id < 0 or term_id >= len(self.terms):
            return None
        return self.terms[term_id]

    def as_dict(self) -> Dict[str, int]:
        return dict(self.term_to_id)

    def __contains__(self, term: str) -> bool:
        return term in self.term_to_id

    def __len__(self) -> int:
        return self.next_id
