# ragindex/indexer.py
"""
In-memory document index with similarity search.

Indexing component that supports:
 - document ingestion with sequential, never reused IDs
 - a global vocabulary grown in first-seen order
 - dense max-tf vectors for every document, rebuilt on each insertion
 - ranked cosine search with a relevance floor and stable tie-breaking
 - concurrent use: searches share a read lock, ingestion is exclusive
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

import numpy as np

from .lexicon import Lexicon
from .locks import ReadWriteLock
from .smart import cosine_similarity, max_tf_vector
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

# Similarity must be strictly above this to count as a match
DEFAULT_RELEVANCE_FLOOR = 0.05
DEFAULT_TOP_K = 3

DOC_ID_FORMAT = "doc_{}"


@dataclass(frozen=True)
class Document:
    id: str
    content: str
    tokens: Tuple[str, ...]


@dataclass(frozen=True)
class IndexStats:
    document_count: int
    vocabulary_size: int

    @property
    def summary(self) -> str:
        return f"{self.document_count} docs, {self.vocabulary_size} words"


class ScoredDocument(NamedTuple):
    document: Document
    score: float


class Index:
    """
    Document collection, vocabulary and per-document vectors behind one
    readers-writer lock.

    _documents[i] and _vectors[i] always describe the same document and
    every vector has exactly len(_lexicon) entries; both only change
    together under the write lock.
    """

    def __init__(self, tokenizer: Optional[Tokenizer] = None,
                 relevance_floor: float = DEFAULT_RELEVANCE_FLOOR):
        if not 0.0 <= relevance_floor < 1.0:
            raise ValueError(f"relevance_floor must be in [0, 1), got {relevance_floor!r}")

        self.tokenizer = tokenizer or Tokenizer()
        self.relevance_floor = relevance_floor

        self._lexicon = Lexicon()
        self._documents: List[Document] = []
        self._vectors: List[np.ndarray] = []
        self._positions: Dict[str, int] = {}
        self._next_id = 0
        self._lock = ReadWriteLock()

    # ---------------------------------------------------------
    # DOCUMENT INGESTION
    # ---------------------------------------------------------
    def add_document(self, content: str) -> str:
        """
        Store a document and return its ID.

        Every stored vector may be replaced by this call: a new term widens
        all of them. Empty or fully filtered content is stored as a
        zero-token document that no query can match.
        """
        content = content or ""
        tokens = tuple(self.tokenizer.tokenize(content))

        with self._lock.write_lock():
            doc_id = DOC_ID_FORMAT.format(self._next_id)
            self._next_id += 1

            self._positions[doc_id] = len(self._documents)
            self._documents.append(Document(id=doc_id, content=content, tokens=tokens))

            previous_size = len(self._lexicon)
            self._rebuild()

            new_terms = [self._lexicon.get_term(i) for i in range(previous_size, len(self._lexicon))]
            logger.debug("Added %s: %d tokens, vocabulary %d -> %d, new terms %s",
                         doc_id, len(tokens), previous_size, len(self._lexicon), new_terms)
            if not tokens:
                logger.debug("%s has no terms after filtering and will never match", doc_id)
        return doc_id

    def add_documents(self, contents: Iterable[str]) -> List[str]:
        """
        Add documents one by one, in order.
        """
        return [self.add_document(content) for content in contents]

    def _rebuild(self) -> None:
        """
        Rebuild the vocabulary from scratch, then every vector.

        Caller must hold the write lock. Documents are walked in insertion
        order, so existing terms keep their slots.
        """
        self._lexicon = Lexicon.from_token_lists(doc.tokens for doc in self._documents)
        self._vectors = [max_tf_vector(doc.tokens, self._lexicon) for doc in self._documents]

    # ---------------------------------------------------------
    # SEARCH
    # ---------------------------------------------------------
    def search_scored(self, query: str, top_k: int = DEFAULT_TOP_K) -> List[ScoredDocument]:
        """
        Rank stored documents by cosine similarity to the query.

        Documents scoring at or below the relevance floor are dropped.
        Equal scores keep insertion order. At most top_k results.
        """
        if top_k <= 0:
            return []

        q_tokens = self.tokenizer.tokenize(query)

        with self._lock.read_lock():
            if not self._documents:
                return []

            # Query terms outside the vocabulary are ignored
            q_vector = max_tf_vector(q_tokens, self._lexicon)

            candidates = []
            for position, (doc, d_vector) in enumerate(zip(self._documents, self._vectors)):
                score = cosine_similarity(q_vector, d_vector)
                if score > self.relevance_floor:
                    candidates.append((position, doc, score))

        candidates.sort(key=lambda x: (-x[2], x[0]))
        results = [ScoredDocument(doc, score) for _, doc, score in candidates[:top_k]]

        logger.debug("Query %r: %d matches above %.3f, returning %d",
                     query, len(candidates), self.relevance_floor, len(results))
        return results

    def search_similar(self, query: str, top_k: int = DEFAULT_TOP_K) -> List[Document]:
        """
        Top documents for a query, best first.
        """
        return [hit.document for hit in self.search_scored(query, top_k)]

    # ---------------------------------------------------------
    # READ HELPERS
    # ---------------------------------------------------------
    def get_stats(self) -> IndexStats:
        with self._lock.read_lock():
            return IndexStats(document_count=len(self._documents),
                              vocabulary_size=len(self._lexicon))

    def get_document(self, doc_id: str) -> Optional[Document]:
        with self._lock.read_lock():
            position = self._positions.get(doc_id)
            return None if position is None else self._documents[position]

    def get_vector(self, doc_id: str) -> Optional[np.ndarray]:
        """
        Copy of the document's current vector, or None for an unknown ID.
        Only valid until the next add_document call.
        """
        with self._lock.read_lock():
            position = self._positions.get(doc_id)
            return None if position is None else self._vectors[position].copy()

    def vocabulary(self) -> Dict[str, int]:
        """
        Snapshot of the term -> slot mapping.
        """
        with self._lock.read_lock():
            return self._lexicon.as_dict()

    def documents(self) -> List[Document]:
        with self._lock.read_lock():
            return list(self._documents)

    def __len__(self) -> int:
        with self._lock.read_lock():
            return len(self._documents)
