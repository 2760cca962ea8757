# ragindex/pipeline.py
"""
Retrieval-augmented answering on top of the Index.

The pipeline turns retrieved documents into a grounding context, builds
the prompt for a text generator and translates generator failures into
messages fit for an end user. The index never talks to the generator.
"""

import logging
from typing import List, Optional, Tuple

from .corpus import SEED_DOCUMENTS, SEED_SCRIPT
from .errors import GenerationError
from .indexer import DEFAULT_RELEVANCE_FLOOR, DEFAULT_TOP_K, Document, Index, IndexStats
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

NO_CONTEXT_MESSAGE = "No relevant information found in the knowledge base."
CONTEXT_HEADER = "Relevant information from the knowledge base:\n\n"
CONTEXT_FOOTER = "\nUse this information to answer the question."

GENERATION_FAILED = "Sorry, the answer could not be generated. "
STATUS_MESSAGES = {
    401: "API authorization failed. Check the API key.",
    402: "Insufficient funds on the API account.",
    429: "Request limit exceeded. Try again in a minute.",
}
EMPTY_RESPONSE_MESSAGE = "The model returned no answer. Try rephrasing the question."


class Generator:
    """
    Text-generation backend: one prompt in, one answer out.
    Implementations raise GenerationError on failure.
    """
    def ask(self, prompt: str) -> str:  # pragma: no cover - interface
        raise NotImplementedError


class MockGenerator(Generator):
    """
    Offline backend for demos and tests: canned answers by keyword,
    otherwise echoes the question back.
    """
    RESPONSES = {
        "rag": "RAG (Retrieval-Augmented Generation) searches a knowledge base before generating an answer.",
        "hello": "Hello! I am running in test mode.",
        "commands": "Available commands: /start, /help, /ask, /info",
    }

    def ask(self, prompt: str) -> str:
        lowered = prompt.lower()
        for key, response in self.RESPONSES.items():
            if key in lowered:
                return response
        return f"Received your question: '{lowered}'. A real backend would answer it."


class RAGPipeline:
    def __init__(self, index: Index, generator: Optional[Generator] = None,
                 top_k: int = DEFAULT_TOP_K):
        self.index = index
        self.generator = generator or MockGenerator()
        self.top_k = top_k

    @classmethod
    def with_seed_corpus(cls, generator: Optional[Generator] = None,
                         top_k: int = DEFAULT_TOP_K,
                         relevance_floor: float = DEFAULT_RELEVANCE_FLOOR,
                         script: str = SEED_SCRIPT) -> "RAGPipeline":
        index = Index(tokenizer=Tokenizer(script=script), relevance_floor=relevance_floor)
        index.add_documents(SEED_DOCUMENTS)
        stats = index.get_stats()
        logger.info("Seed corpus loaded: %s", stats.summary)
        return cls(index, generator=generator, top_k=top_k)

    def process_query(self, question: str) -> Tuple[str, List[Document]]:
        """
        Search the index and format what was found.

        Returns the context text and the matched documents; with no
        match the context is NO_CONTEXT_MESSAGE and the list is empty.
        """
        docs = self.index.search_similar(question, self.top_k)
        logger.debug("Found %d relevant documents for %r", len(docs), question)
        if not docs:
            return NO_CONTEXT_MESSAGE, docs
        return self.build_context(docs), docs

    @staticmethod
    def build_context(docs: List[Document]) -> str:
        if not docs:
            return ""
        lines = [f"{i}. {doc.content}" for i, doc in enumerate(docs, start=1)]
        return CONTEXT_HEADER + "\n".join(lines) + "\n" + CONTEXT_FOOTER

    def build_prompt(self, question: str) -> Tuple[str, List[Document]]:
        context, docs = self.process_query(question)
        if docs:
            prompt = (f"{context}\n\nBased on the context above, answer the question: {question}\n\n"
                      "Be brief and informative. "
                      "If the context has no exact answer, use your own knowledge.")
        else:
            prompt = (f"Question: {question}\n\n"
                      "Answer as a helpful assistant. Be brief and informative.")
        return prompt, docs

    def answer(self, question: str) -> str:
        """
        Retrieve, prompt the generator and return its answer, or a
        user-facing explanation when generation fails.
        """
        prompt, _ = self.build_prompt(question)
        try:
            answer = self.generator.ask(prompt)
        except GenerationError as e:
            logger.warning("Generation failed: %s", e)
            return GENERATION_FAILED + describe_generation_error(e)

        if not answer or not answer.strip():
            logger.warning("Generation returned an empty answer for %r", question)
            return GENERATION_FAILED + EMPTY_RESPONSE_MESSAGE
        return answer.strip()

    def add_document(self, content: str) -> str:
        return self.index.add_document(content)

    def get_stats(self) -> IndexStats:
        return self.index.get_stats()


def describe_generation_error(error: GenerationError) -> str:
    if error.status in STATUS_MESSAGES:
        return STATUS_MESSAGES[error.status]
    if "no response" in str(error).lower():
        return EMPTY_RESPONSE_MESSAGE
    return f"Technical error: {error}"
