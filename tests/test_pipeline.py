# ======================================================
# tests/test_pipeline.py
# ======================================================
# Here, we are testing the retrieval-augmented pipeline to ensure:
#   - the seed corpus loads and answers queries
#   - context and prompts are formatted from retrieved documents
#   - generator failures become user-facing messages
# ======================================================

import unittest

from ragindex.corpus import SEED_DOCUMENTS
from ragindex.errors import GenerationError
from ragindex.indexer import Document, Index
from ragindex.pipeline import (
    CONTEXT_FOOTER,
    CONTEXT_HEADER,
    EMPTY_RESPONSE_MESSAGE,
    NO_CONTEXT_MESSAGE,
    STATUS_MESSAGES,
    Generator,
    MockGenerator,
    RAGPipeline,
)
from ragindex.tokenizer import Tokenizer


class FailingGenerator(Generator):
    def __init__(self, error):
        self.error = error

    def ask(self, prompt):
        raise self.error


class RecordingGenerator(Generator):
    def __init__(self, answer="  an answer  "):
        self.answer = answer
        self.prompts = []

    def ask(self, prompt):
        self.prompts.append(prompt)
        return self.answer


class TestSeedPipeline(unittest.TestCase):

    @classmethod
    def setUpClass(cls):
        # here, we are loading the seed knowledge base once for the class
        cls.pipeline = RAGPipeline.with_seed_corpus(top_k=3)

    def test_seed_stats(self):
        stats = self.pipeline.get_stats()
        self.assertEqual(stats.document_count, len(SEED_DOCUMENTS))
        self.assertGreater(stats.vocabulary_size, 0)

    def test_seed_query(self):
        context, docs = self.pipeline.process_query("Векторный поиск похожие тексты")
        self.assertTrue(docs)
        self.assertLessEqual(len(docs), 3)
        self.assertEqual(docs[0].id, "doc_2")
        self.assertTrue(context.startswith(CONTEXT_HEADER))

    def test_seed_no_match(self):
        context, docs = self.pipeline.process_query("zebra giraffe")
        self.assertEqual(context, NO_CONTEXT_MESSAGE)
        self.assertEqual(docs, [])


class TestPipeline(unittest.TestCase):

    def setUp(self):
        self.index = Index(tokenizer=Tokenizer())
        self.index.add_documents(["cats chase mice", "dogs chase cats", "birds fly south"])
        self.generator = RecordingGenerator()
        self.pipeline = RAGPipeline(self.index, generator=self.generator, top_k=2)

    def test_build_context(self):
        docs = [Document("doc_0", "first text", ()), Document("doc_1", "second text", ())]
        self.assertEqual(
            RAGPipeline.build_context(docs),
            CONTEXT_HEADER + "1. first text\n2. second text\n" + CONTEXT_FOOTER,
        )
        self.assertEqual(RAGPipeline.build_context([]), "")

    def test_prompt_with_context(self):
        prompt, docs = self.pipeline.build_prompt("chase cats")
        self.assertEqual(len(docs), 2)
        self.assertIn("1. cats chase mice", prompt)
        self.assertIn("answer the question: chase cats", prompt)

    def test_prompt_without_context(self):
        prompt, docs = self.pipeline.build_prompt("zebra")
        self.assertEqual(docs, [])
        self.assertTrue(prompt.startswith("Question: zebra"))

    def test_answer(self):
        self.assertEqual(self.pipeline.answer("birds"), "an answer")
        self.assertIn("birds fly south", self.generator.prompts[0])

    def test_empty_answer(self):
        pipeline = RAGPipeline(self.index, generator=RecordingGenerator(answer="   "))
        self.assertTrue(pipeline.answer("birds").endswith(EMPTY_RESPONSE_MESSAGE))

    def test_generation_errors(self):
        cases = [
            (GenerationError("unauthorized", status=401), STATUS_MESSAGES[401]),
            (GenerationError("too many requests", status=429), STATUS_MESSAGES[429]),
            (GenerationError("payment required", status=402), STATUS_MESSAGES[402]),
            (GenerationError("no response from model"), EMPTY_RESPONSE_MESSAGE),
            (GenerationError("socket closed", status=500), "Technical error: socket closed"),
        ]
        for error, expected in cases:
            with self.subTest(error=str(error)):
                pipeline = RAGPipeline(self.index, generator=FailingGenerator(error))
                self.assertTrue(pipeline.answer("cats").endswith(expected))

    def test_add_document(self):
        doc_id = self.pipeline.add_document("fish swim deep")
        self.assertEqual(doc_id, "doc_3")
        _, docs = self.pipeline.process_query("fish")
        self.assertEqual([d.id for d in docs], ["doc_3"])

    def test_mock_generator(self):
        generator = MockGenerator()
        self.assertIn("Retrieval-Augmented", generator.ask("What is RAG?"))
        self.assertIn("what is the weather", generator.ask("What is the weather"))


if __name__ == "__main__":
    unittest.main()
