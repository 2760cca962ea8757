# ======================================================
# tests/test_query.py
# ======================================================
# Here, we are testing similarity search to ensure:
#   - cosine ranking with a relevance floor works end to end
#   - equal scores keep insertion order
#   - top_k truncation and degenerate inputs behave
# ======================================================

import unittest

import numpy as np

from ragindex.indexer import Index
from ragindex.smart import cosine_similarity
from ragindex.tokenizer import Tokenizer


class TestSearch(unittest.TestCase):

    def setUp(self):
        # here, we are seeding the small animal corpus
        self.index = Index(tokenizer=Tokenizer())
        self.index.add_documents(["cats chase mice", "dogs chase cats", "birds fly south"])

    def contents(self, docs):
        return [d.content for d in docs]

    def test_empty_index(self):
        self.assertEqual(Index().search_similar("anything", 5), [])

    def test_end_to_end(self):
        results = self.index.search_similar("chase cats", top_k=2)
        # here, both documents hold both query terms, so they tie and keep insertion order
        self.assertEqual(self.contents(results), ["cats chase mice", "dogs chase cats"])
        self.assertNotIn("birds fly south", self.contents(results))

        scored = self.index.search_scored("chase cats", top_k=5)
        self.assertEqual(len(scored), 2)
        self.assertAlmostEqual(scored[0].score, scored[1].score)

    def test_better_match_ranks_first(self):
        results = self.index.search_similar("dogs chase cats", top_k=2)
        self.assertEqual(self.contents(results), ["dogs chase cats", "cats chase mice"])

    def test_self_similarity(self):
        scored = self.index.search_scored("birds fly south", top_k=1)
        self.assertEqual(scored[0].document.id, "doc_2")
        self.assertAlmostEqual(scored[0].score, 1.0, places=9)

    def test_stable_ranking(self):
        index = Index()
        index.add_documents(["red apples", "red cars", "red apples"])
        results = index.search_similar("red", top_k=3)
        self.assertEqual([d.id for d in results], ["doc_0", "doc_1", "doc_2"])

    def test_top_k_truncation(self):
        index = Index()
        index.add_documents([
            "shared",
            "shared alpha",
            "shared alpha beta",
            "shared beta gamma",
            "shared beta gamma delta",
        ])
        top_two = index.search_similar("shared alpha", top_k=2)
        self.assertEqual(self.contents(top_two), ["shared alpha", "shared alpha beta"])

        everything = index.search_similar("shared alpha", top_k=100)
        self.assertEqual(len(everything), 5)

        three = self.index.search_similar("chase cats birds", top_k=100)
        self.assertEqual(len(three), 3)

    def test_non_positive_top_k(self):
        self.assertEqual(self.index.search_similar("chase cats", top_k=0), [])
        self.assertEqual(self.index.search_similar("chase cats", top_k=-3), [])

    def test_relevance_floor(self):
        index = Index(relevance_floor=0.5)
        index.add_documents(["shared", "shared alpha", "shared beta gamma"])
        results = index.search_scored("shared alpha", top_k=10)
        self.assertEqual([hit.document.content for hit in results], ["shared alpha", "shared"])
        self.assertTrue(all(hit.score > 0.5 for hit in results))

    def test_unknown_terms_ignored(self):
        results = self.index.search_similar("zebra birds", top_k=5)
        self.assertEqual(self.contents(results), ["birds fly south"])
        self.assertEqual(self.index.search_similar("zebra giraffe", top_k=5), [])
        self.assertEqual(self.index.search_similar("", top_k=5), [])

    def test_zero_token_document_never_matches(self):
        empty_id = self.index.add_document("the of and")
        for query in ["the of and", "chase", "birds fly south", ""]:
            ids = [d.id for d in self.index.search_similar(query, top_k=10)]
            self.assertNotIn(empty_id, ids)


class TestCosineSimilarity(unittest.TestCase):

    def test_identical(self):
        a = np.array([1.0, 0.5, 0.0])
        self.assertAlmostEqual(cosine_similarity(a, a), 1.0)

    def test_orthogonal(self):
        self.assertEqual(cosine_similarity(np.array([1.0, 0.0]), np.array([0.0, 1.0])), 0.0)

    def test_zero_and_empty(self):
        self.assertEqual(cosine_similarity(np.zeros(3), np.ones(3)), 0.0)
        self.assertEqual(cosine_similarity(np.array([]), np.ones(3)), 0.0)

    def test_shared_prefix(self):
        # here, the extra trailing entry of b is ignored
        a = np.array([1.0, 1.0])
        b = np.array([1.0, 1.0, 5.0])
        self.assertAlmostEqual(cosine_similarity(a, b), 1.0)


if __name__ == "__main__":
    unittest.main()
