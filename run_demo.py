# ======================================================
# run_demo.py
# ======================================================
import argparse
import logging

from ragindex.config import load_settings
from ragindex.pipeline import RAGPipeline

DEFAULT_QUERIES = [
    "Что такое RAG и поиск информации?",
    "Векторный поиск похожие тексты",
    "Облачные вычисления хранение данных",
    "Рецепт борща",
]


def build_pipeline(settings):
    print("=== Loading the seed knowledge base ===")
    pipeline = RAGPipeline.with_seed_corpus(
        top_k=settings.top_k,
        relevance_floor=settings.relevance_floor,
        script=settings.script,
    )

    stats = pipeline.get_stats()
    print(f"Indexed {stats.document_count} documents.")
    print(f"Vocabulary size: {stats.vocabulary_size} unique terms.")

    return pipeline


def demo_queries(pipeline, queries, answer=False):
    for query in queries:
        print(f"=== Top {pipeline.top_k} results for query: {query!r} ===")
        results = pipeline.index.search_scored(query, pipeline.top_k)
        if not results:
            print("No results found for query.")
        for doc, score in results:
            print(f"{doc.id}\t{score:.4f}\t{doc.content}")

        if answer:
            print(pipeline.answer(query))


def main(argv=None):
    parser = argparse.ArgumentParser(description="Query the in-memory knowledge base")
    parser.add_argument("queries", nargs="*", help="queries to run (defaults to a few samples)")
    parser.add_argument("--env-file", default=None, help="path to a .env file")
    parser.add_argument("--add", action="append", default=[], metavar="TEXT",
                        help="extra document to index before querying (repeatable)")
    parser.add_argument("--answer", action="store_true",
                        help="also print the generated answer for each query")
    args = parser.parse_args(argv)

    settings = load_settings(args.env_file)
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    pipeline = build_pipeline(settings)
    for text in args.add:
        doc_id = pipeline.add_document(text)
        print(f"Added {doc_id}: {text}")

    demo_queries(pipeline, args.queries or DEFAULT_QUERIES, answer=args.answer)
    print(f"Store size: {pipeline.get_stats().summary}")


if __name__ == "__main__":
    main()
