# ragindex/smart.py
"""
Term weighting and similarity functions used by the index.

Vectors are dense numpy arrays aligned to the lexicon slots.
"""
from collections import Counter
from typing import Iterable

import numpy as np

from .lexicon import Lexicon


# ---------- TF ----------
def max_tf_vector(tokens: Iterable[str], lexicon: Lexicon) -> np.ndarray:
    """
    Max-normalized term frequency: count(term) / max count.

    Only terms known to the lexicon are counted, so the maximum is taken
    over in-vocabulary terms. Returns an all-zero vector when nothing
    matches, and an empty one for an empty lexicon.
    """
    vector = np.zeros(len(lexicon), dtype=np.float64)
    if len(lexicon) == 0:
        return vector

    tf = Counter(t for t in tokens if t in lexicon)
    if not tf:
        return vector

    max_tf = max(tf.values())
    for term, count in tf.items():
        vector[lexicon.lookup(term)] = count / max_tf
    return vector


# ---------- Similarity ----------
def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
    """
    dot(a, b) / (|a| * |b|) over the shared prefix; 0.0 when undefined.
    """
    n = min(len(a), len(b))
    if n == 0:
        return 0.0

    a = a[:n]
    b = b[:n]
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))
