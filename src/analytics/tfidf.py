# src/analytics/tfidf.py
"""
Dense TF-IDF vectorization of tokenized feedback documents.
"""

from typing import Dict, List, Sequence
import logging

import numpy as np
from sklearn.feature_extraction.text import TfidfTransformer

logger = logging.getLogger(__name__)


class TfIdfVectorizer:
    """
    Build a document-term TF-IDF matrix from already tokenized documents.

    Term frequency is the raw count of a term in a document. Inverse
    document frequency is the smoothed ``ln((1 + N) / (1 + df)) + 1``, so a
    term present in every document still gets a finite, positive weight.
    Columns follow the order in which terms are first seen in the corpus.
    """

    def __init__(self):
        self.vocabulary_: Dict[str, int] = {}
        self.idf_: np.ndarray = np.zeros(0)

    def build_vocabulary(self, documents: Sequence[List[str]]) -> Dict[str, int]:
        """Assign a column index to every distinct term, in first-seen order."""
        vocabulary: Dict[str, int] = {}
        for tokens in documents:
            for token in tokens:
                if token not in vocabulary:
                    vocabulary[token] = len(vocabulary)
        return vocabulary

    def count_matrix(self, documents: Sequence[List[str]], vocabulary: Dict[str, int]) -> np.ndarray:
        counts = np.zeros((len(documents), len(vocabulary)), dtype=float)
        for row, tokens in enumerate(documents):
            for token in tokens:
                counts[row, vocabulary[token]] += 1.0
        return counts

    def fit_transform(self, documents: Sequence[List[str]]) -> np.ndarray:
        """
        Compute the TF-IDF matrix.

        Args:
            documents: One token list per feedback, in corpus order

        Returns:
            Array of shape (n_documents, n_terms); 0.0 where a term is absent
        """
        vocabulary = self.build_vocabulary(documents)
        self.vocabulary_ = vocabulary
        counts = self.count_matrix(documents, vocabulary)

        if counts.size == 0:
            self.idf_ = np.zeros(len(vocabulary))
            logger.debug(f"Empty TF-IDF matrix for {len(documents)} documents")
            return counts

        transformer = TfidfTransformer(norm=None, use_idf=True, smooth_idf=True, sublinear_tf=False)
        matrix = transformer.fit_transform(counts)
        if hasattr(matrix, "toarray"):
            matrix = matrix.toarray()
        self.idf_ = transformer.idf_

        logger.debug(f"TF-IDF matrix built: {matrix.shape[0]} documents x {matrix.shape[1]} terms")
        return matrix

    def get_feature_names(self) -> List[str]:
        return list(self.vocabulary_)
