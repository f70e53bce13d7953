# src/analytics/kmeans.py
"""
K-means clustering of TF-IDF document vectors.
"""

from typing import Optional
import logging

import numpy as np
from sklearn.cluster import KMeans

from src.analytics.errors import AnalyticsParameterError, validate_cluster_count, validate_max_iter

logger = logging.getLogger(__name__)


INIT_POLICIES = ("first", "random")


class KMeansClusterer:
    """
    Lloyd's k-means with deterministic centroid initialisation.

    ``init="first"`` seeds the centroids with the first k distinct rows in
    input order; ``init="random"`` draws k distinct rows using
    ``random_state``. When the matrix has fewer distinct rows than k, k is
    capped at that number, so labels stay in ``[0, k)`` and the upper ids
    are left unused.
    """

    def __init__(
        self,
        n_clusters: int = 3,
        max_iter: int = 300,
        init: str = "first",
        random_state: Optional[int] = None,
    ):
        self.n_clusters = validate_cluster_count(n_clusters)
        self.max_iter = validate_max_iter(max_iter)
        if init not in INIT_POLICIES:
            raise AnalyticsParameterError(f"Unsupported init policy '{init}'. Supported: {list(INIT_POLICIES)}")
        self.init = init
        self.random_state = random_state
        self.cluster_centers_: Optional[np.ndarray] = None
        self.n_iter_ = 0
        self.effective_n_clusters_ = 0

    def _distinct_row_indices(self, matrix: np.ndarray) -> np.ndarray:
        """Index of the first occurrence of every distinct row, in input order."""
        _, first_index = np.unique(matrix, axis=0, return_index=True)
        return np.sort(first_index)

    def _initial_centers(self, matrix: np.ndarray, distinct: np.ndarray, k: int) -> np.ndarray:
        if self.init == "random":
            rng = np.random.default_rng(self.random_state)
            chosen = rng.choice(distinct, size=k, replace=False)
        else:
            chosen = distinct[:k]
        return matrix[chosen].copy()

    def fit_predict(self, matrix: np.ndarray) -> np.ndarray:
        """
        Assign every row of the matrix to a cluster.

        Args:
            matrix: 2D array, one row per document

        Returns:
            Integer array of cluster ids, same length and order as the rows
        """
        matrix = np.asarray(matrix, dtype=float)
        n_rows = matrix.shape[0] if matrix.ndim == 2 else 0
        self.n_iter_ = 0

        if n_rows == 0:
            self.effective_n_clusters_ = 0
            self.cluster_centers_ = np.zeros((0, matrix.shape[1] if matrix.ndim == 2 else 0))
            return np.zeros(0, dtype=int)

        if matrix.shape[1] == 0:
            distinct = np.array([0])
        else:
            distinct = self._distinct_row_indices(matrix)

        k = min(self.n_clusters, len(distinct))
        self.effective_n_clusters_ = k
        if k < self.n_clusters:
            logger.debug(f"Only {len(distinct)} distinct rows; capping k from {self.n_clusters} to {k}")

        if k == 1:
            self.cluster_centers_ = matrix.mean(axis=0, keepdims=True)
            return np.zeros(n_rows, dtype=int)

        centers = self._initial_centers(matrix, distinct, k)
        model = KMeans(
            n_clusters=k,
            init=centers,
            n_init=1,
            max_iter=self.max_iter,
            tol=0.0,
            algorithm="lloyd",
        )
        labels = model.fit_predict(matrix)
        self.cluster_centers_ = model.cluster_centers_
        self.n_iter_ = int(model.n_iter_)

        logger.debug(f"K-means finished after {self.n_iter_} iterations with k={k}")
        return labels.astype(int)
