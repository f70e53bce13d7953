# src/analytics/orchestrator.py
"""
Analytics views over one organization's feedback corpus: summary averages,
rating distribution with a smoothed timeline, top keywords and clustered
keywords.
"""

from collections import Counter
from typing import Any, Dict, List, Optional, Sequence
import logging

from src.analytics.errors import (
    validate_cluster_count,
    validate_max_iter,
    validate_smoothing_factor,
    validate_top_n,
)
from src.analytics.kmeans import KMeansClusterer
from src.analytics.smoothing import smooth_ratings
from src.analytics.tfidf import TfIdfVectorizer
from src.config.settings import Settings
from src.models.schemas import AnalyticsSummary, FeedbackRecord
from src.text.frequency import count_words, top_n
from src.text.tokenizer import DEFAULT_TEXT_CONFIG, TextConfig, tokenize_without_stop_words

logger = logging.getLogger(__name__)


class AnalyticsOrchestrator:
    """
    Computes the analytics views for a corpus of feedback records.

    The orchestrator only holds immutable configuration; every query is a
    pure function of the corpus it receives.
    """

    def __init__(
        self,
        text_config: TextConfig = DEFAULT_TEXT_CONFIG,
        smoothing_factor: float = 0.6,
        n_clusters: int = 3,
        n_keywords: int = 10,
        random_state: Optional[int] = None,
        max_iter: int = 300,
        keep_timestamp_collisions: bool = False,
    ):
        self.text_config = text_config
        self.smoothing_factor = validate_smoothing_factor(smoothing_factor)
        self.n_clusters = validate_cluster_count(n_clusters)
        self.n_keywords = validate_top_n(n_keywords)
        self.max_iter = validate_max_iter(max_iter)
        self.random_state = random_state
        self.keep_timestamp_collisions = keep_timestamp_collisions

    @classmethod
    def from_settings(cls, config: Settings, text_config: TextConfig = DEFAULT_TEXT_CONFIG) -> "AnalyticsOrchestrator":
        return cls(
            text_config=text_config,
            smoothing_factor=config.analytics_smoothing_factor,
            n_clusters=config.analytics_n_clusters,
            n_keywords=config.analytics_top_n,
            random_state=config.analytics_random_state,
            max_iter=config.analytics_kmeans_max_iter,
            keep_timestamp_collisions=config.analytics_keep_timestamp_collisions,
        )

    @staticmethod
    def _join_texts(records: Sequence[FeedbackRecord]) -> str:
        return " ".join(record.text for record in records)

    def summary(self, corpus: Sequence[FeedbackRecord]) -> Dict[str, Any]:
        """
        Average rating, number of feedbacks and average text length (characters).

        All three are 0 for an empty corpus.
        """
        count = len(corpus)
        if count == 0:
            result = AnalyticsSummary(average_rating=0.0, feedback_count=0, average_text_length=0.0)
        else:
            result = AnalyticsSummary(
                average_rating=sum(record.rating for record in corpus) / count,
                feedback_count=count,
                average_text_length=sum(len(record.text) for record in corpus) / count,
            )
        return result.model_dump()

    def ratings_over_time(self, corpus: Sequence[FeedbackRecord], gamma: Optional[float] = None) -> Dict[str, Any]:
        """
        Rating histogram plus the smoothed rating timeline.

        Args:
            corpus: Feedback records of one organization
            gamma: Smoothing factor in (0, 1]; defaults to the configured one

        Returns:
            Dict with ``histogram`` (rating -> count, ascending rating) and
            ``timeline`` (list of ``{"date", "rating"}`` sorted by date)
        """
        gamma = self.smoothing_factor if gamma is None else validate_smoothing_factor(gamma)

        counts = Counter(record.rating for record in corpus)
        histogram = {rating: counts[rating] for rating in sorted(counts)}

        series = smooth_ratings(corpus, gamma=gamma, keep_collisions=self.keep_timestamp_collisions)
        timeline = [{"date": timestamp, "rating": value} for timestamp, value in series]

        return {"histogram": histogram, "timeline": timeline}

    def top_keywords(self, corpus: Sequence[FeedbackRecord], n: Optional[int] = None) -> Dict[str, int]:
        """Most frequent non stop-word tokens across all feedback texts."""
        n = self.n_keywords if n is None else validate_top_n(n)
        table = count_words(self._join_texts(corpus), self.text_config)
        return top_n(table, n)

    def cluster_labels(self, corpus: Sequence[FeedbackRecord], k: int) -> List[int]:
        """Cluster id of every record, in corpus order."""
        if not corpus:
            return []
        documents = [tokenize_without_stop_words(record.text, self.text_config) for record in corpus]
        matrix = TfIdfVectorizer().fit_transform(documents)
        clusterer = KMeansClusterer(
            n_clusters=k,
            max_iter=self.max_iter,
            init="first" if self.random_state is None else "random",
            random_state=self.random_state,
        )
        return clusterer.fit_predict(matrix).tolist()

    def cluster_keywords(
        self,
        corpus: Sequence[FeedbackRecord],
        k: Optional[int] = None,
        n: Optional[int] = None,
    ) -> Dict[str, List[Any]]:
        """
        Cluster feedback texts by TF-IDF similarity and summarise each cluster.

        Args:
            corpus: Feedback records of one organization
            k: Number of clusters; defaults to the configured one
            n: Keywords per cluster; defaults to the configured one

        Returns:
            Dict with ``clusters`` (k lists of feedback dicts, in cluster id
            order) and ``cluster_keywords`` (k keyword dicts, same order)
        """
        k = self.n_clusters if k is None else validate_cluster_count(k)
        n = self.n_keywords if n is None else validate_top_n(n)

        labels = self.cluster_labels(corpus, k)
        groups: List[List[FeedbackRecord]] = [[] for _ in range(k)]
        for record, label in zip(corpus, labels):
            groups[label].append(record)

        keywords = [top_n(count_words(self._join_texts(group), self.text_config), n) for group in groups]
        logger.info(f"Clustered {len(corpus)} feedbacks into sizes {[len(group) for group in groups]}")

        return {
            "clusters": [[record.model_dump() for record in group] for group in groups],
            "cluster_keywords": keywords,
        }

    def run_all(
        self,
        corpus: Sequence[FeedbackRecord],
        k: Optional[int] = None,
        n: Optional[int] = None,
        gamma: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Compute every analytics view for the corpus."""
        return {
            "average": self.summary(corpus),
            "ratings": self.ratings_over_time(corpus, gamma=gamma),
            "keywords": self.top_keywords(corpus, n=n),
            "clustering": self.cluster_keywords(corpus, k=k, n=n),
        }
