"""
Analytics pipeline: fetch one organization's feedback and compute the
summary, ratings, keyword and clustering views over it.
"""

from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
import logging
import argparse
import json

from src.config.settings import Settings
from src.data_access.sql_client import SQLClient
from src.analytics.orchestrator import AnalyticsOrchestrator
from src.models.schemas import FeedbackRecord


logger = logging.getLogger(__name__)


VIEWS = ("summary", "ratings", "keywords", "clustering", "all")


class AnalyticsPipeline:
    """Pipeline computing analytics views for a single organization."""

    def __init__(self, config: Settings, orchestrator: Optional[AnalyticsOrchestrator] = None):
        """
        Initialize the analytics pipeline.

        Args:
            config: Application settings
            orchestrator: Analytics orchestrator. If None, one is built from the analytics settings.
        """
        self.config = config
        self.sql_client = SQLClient(config)
        self.orchestrator = orchestrator or AnalyticsOrchestrator.from_settings(config)

    def compute_view(
        self,
        corpus: List[FeedbackRecord],
        view: str = "all",
        top_n: Optional[int] = None,
        n_clusters: Optional[int] = None,
        smoothing_factor: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Run one analytics view (or all of them) over an already fetched corpus.
        """
        if view == "summary":
            return self.orchestrator.summary(corpus)
        if view == "ratings":
            return self.orchestrator.ratings_over_time(corpus, gamma=smoothing_factor)
        if view == "keywords":
            return self.orchestrator.top_keywords(corpus, n=top_n)
        if view == "clustering":
            return self.orchestrator.cluster_keywords(corpus, k=n_clusters, n=top_n)
        if view == "all":
            return self.orchestrator.run_all(corpus, k=n_clusters, n=top_n, gamma=smoothing_factor)
        raise ValueError(f"Unsupported analytics view '{view}'. Supported: {list(VIEWS)}")

    def run(
        self,
        organization_id: Optional[str] = None,
        user_id: Optional[str] = None,
        view: str = "all",
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
        top_n: Optional[int] = None,
        n_clusters: Optional[int] = None,
        smoothing_factor: Optional[float] = None,
    ) -> dict:
        """
        Execute the analytics pipeline.

        Args:
            organization_id: Organization whose feedback is analysed
            user_id: Alternative to organization_id; the user's organization is used
            view: One of summary, ratings, keywords, clustering, all
            start_date: Only feedback created on or after this date
            end_date: Only feedback created on or before this date
            limit: Maximum number of feedback records to analyse
            top_n: Number of keywords to return (default from config)
            n_clusters: Number of clusters (default from config)
            smoothing_factor: Timeline smoothing factor (default from config)

        Returns:
            Dictionary with the organization, record count, view and results
        """
        if view not in VIEWS:
            raise ValueError(f"Unsupported analytics view '{view}'. Supported: {list(VIEWS)}")
        if not organization_id and not user_id:
            raise ValueError("Either organization_id or user_id must be provided")

        try:
            self.sql_client.connect()

            if not organization_id:
                user = self.sql_client.get_user_organization(user_id)
                if user is None:
                    raise LookupError(f"Unknown user '{user_id}'")
                organization_id = user.organization_id
                logger.info(f"Resolved user {user_id} to organization {organization_id}")

            logger.info(f"Fetching feedback records for organization {organization_id}")
            corpus = self.sql_client.get_feedback_for_organization(
                organization_id,
                start_date=start_date,
                end_date=end_date,
                limit=limit
            )
            logger.info(f"Found {len(corpus)} feedback records to analyse")
        finally:
            self.sql_client.close()

        results = self.compute_view(
            corpus,
            view=view,
            top_n=top_n,
            n_clusters=n_clusters,
            smoothing_factor=smoothing_factor,
        )
        logger.info(f"Computed '{view}' analytics for organization {organization_id}")

        return {
            "organization_id": organization_id,
            "total_records": len(corpus),
            "view": view,
            "results": results,
            "start_date": start_date.isoformat() if start_date else None,
            "end_date": end_date.isoformat() if end_date else None
        }


def main():
    """Main entry point for running the analytics pipeline with CLI arguments."""
    # Configure logging
    logging.basicConfig(
        level=logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # Parse command-line arguments
    parser = argparse.ArgumentParser(
        description='Compute feedback analytics (summary, ratings, keywords, clusters) for one organization.'
    )
    parser.add_argument('--organization-id', type=str, help='Organization whose feedback is analysed')
    parser.add_argument('--user-id', type=str, help='Resolve the organization from this user account')
    parser.add_argument('--view', type=str, default='all', choices=VIEWS, help='Analytics view to compute')
    parser.add_argument('--top-n', type=int, help='Number of keywords to return')
    parser.add_argument('--clusters', type=int, help='Number of clusters for the clustering view')
    parser.add_argument('--smoothing', type=float, help='Smoothing factor for the rating timeline, in (0, 1]')
    parser.add_argument('--start-date', type=str, help='Start date in YYYY-MM-DD format')
    parser.add_argument('--end-date', type=str, help='End date in YYYY-MM-DD format')
    parser.add_argument('--limit', type=int, help='Maximum number of records to analyse')
    parser.add_argument('--seed', type=int, help='Seed for random k-means initialisation')
    parser.add_argument('--output', type=str, help='Write the JSON result to this file instead of stdout')

    args = parser.parse_args()

    # Validate arguments
    if not args.organization_id and not args.user_id:
        parser.error("One of --organization-id or --user-id is required")
    if args.organization_id and args.user_id:
        parser.error("Cannot specify both --organization-id and --user-id")

    # Parse dates if provided
    start_date = None
    end_date = None

    if args.start_date:
        try:
            start_date = datetime.strptime(args.start_date, '%Y-%m-%d').replace(tzinfo=timezone.utc)
        except ValueError:
            parser.error(f"Invalid start date format: {args.start_date}. Use YYYY-MM-DD")

    if args.end_date:
        try:
            # Set to end of day
            end_date = datetime.strptime(args.end_date, '%Y-%m-%d').replace(
                hour=23, minute=59, second=59, tzinfo=timezone.utc
            )
        except ValueError:
            parser.error(f"Invalid end date format: {args.end_date}. Use YYYY-MM-DD")

    # Load configuration
    config = Settings()
    if args.seed is not None:
        config.analytics_random_state = args.seed

    # Run analytics pipeline
    pipeline = AnalyticsPipeline(config)
    stats = pipeline.run(
        organization_id=args.organization_id,
        user_id=args.user_id,
        view=args.view,
        start_date=start_date,
        end_date=end_date,
        limit=args.limit,
        top_n=args.top_n,
        n_clusters=args.clusters,
        smoothing_factor=args.smoothing
    )

    payload = json.dumps(stats, indent=2, default=str)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info(f"Analytics written to {args.output}")
    else:
        print(payload)


if __name__ == "__main__":
    main()
