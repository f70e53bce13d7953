import pymssql
from typing import List, Optional
from datetime import datetime
from src.config.settings import Settings
from src.models.schemas import FeedbackRecord, OrganizationUser

class SQLClient:
    """SQL Server client for feedback and user records (read-only)."""

    def __init__(self, config: Settings):
        self.config = config
        self.conn = None

    def connect(self) -> None:
        """Establish database connection."""
        self.conn = pymssql.connect(
            server=self.config.sql_server_host,
            port=self.config.sql_server_port,
            user=self.config.sql_server_username,
            password=self.config.sql_server_password,
            database=self.config.sql_server_database
        )

    def close(self) -> None:
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.conn = None

    def get_user_organization(self, user_id: str) -> Optional[OrganizationUser]:
        """
        Resolve the organization a user account belongs to.
        """
        if not self.conn:
            self.connect()

        query = """
            SELECT user_id, organization_id, email
            FROM feedback_analytics.users
            WHERE user_id = %s
        """

        with self.conn.cursor(as_dict=True) as cursor:
            cursor.execute(query, (user_id,))
            row = cursor.fetchone()

            if not row:
                return None

            return OrganizationUser(
                user_id=str(row['user_id']),
                organization_id=str(row['organization_id']),
                email=row.get('email')
            )

    def get_feedback_for_organization(self, organization_id: str, start_date: Optional[datetime] = None, end_date: Optional[datetime] = None, limit: Optional[int] = None) -> List[FeedbackRecord]:
        """
        Retrieve the feedback corpus of one organization, oldest first.
        """
        if not self.conn:
            self.connect()

        query = """
            SELECT feedback_id, feedback_text, rating, created_at, organization_id
            FROM feedback_analytics.feedback
            WHERE organization_id = %s
              AND feedback_text IS NOT NULL
              AND rating IS NOT NULL
              AND created_at IS NOT NULL
        """

        params = [organization_id]
        if start_date:
            query += " AND created_at >= %s"
            params.append(start_date)

        if end_date:
            query += " AND created_at <= %s"
            params.append(end_date)

        if limit:
            query = f"SELECT TOP {int(limit)} * FROM ({query}) AS subquery ORDER BY created_at, feedback_id"
        else:
            query += " ORDER BY created_at, feedback_id"

        with self.conn.cursor(as_dict=True) as cursor:
            cursor.execute(query, tuple(params))
            rows = cursor.fetchall()

            return [
                FeedbackRecord(
                    feedback_id=str(row['feedback_id']),
                    text=row['feedback_text'],
                    rating=row['rating'],
                    created_at=row['created_at'],
                    organization_id=str(row['organization_id'])
                )
                for row in rows
            ]
