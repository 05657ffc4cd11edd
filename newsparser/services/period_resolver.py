"""Period-based retrieval.

A period is a coarse time-of-day bucket. The calendar day it applies to is
today (UTC) when anything at all has been ingested since midnight, otherwise
yesterday. The probe does not look at the requested period, so asking for
"evening" in the morning of a day with fresh morning news returns today's
still-empty evening window.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import List, NamedTuple, Optional

from ..errors import InvalidPeriod
from ..models.article import Article
from ..repositories.article_repository import ArticleStore
from ..utils.dates import to_naive_utc

logger = logging.getLogger(__name__)

# Evening stops at 23:59, not midnight.
PERIODS = {
    "morning": (time(1, 0), time(12, 0)),
    "day": (time(12, 0), time(18, 0)),
    "evening": (time(18, 0), time(23, 59)),
}


class TimeWindow(NamedTuple):
    start: datetime
    end: datetime


class PeriodResolver:
    def __init__(self, repository: ArticleStore):
        self.repository = repository

    @staticmethod
    def window_for(period_name: str, query_date: date) -> TimeWindow:
        try:
            start, end = PERIODS[period_name.lower()]
        except (KeyError, AttributeError):
            raise InvalidPeriod(period_name)
        return TimeWindow(datetime.combine(query_date, start), datetime.combine(query_date, end))

    def query_date_for(self, now: datetime) -> date:
        today = now.date()
        midnight = datetime.combine(today, time.min)
        if self.repository.find_by_publication_time_between(midnight, now):
            return today
        return today - timedelta(days=1)

    def resolve(self, period_name: str, now: Optional[datetime] = None) -> List[Article]:
        # Fail on a bad period before touching the store.
        self.window_for(period_name, date.today())

        now = to_naive_utc(now or datetime.now(timezone.utc))
        query_date = self.query_date_for(now)
        window = self.window_for(period_name, query_date)
        articles = self.repository.find_by_publication_time_between(window.start, window.end)
        logger.info(f"Retrieved {len(articles)} articles for period '{period_name}' on {query_date}")
        return articles
