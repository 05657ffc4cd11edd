import logging
from typing import List

from ..errors import Conflict, FeedError, IngestionFailed
from ..models.article import Article
from ..repositories.article_repository import ArticleStore
from ..utils.dates import parse_publication_time
from .fetcher import NewsFeedClient

logger = logging.getLogger(__name__)


class IngestionPipeline:
    """Fetch top headlines, drop those already stored, persist the rest.

    Duplicates are detected against the store only, one probe per candidate.
    Two new items sharing a headline in the same batch are both saved unless
    ``dedupe_within_batch`` is set.
    """

    def __init__(self, feed_client: NewsFeedClient, repository: ArticleStore, dedupe_within_batch=False):
        self.feed_client = feed_client
        self.repository = repository
        self.dedupe_within_batch = dedupe_within_batch
        self.stats = self._empty_stats()

    @staticmethod
    def _empty_stats():
        return {
            'articles_found': 0,
            'articles_stored': 0,
            'duplicates_skipped': 0,
            'items_skipped': 0
        }

    def run_ingestion(self) -> List[Article]:
        """Run one fetch and return the articles that were actually persisted."""
        logger.info("Starting top headlines ingestion...")
        stats = self._empty_stats()

        try:
            feed = self.feed_client.fetch_top_headlines()
        except FeedError as e:
            logger.error(f"Failed to fetch news from the external API: {e}")
            raise IngestionFailed(f"Failed to fetch news from the external API: {e}") from e

        if not feed.articles:
            logger.info("No articles found in the response.")
            self.stats = stats
            return []

        candidates = self._build_candidates(feed.articles, stats)
        stats['articles_found'] = len(candidates)

        to_save = []
        batch_headlines = set()
        for candidate in candidates:
            if self.repository.find_by_headline(candidate.headline) is not None:
                logger.info(f"Article already exists: {candidate.headline[:50]}...")
                stats['duplicates_skipped'] += 1
                continue
            if self.dedupe_within_batch and candidate.headline in batch_headlines:
                stats['duplicates_skipped'] += 1
                continue
            batch_headlines.add(candidate.headline)
            to_save.append(candidate)

        saved = self.repository.save_all(to_save) if to_save else []
        stats['articles_stored'] = len(saved)
        self.stats = stats
        logger.info(f"Ingestion complete. Stats: {stats}")
        return saved

    def _build_candidates(self, feed_articles, stats) -> List[Article]:
        # Parse everything before the first write so a bad timestamp aborts the run cleanly.
        candidates = []
        for item in feed_articles:
            if not item.title:
                logger.warning("Skipping feed item with missing title")
                stats['items_skipped'] += 1
                continue
            try:
                publication_time = parse_publication_time(item.published_at)
            except ValueError as e:
                logger.error(f"Could not parse publishedAt for {item.title[:50]!r}: {e}")
                raise IngestionFailed(f"Malformed publication time {item.published_at!r}") from e
            candidates.append(Article(
                headline=item.title,
                description=item.description,
                publication_time=publication_time,
            ))
        return candidates

    def save_single(self, article: Article) -> Article:
        """Save one externally supplied article unless its headline is taken.

        Re-saving an article under its own id replaces it; any other stored
        article with the same headline raises ``Conflict``.
        """
        existing = self.repository.find_by_headline(article.headline)
        if existing is not None and existing.id != article.id:
            logger.warning(f"Rejected duplicate headline: {article.headline[:50]}...")
            raise Conflict(article.headline, existing.id)
        return self.repository.save(article)
