import logging
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Iterable, List, Optional

from bson.errors import InvalidId
from bson.objectid import ObjectId
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from ..models.article import Article

logger = logging.getLogger(__name__)


class ArticleStore(ABC):
    """Persistence operations the ingestion and retrieval paths rely on."""

    @abstractmethod
    def save(self, article: Article) -> Article:
        """Insert the article, or overwrite the stored one when it carries an id."""

    @abstractmethod
    def save_all(self, articles: Iterable[Article]) -> List[Article]:
        """Bulk ``save``; no atomicity across elements."""

    @abstractmethod
    def find_all(self) -> List[Article]:
        ...

    @abstractmethod
    def find_by_id(self, article_id: str) -> Optional[Article]:
        ...

    @abstractmethod
    def delete_by_id(self, article_id: str) -> None:
        """Remove the article; a missing id is a no-op."""

    @abstractmethod
    def find_by_publication_time_between(self, start: datetime, end: datetime) -> List[Article]:
        """Articles published in ``[start, end)``."""

    @abstractmethod
    def find_by_headline(self, headline: str) -> Optional[Article]:
        ...


def _object_id(article_id) -> Optional[ObjectId]:
    try:
        return ObjectId(article_id)
    except (InvalidId, TypeError):
        return None


class MongoArticleRepository(ArticleStore):
    def __init__(self, db_client, collection_name='articles'):
        self.db = db_client
        self.collection = self.db.get_collection(collection_name)

        # Lookup indexes for the dedup probe and the period query. Headlines are
        # deliberately not unique: a single feed batch may repeat one.
        try:
            self.collection.create_index([("headline", ASCENDING)])
            self.collection.create_index([("publication_time", ASCENDING)])
        except PyMongoError as e:
            logger.error(f"Failed to create article indexes: {e}")

    def save(self, article: Article) -> Article:
        document = article.to_document()
        if article.id is None:
            result = self.collection.insert_one(document)
            return article.model_copy(update={"id": str(result.inserted_id)})

        object_id = _object_id(article.id)
        if object_id is None:
            raise ValueError(f"Invalid article id: {article.id!r}")
        self.collection.replace_one({"_id": object_id}, document, upsert=True)
        return article

    def save_all(self, articles: Iterable[Article]) -> List[Article]:
        articles = list(articles)
        new_articles = [a for a in articles if a.id is None]

        inserted_ids = iter([])
        if new_articles:
            result = self.collection.insert_many([a.to_document() for a in new_articles])
            inserted_ids = iter(result.inserted_ids)

        saved = []
        for article in articles:
            if article.id is None:
                saved.append(article.model_copy(update={"id": str(next(inserted_ids))}))
            else:
                saved.append(self.save(article))
        logger.info(f"Saved {len(saved)} articles ({len(new_articles)} new)")
        return saved

    def find_all(self) -> List[Article]:
        return [Article.from_document(doc) for doc in self.collection.find({})]

    def find_by_id(self, article_id: str) -> Optional[Article]:
        object_id = _object_id(article_id)
        if object_id is None:
            return None
        document = self.collection.find_one({"_id": object_id})
        return Article.from_document(document) if document else None

    def delete_by_id(self, article_id: str) -> None:
        object_id = _object_id(article_id)
        if object_id is None:
            return
        result = self.collection.delete_one({"_id": object_id})
        if result.deleted_count:
            logger.info(f"Deleted article {article_id}")

    def find_by_publication_time_between(self, start: datetime, end: datetime) -> List[Article]:
        cursor = self.collection.find(
            {"publication_time": {"$gte": start, "$lt": end}}
        ).sort("publication_time", ASCENDING)
        return [Article.from_document(doc) for doc in cursor]

    def find_by_headline(self, headline: str) -> Optional[Article]:
        document = self.collection.find_one({"headline": headline})
        return Article.from_document(document) if document else None
