from unittest.mock import Mock

import mongomock
import pytest

from newsparser.models.article import Article
from newsparser.models.feed import FeedResult
from newsparser.repositories.article_repository import MongoArticleRepository
from newsparser.tasks.fetcher import NewsFeedClient


@pytest.fixture
def mongo_db():
    return mongomock.MongoClient().get_database('newsparser_test')


@pytest.fixture
def repository(mongo_db):
    return MongoArticleRepository(mongo_db)


@pytest.fixture
def make_article():
    def _make(headline, publication_time, description=None):
        return Article(headline=headline, description=description, publication_time=publication_time)
    return _make


@pytest.fixture
def feed_client():
    """A feed client whose response is set per test via ``respond_with``."""
    client = Mock(spec=NewsFeedClient)

    def respond_with(*items):
        client.fetch_top_headlines.return_value = FeedResult.model_validate({
            "status": "ok",
            "totalResults": len(items),
            "articles": list(items),
        })

    client.respond_with = respond_with
    respond_with()
    return client
