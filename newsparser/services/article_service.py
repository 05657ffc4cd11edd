import logging
from typing import List

from ..errors import NotFound
from ..models.article import Article
from ..repositories.article_repository import ArticleStore

logger = logging.getLogger(__name__)


class ArticleService:
    def __init__(self, repository: ArticleStore):
        self.repository = repository

    def get_all_articles(self) -> List[Article]:
        articles = self.repository.find_all()
        logger.info(f"Retrieved {len(articles)} articles")
        return articles

    def get_article_by_id(self, article_id: str) -> Article:
        """
        Retrieves a single article, raising NotFound when it does not exist.
        """
        article = self.repository.find_by_id(article_id)
        if article is None:
            logger.warning(f"Article with ID {article_id} not found.")
            raise NotFound(article_id)
        return article

    def delete_article(self, article_id: str) -> None:
        self.repository.delete_by_id(article_id)
