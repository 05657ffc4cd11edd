from .fetcher import FeedClientConfig, NewsFeedClient
from .ingestion import IngestionPipeline

__all__ = ['FeedClientConfig', 'NewsFeedClient', 'IngestionPipeline']
