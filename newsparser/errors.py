class NewsParserError(Exception):
    """Base class for errors raised by the news parser."""


class FeedError(NewsParserError):
    """The headlines feed could not be fetched."""


class TransportError(FeedError):
    """Connection failure, timeout or an unreadable response body."""


class UpstreamUnavailable(FeedError):
    """The headlines API answered with a non-success status."""


class IngestionFailed(NewsParserError):
    """An ingestion run aborted before anything was persisted."""


class InvalidPeriod(NewsParserError):
    def __init__(self, period):
        super().__init__(f"Invalid time period: {period!r}")
        self.period = period


class NotFound(NewsParserError):
    def __init__(self, article_id):
        super().__init__(f"Article {article_id} not found")
        self.article_id = article_id


class Conflict(NewsParserError):
    def __init__(self, headline, existing_id=None):
        super().__init__(f"An article with headline {headline!r} already exists")
        self.headline = headline
        self.existing_id = existing_id
