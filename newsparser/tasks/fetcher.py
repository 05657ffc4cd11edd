import logging
from dataclasses import dataclass
from typing import Optional

import requests
from newsapi import NewsApiClient
from newsapi.newsapi_exception import NewsAPIException
from pydantic import ValidationError

from ..errors import TransportError, UpstreamUnavailable
from ..models.feed import FeedResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FeedClientConfig:
    api_key: str
    country: str = "us"
    page_size: Optional[int] = None

    @classmethod
    def from_app_config(cls, config):
        return cls(
            api_key=config['NEWS_API_KEY'],
            country=config.get('NEWS_API_COUNTRY', 'us'),
            page_size=config.get('NEWS_API_PAGE_SIZE'),
        )


def _raise_for_status(response, *args, **kwargs):
    response.raise_for_status()


def build_session() -> requests.Session:
    """Session that fails on a non-2xx status before the body is decoded.

    Gateways in front of NewsAPI can answer 502/503 with an HTML page, which
    newsapi-python would otherwise try to parse as JSON.
    """
    session = requests.Session()
    session.hooks['response'].append(_raise_for_status)
    return session


class NewsFeedClient:
    """Reads top headlines from NewsAPI.org.

    One blocking request per call and no retries; the underlying
    newsapi-python client applies its own 30 second timeout.
    """

    def __init__(self, config: FeedClientConfig, newsapi_client=None):
        self.config = config
        self.newsapi = newsapi_client or NewsApiClient(api_key=config.api_key, session=build_session())

    def fetch_top_headlines(self) -> FeedResult:
        params = {"country": self.config.country}
        if self.config.page_size:
            params["page_size"] = self.config.page_size

        try:
            response = self.newsapi.get_top_headlines(**params)
        except NewsAPIException as e:
            logger.error(f"News API Error (Top Headlines): {e}")
            raise UpstreamUnavailable(str(e)) from e
        except requests.exceptions.HTTPError as e:
            logger.error(f"News API returned status {e.response.status_code if e.response is not None else 'unknown'}")
            raise UpstreamUnavailable(str(e)) from e
        except (requests.exceptions.RequestException, ValueError) as e:
            logger.error(f"Error fetching top headlines: {e}")
            raise TransportError(str(e)) from e

        if not isinstance(response, dict):
            raise TransportError(f"Unexpected response body: {type(response).__name__}")
        if response.get("status") != "ok":
            message = response.get('message', 'Unknown error')
            logger.error(f"News API Error (Top Headlines): {message}")
            raise UpstreamUnavailable(message)

        try:
            result = FeedResult.model_validate(response)
        except ValidationError as e:
            logger.error(f"Malformed top headlines response: {e}")
            raise TransportError("Malformed top headlines response") from e

        logger.info(f"Fetched {len(result.articles or [])} top headlines for country: {self.config.country}")
        return result
