"""
HTTP client for downloading JSON documents, with rate limiting and retries.
"""
import logging
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
import requests
from typing import Optional
from utils.rate_limiter import RateLimiter
from utils.retry import retry_with_backoff
import config

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 5  # seconds


def parse_retry_after(value: Optional[str], default: float = DEFAULT_RETRY_AFTER) -> float:
    """
    Seconds to wait according to a Retry-After header.

    Accepts both delay-seconds and HTTP-date forms; anything unreadable
    falls back to the default.
    """
    if not value:
        return default
    value = value.strip()
    if value.isdigit():
        return float(value)
    try:
        retry_at = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        logger.debug(f"Unreadable Retry-After header: {value!r}")
        return default
    if retry_at.tzinfo is None:
        retry_at = retry_at.replace(tzinfo=timezone.utc)
    return max(0.0, (retry_at - datetime.now(timezone.utc)).total_seconds())


class HttpJsonClient:
    """Fetches raw JSON text from HTTP(S) URLs."""

    def __init__(
        self,
        requests_per_second: int = config.REQUESTS_PER_SECOND,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize HTTP client.

        Args:
            requests_per_second: Rate limit (requests per second)
            session: Session to use instead of a freshly configured one
        """
        self.timeout = (config.CONNECT_TIMEOUT, config.READ_TIMEOUT)
        self.rate_limiter = RateLimiter(requests_per_second, period=1.0)
        self.session = session or self._build_session()

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        session.headers.update({
            'Accept': 'application/json',
            'User-Agent': config.USER_AGENT
        })
        adapter = requests.adapters.HTTPAdapter(
            pool_connections=10,
            pool_maxsize=10,
            max_retries=0  # retries handled by retry_with_backoff
        )
        session.mount('https://', adapter)
        session.mount('http://', adapter)
        return session

    @retry_with_backoff(max_retries=config.MAX_RETRIES, initial_delay=1.0, max_delay=30.0)
    def fetch_text(self, url: str) -> str:
        """
        Download a document and return its body as text.

        Args:
            url: HTTP(S) URL of a JSON document

        Returns:
            Response body

        Raises:
            requests.exceptions.RequestException: On request failure
        """
        self.rate_limiter.wait_if_needed()

        try:
            response = self.session.get(url, timeout=self.timeout)

            if response.status_code == 429:
                retry_after = parse_retry_after(response.headers.get('Retry-After'))
                logger.warning(f"Rate limited by {url}. Waiting {retry_after} seconds...")
                time.sleep(retry_after)
                response = self.session.get(url, timeout=self.timeout)

            response.raise_for_status()
            logger.debug(f"Fetched {len(response.content)} bytes from {url}")
            return response.text

        except requests.exceptions.Timeout as e:
            logger.warning(f"Request timeout for {url}: {str(e)[:100]}")
            raise
        except requests.exceptions.ConnectionError as e:
            logger.warning(f"Connection issue for {url}: {str(e)[:100]}")
            raise
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {e}")
            raise

    def close(self):
        self.session.close()
