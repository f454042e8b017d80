"""HTTP client and paginated export fetcher for the Readwise API."""

import logging
from typing import Any, Callable
from urllib.parse import urlencode

import requests

from ..errors import MalformedResponseError, ReadwiseAPIError
from ..models.export import ExportPage
from .auth import CredentialResolver
from .router import RecordRouter

logger = logging.getLogger(__name__)


class ReadwiseClient:
    """HTTP client for the Readwise REST API with token authentication."""

    API_VERSION = "v2"

    def __init__(
        self,
        base_url: str = "https://readwise.io",
        timeout: float | None = 30,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize client.

        Args:
            base_url: Readwise base URL
            timeout: Per-request timeout in seconds (None waits forever)
            session: requests session (a new one if not provided)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def export_path(self) -> str:
        return f"/api/{self.API_VERSION}/export/"

    def build_url(self, path: str, query_params: dict[str, str] | None = None) -> str:
        """Build full URL from base URL, path, and query params."""
        url = f"{self.base_url}{path}"
        if query_params:
            url += "?" + urlencode(query_params)
        return url

    def build_export_url(self, cursor: str | None = None, updated_after: str | None = None) -> str:
        """Build the export URL for one page.

        A cursor takes precedence: ``updatedAfter`` only applies to the first
        request and is never combined with ``pageCursor``.
        """
        if cursor:
            return self.build_url(self.export_path, {"pageCursor": cursor})
        if updated_after:
            return self.build_url(self.export_path, {"updatedAfter": updated_after})
        return self.build_url(self.export_path)

    def _request(self, url: str, token: str) -> requests.Response:
        """Make an authenticated GET request.

        Raises:
            ReadwiseAPIError: On non-2xx status or transport failure
        """
        headers = {
            "Authorization": f"Token {token}",
            "Accept": "application/json",
        }

        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise ReadwiseAPIError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            error_msg = f"API error {response.status_code}: {response.text[:500]}"
            raise ReadwiseAPIError(error_msg, response.status_code, response)

        return response

    def get_json(self, url: str, token: str) -> Any:
        """GET a URL and decode its JSON body."""
        response = self._request(url, token)

        # Handle empty responses
        if not response.content:
            return {}

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError(f"Response from {url} is not JSON: {e}") from e

    def export_page(
        self,
        token: str,
        cursor: str | None = None,
        updated_after: str | None = None,
    ) -> ExportPage:
        """Fetch and parse one page of the export endpoint."""
        url = self.build_export_url(cursor=cursor, updated_after=updated_after)
        logger.debug("GET %s", url)
        data = self.get_json(url, token)

        if isinstance(data, dict) and "results" not in data:
            logger.warning("Export page has no 'results' field; treating it as empty")
        return ExportPage.from_dict(data)

    def verify_token(self, token: str) -> bool:
        """Check a token against the auth endpoint (204 means valid).

        Raises:
            ReadwiseAPIError: On connection or auth failure
        """
        url = self.build_url(f"/api/{self.API_VERSION}/auth/")
        response = self._request(url, token)
        return response.status_code == 204


class Exporter:
    """Follows export cursors page by page and routes each page's results."""

    def __init__(
        self,
        client: ReadwiseClient,
        resolver: CredentialResolver,
        router: RecordRouter,
    ) -> None:
        self.client = client
        self.resolver = resolver
        self.router = router
        self.pages = 0
        self.documents = 0

    def export(
        self,
        on_complete: Callable[[], None],
        cursor: str | None = None,
        updated_after: str | None = None,
    ) -> bool:
        """Export every page, then call ``on_complete`` once.

        The token is resolved once and reused for all pages. Each page is
        routed as soon as it arrives. If a request fails or a page is
        malformed, the error is logged and the chain stops without calling
        ``on_complete``.

        Args:
            on_complete: Called with no arguments after the last page
            cursor: Cursor to start from
            updated_after: ISO-8601 timestamp, only used when no cursor is given

        Returns:
            True if every page was processed and ``on_complete`` ran

        Raises:
            AuthError: If no token can be resolved (before any request)
        """
        token = self.resolver.get_token()
        self.pages = 0
        self.documents = 0

        while True:
            try:
                page = self.client.export_page(token, cursor=cursor, updated_after=updated_after)
            except ReadwiseAPIError as e:
                if e.unauthorized:
                    logger.error("Readwise export failed: Unauthorized (check your API token)")
                else:
                    logger.error("Readwise export failed: %s", e)
                return False
            except MalformedResponseError as e:
                logger.error("Readwise export returned an unexpected response: %s", e)
                return False

            self.pages += 1
            self.router.process_results(page.results)
            self.documents += len(page.results)
            logger.debug(
                "Processed page %d (%d documents)", self.pages, len(page.results)
            )

            if not page.has_more:
                break
            cursor = page.next_cursor

        on_complete()
        return True
