# storefront/services/identity_client.py
import requests
from requests import RequestException

from storefront.utils.retry import http_retry
from storefront.utils.settings import AUTH_SERVICE_URL, AUTH_API_KEY, HTTP_TIMEOUT_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class IdentityClient:
    """
    Client for the external identity provider.
    - verify_token: bearer token -> user id (None when rejected)
    - is_admin: authorization predicate for back-office routes
    """

    def __init__(self, base_url: str | None = None, api_key: str | None = None, timeout: int = HTTP_TIMEOUT_SECONDS):
        self.base_url = (base_url or AUTH_SERVICE_URL).rstrip("/")
        self.api_key = AUTH_API_KEY if api_key is None else api_key
        self.timeout = timeout

    def _headers(self, token: str | None = None) -> dict:
        headers = {"apikey": self.api_key}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @http_retry()
    def _fetch_user(self, token: str) -> requests.Response:
        url = f"{self.base_url}/user"
        logger.info(f"IdentityClient GET {url}")
        return requests.get(url, headers=self._headers(token), timeout=self.timeout)

    def verify_token(self, token: str) -> str | None:
        try:
            resp = self._fetch_user(token)
        except RequestException as e:
            logger.warning(f"Token verification failed: {e}")
            return None

        if resp.status_code != 200:
            logger.warning(f"Identity provider rejected token, status {resp.status_code}")
            return None

        try:
            user = resp.json()
        except ValueError:
            logger.warning("Identity provider returned a non-JSON body")
            return None

        user_id = user.get("id") if isinstance(user, dict) else None
        return str(user_id) if user_id else None

    @http_retry()
    def is_admin(self, user_id: str) -> bool:
        url = f"{self.base_url}/rpc/is_admin"
        logger.info(f"IdentityClient POST {url} for user {user_id}")
        resp = requests.post(
            url,
            json={"user_id": user_id},
            headers=self._headers(),
            timeout=self.timeout,
        )
        resp.raise_for_status()
        return resp.json() is True
