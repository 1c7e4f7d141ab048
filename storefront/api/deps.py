# storefront/api/deps.py
"""
Identity gate and collaborator providers.

Every provider is a FastAPI dependency so tests can swap it through
`app.dependency_overrides`. FastAPI caches dependencies per request, the
token is therefore exchanged at most once per request.
"""
from fastapi import Depends, Header
from requests import RequestException

from storefront.domain.errors import Forbidden, Unauthenticated, UpstreamFailure
from storefront.services.identity_client import IdentityClient
from storefront.services.image_store import ImageStore
from storefront.services.notification_service import NotificationService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def get_identity_client() -> IdentityClient:
    return IdentityClient()


def get_image_store() -> ImageStore:
    return ImageStore()


def get_notification_service() -> NotificationService:
    return NotificationService()


def extract_bearer(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    return token.strip() or None


def get_current_user_id(
    authorization: str | None = Header(default=None),
    identity: IdentityClient = Depends(get_identity_client),
) -> str:
    token = extract_bearer(authorization)
    if not token:
        raise Unauthenticated("Missing Authorization header")

    user_id = identity.verify_token(token)
    if not user_id:
        raise Unauthenticated("Authentication failed")
    return user_id


def require_admin(
    user_id: str = Depends(get_current_user_id),
    identity: IdentityClient = Depends(get_identity_client),
) -> str:
    try:
        allowed = identity.is_admin(user_id)
    except RequestException as e:
        logger.error(f"Admin check failed for user {user_id}: {e}")
        raise UpstreamFailure("Authorization service unavailable")

    if not allowed:
        logger.warning(f"User {user_id} denied access to admin route")
        raise Forbidden("Admin privileges required")
    return user_id
