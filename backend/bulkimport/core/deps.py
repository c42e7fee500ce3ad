from dataclasses import dataclass

from fastapi import Request

from bulkimport.core.config import settings


@dataclass(frozen=True)
class TenantContext:
    """Caller identity as asserted by the authentication proxy."""

    org_id: str | None
    user_id: str | None


def get_tenant_context(request: Request) -> TenantContext:
    """Read tenant and user from the trusted proxy headers.

    Never reads the body or query string. A missing organization is passed
    through as None so the import layer can reject it with its own error.
    """
    org_id = (request.headers.get(settings.ORG_ID_HEADER) or "").strip() or None
    user_id = (request.headers.get(settings.USER_ID_HEADER) or "").strip() or None
    return TenantContext(org_id=org_id, user_id=user_id)
