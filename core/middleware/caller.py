"""
Caller identity middleware.

The gateway in front of the registry authenticates callers and forwards
their identity in a trusted header. This middleware reads it and makes
it available throughout the request lifecycle.
"""

import logging
from typing import Callable

from django.conf import settings
from django.http import HttpRequest, HttpResponse, JsonResponse

from core.domain.value_objects import Identity

logger = logging.getLogger(__name__)

DEFAULT_CALLER_IDENTITY_HEADER = "X-Caller-Identity"
REGISTRY_API_PREFIX = "/api/v1/registry/"
SAFE_METHODS = ("GET", "HEAD", "OPTIONS")

class CallerIdentityMiddleware:
    """
    Middleware to resolve the caller identity.

    This middleware:
    1. Reads the identity header named by settings.CALLER_IDENTITY_HEADER
    2. Rejects malformed identities with 400
    3. Rejects mutating registry requests without an identity with 401
    4. Sets request.caller_identity
    """

    def __init__(self, get_response: Callable):
        """Initialize middleware."""
        self.get_response = get_response
        self.header = getattr(settings, "CALLER_IDENTITY_HEADER", DEFAULT_CALLER_IDENTITY_HEADER)

    def __call__(self, request: HttpRequest) -> HttpResponse:
        """
        Process request and set the caller identity.

        Args:
            request: HTTP request

        Returns:
            HTTP response
        """
        raw_identity = request.headers.get(self.header)

        caller = None
        if raw_identity is not None:
            try:
                caller = str(Identity(raw_identity))
            except ValueError as e:
                logger.warning("Rejected caller identity: %s", e)
                return JsonResponse(
                    {"error": {"code": "INVALID_CALLER_IDENTITY", "message": str(e)}},
                    status=400,
                )

        if (
            caller is None
            and request.path.startswith(REGISTRY_API_PREFIX)
            and request.method not in SAFE_METHODS
        ):
            return JsonResponse(
                {
                    "error": {
                        "code": "MISSING_CALLER_IDENTITY",
                        "message": f"Missing caller identity. Provide {self.header} header.",
                    }
                },
                status=401,
            )

        request.caller_identity = caller  # type: ignore
        return self.get_response(request)
