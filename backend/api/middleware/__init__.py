"""Request middleware: authentication and the security wrapper."""

from .auth import authenticate_request, extract_bearer_token
from .security import ROUTE_METHODS, SECURITY_HEADERS, SecurityContext, with_security

__all__ = [
    "authenticate_request",
    "extract_bearer_token",
    "ROUTE_METHODS",
    "SECURITY_HEADERS",
    "SecurityContext",
    "with_security",
]
