"""
Security wrapper for API endpoints.

``with_security`` turns a handler into a FastAPI endpoint that runs the
same pipeline for every request, in this order:

    1. method check          -> 405
    2. authentication        -> 401 (when required)
    3. rate limiting         -> 429 with Retry-After
    4. schema validation     -> 400 with the full error list
    5. handler
    6. security and rate-limit headers on whatever response is returned

A request rejected by stages 1-4 never reaches the handler.

Usage:
    @router.api_route("/generate", methods=ROUTE_METHODS)
    @with_security(limit_class=LimitClass.GENERATION, schema=GENERATION_SCHEMA)
    async def generate(
        ctx: SecurityContext,
        orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
    ):
        ...

Handler parameters after ``ctx`` are FastAPI dependencies; they are moved
onto the endpoint's signature, so ``app.dependency_overrides`` applies.
"""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Mapping, Optional

from fastapi import Depends, Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from starlette.responses import Response

from api.dependencies import get_auth_service, get_rate_limiter
from api.errors import error_response, internal_error_response
from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from modules.security.exceptions import RateLimitExceededError, RequestValidationError
from modules.security.models import LimitClass
from modules.security.rate_limiter import RateLimiter, client_id_for
from modules.security.validation import Schema, validate_request
from shared.exceptions import AppError
from shared.models import AuthenticatedUser

from .auth import authenticate_request

logger = logging.getLogger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "X-XSS-Protection": "1; mode=block",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
}

BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})

# Register secured routes for every method so the pipeline, not the router,
# answers disallowed methods (with security headers attached)
ROUTE_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@dataclass
class SecurityContext:
    """What the pipeline learned about a request before the handler runs."""

    request: Request
    user: Optional[AuthenticatedUser]
    data: dict[str, Any] = field(default_factory=dict)
    rate_limit_headers: dict[str, str] = field(default_factory=dict)
    client_id: str = ""

    @property
    def method(self) -> str:
        return self.request.method

    def require_user(self) -> AuthenticatedUser:
        """The authenticated user; only valid on ``require_auth`` endpoints."""
        if self.user is None:
            raise MissingTokenError()
        return self.user


Handler = Callable[..., Awaitable[Any]]


async def _read_payload(request: Request) -> Any:
    if request.method in BODY_METHODS:
        try:
            return await request.json()
        except ValueError:
            # Covers empty bodies, malformed JSON and bad encodings
            return None
    return dict(request.query_params)


def _to_response(result: Any) -> Response:
    if isinstance(result, Response):
        return result
    return JSONResponse(jsonable_encoder(result))


def _finish(response: Response, rate_limit_headers: dict[str, str]) -> Response:
    for name, value in {**SECURITY_HEADERS, **rate_limit_headers}.items():
        response.headers[name] = value
    return response


def with_security(
    require_auth: bool = True,
    limit_class: Optional[str] = LimitClass.PUBLIC,
    schema: Optional[Schema] = None,
    allowed_methods: Iterable[str] = ("POST",),
    method_schemas: Optional[Mapping[str, Schema]] = None,
) -> Callable[[Handler], Callable[..., Awaitable[Response]]]:
    """
    Wrap a handler in the request-security pipeline.

    Args:
        require_auth: Reject requests without a valid bearer token. When
            False, a token is still resolved if present so the caller is
            rate limited by user rather than by IP.
        limit_class: Rate-limit class; None or an unknown class is unlimited
        schema: Request schema; the JSON body is validated for
            POST/PUT/PATCH and the query string for other methods
        allowed_methods: HTTP methods the handler accepts
        method_schemas: Per-method schemas for handlers serving several
            methods; takes precedence over ``schema``

    The handler receives a SecurityContext as its first argument. A dict
    or model return value becomes a 200 JSON response; a Response is
    passed through.
    """
    methods = tuple(method.upper() for method in allowed_methods)
    limit_name = str(getattr(limit_class, "value", limit_class)) if limit_class else ""
    schemas = {method.upper(): rules for method, rules in (method_schemas or {}).items()}

    def decorator(handler: Handler) -> Callable[..., Awaitable[Response]]:
        handler_params = list(inspect.signature(handler).parameters.values())[1:]

        async def endpoint(
            request: Request,
            _security_auth: IAuthService,
            _security_limiter: RateLimiter,
            **dependencies: Any,
        ) -> Response:
            rate_limit_headers: dict[str, str] = {}

            try:
                if request.method not in methods:
                    return _finish(
                        JSONResponse(
                            {"error": f"Method {request.method} not allowed"},
                            status_code=405,
                            headers={"Allow": ", ".join(methods)},
                        ),
                        rate_limit_headers,
                    )

                user = await authenticate_request(request, _security_auth)
                if require_auth and user is None:
                    raise MissingTokenError()

                client_id = client_id_for(request.headers, user.id if user else None)
                result = _security_limiter.check(client_id, limit_name)
                rate_limit_headers = _security_limiter.headers(client_id, limit_name)
                if not result.allowed:
                    raise RateLimitExceededError(result.retry_after, result.reset_at or 0.0)

                data: dict[str, Any] = {}
                rules = schemas.get(request.method, schema)
                if rules is not None:
                    validation = validate_request(await _read_payload(request), rules)
                    if not validation.valid:
                        raise RequestValidationError(validation.errors)
                    data = validation.data or {}

                ctx = SecurityContext(
                    request=request,
                    user=user,
                    data=data,
                    rate_limit_headers=rate_limit_headers,
                    client_id=client_id,
                )
                response = _to_response(await handler(ctx, **dependencies))
            except AppError as exc:
                response = error_response(exc)
            except Exception:
                logger.exception(
                    "Unhandled error in %s %s", request.method, request.url.path,
                )
                response = internal_error_response()

            return _finish(response, rate_limit_headers)

        keyword = inspect.Parameter.KEYWORD_ONLY
        endpoint.__signature__ = inspect.Signature(
            [
                inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request),
                inspect.Parameter(
                    "_security_auth", keyword,
                    default=Depends(get_auth_service), annotation=IAuthService,
                ),
                inspect.Parameter(
                    "_security_limiter", keyword,
                    default=Depends(get_rate_limiter), annotation=RateLimiter,
                ),
                *(param.replace(kind=keyword) for param in handler_params),
            ],
            return_annotation=Response,
        )
        endpoint.__name__ = handler.__name__
        endpoint.__qualname__ = handler.__qualname__
        endpoint.__doc__ = handler.__doc__
        endpoint.__module__ = handler.__module__
        return endpoint

    return decorator
