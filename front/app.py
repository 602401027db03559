"""
Front: Jira Service Desk dashboard (login, request list, detail, delete).
Serve standalone with: uvicorn front.app:create_app --factory
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from fastapi import Depends, FastAPI, Form, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from front.constants import (
    DELETE_DONE_MESSAGE,
    LOGIN_FAILED_MESSAGE,
    LOGIN_REQUIRED_MESSAGE,
    status_label,
    status_tone,
)
from jsd_dashboard.config.settings import Settings, load_settings
from jsd_dashboard.sd.data_source import ServiceDeskSource, build_source
from jsd_dashboard.sd.errors import (
    AuthError,
    ConnectionFailedError,
    InvalidCredentialsError,
    InvalidRequestIdError,
    RequestForbiddenError,
    RequestNotFoundError,
    SDError,
)
from jsd_dashboard.sd.models import UserProfile
from jsd_dashboard.services import dashboard_service as ds
from jsd_dashboard.services.session_store import SESSION_COOKIE_NAME, SessionContext, SessionStore

TEMPLATES_DIR = Path(__file__).parent / "templates"


class LoginRequired(Exception):
    pass


class SessionMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, store: SessionStore) -> None:
        super().__init__(app)
        self._store = store

    async def dispatch(self, request, call_next):
        session = self._store.open(request.cookies.get(SESSION_COOKIE_NAME))
        request.state.session = session
        response = await call_next(request)
        if session.dirty:
            session.apply(response)
        return response


def _delete_error_status(e: SDError) -> int:
    if isinstance(e, InvalidRequestIdError):
        return 400
    if isinstance(e, RequestNotFoundError):
        return 404
    if isinstance(e, RequestForbiddenError):
        return 403
    return 502


def create_app(settings: Optional[Settings] = None, source: Optional[ServiceDeskSource] = None) -> FastAPI:
    settings = settings or load_settings()
    source = source or build_source(settings)
    store = SessionStore(secret=settings.session_secret, secure=settings.is_production)

    app = FastAPI(title="Jira Service Desk Dashboard")
    app.add_middleware(SessionMiddleware, store=store)
    app.state.settings = settings
    app.state.source = source

    templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
    templates.env.globals.update(
        request_name=ds.request_name,
        initials=ds.initials,
        format_epoch=ds.format_epoch,
        format_epoch_date=ds.format_epoch_date,
        status_tone=status_tone,
        status_label=status_label,
    )

    def _session(request: Request) -> SessionContext:
        return request.state.session

    def _require_user(request: Request) -> Tuple[SessionContext, UserProfile]:
        session = _session(request)
        token = session.current()
        if not token:
            raise LoginRequired()
        user = source.current_user(token)
        if user is None:
            logger.info("Stored session no longer valid; logging out")
            session.clear()
            raise LoginRequired()
        return session, user

    def _render(request: Request, name: str, ctx: Dict[str, Any], status_code: int = 200):
        ctx.setdefault("is_mock", source.is_mock)
        return templates.TemplateResponse(request, name, ctx, status_code=status_code)

    def _render_login(request: Request, error: str = "", status_code: int = 200, username: str = ""):
        return _render(request, "login.html", {"error": error, "username": username}, status_code=status_code)

    def _render_requests(
        request: Request,
        user: UserProfile,
        listing: ds.RequestListing,
        notice: str = "",
        error: str = "",
        status_code: int = 200,
    ):
        return _render(
            request,
            "requests.html",
            {
                "user": user,
                "requests": listing.requests,
                "error": error or listing.error or "",
                "notice": notice,
            },
            status_code=status_code,
        )

    @app.exception_handler(LoginRequired)
    async def _login_required(request: Request, exc: LoginRequired):
        return RedirectResponse(url="/", status_code=303)

    @app.get("/healthz")
    def healthz():
        return JSONResponse({"ok": True, "mock": source.is_mock})

    @app.get("/", response_class=HTMLResponse)
    def index(request: Request):
        session = _session(request)
        token = session.current()
        if token:
            if source.current_user(token) is not None:
                return RedirectResponse(url="/dashboard", status_code=303)
            session.clear()
        return _render_login(request)

    @app.post("/login")
    def login(
        request: Request,
        username: str = Form(""),
        password: str = Form(""),
    ):
        username = username.strip()
        if not username or not password:
            return _render_login(request, LOGIN_REQUIRED_MESSAGE, status_code=400, username=username)

        try:
            result = source.authenticate(username, password)
        except InvalidCredentialsError as e:
            return _render_login(request, str(e), status_code=401, username=username)
        except ConnectionFailedError as e:
            return _render_login(request, str(e), status_code=503, username=username)
        except AuthError as e:
            logger.error("Login error: {}", e)
            return _render_login(request, LOGIN_FAILED_MESSAGE, status_code=500, username=username)

        _session(request).persist(result.token)
        logger.info("User {} logged in", result.user.key)
        return RedirectResponse(url="/dashboard", status_code=303)

    @app.post("/logout")
    def logout(request: Request):
        _session(request).clear()
        return RedirectResponse(url="/", status_code=303)

    @app.get("/dashboard", response_class=HTMLResponse)
    def dashboard(request: Request, auth: Tuple[SessionContext, UserProfile] = Depends(_require_user)):
        session, user = auth
        listing = ds.load_requests(source, session.current())
        return _render(
            request,
            "dashboard.html",
            {
                "user": user,
                "listing": listing,
                "requests": listing.requests,
                "stats": ds.compute_stats(listing.requests),
                "recent": ds.recent_requests(listing.requests),
                "error": listing.error or "",
            },
        )

    @app.get("/dashboard/requests", response_class=HTMLResponse)
    def requests_page(
        request: Request,
        deleted: str = "",
        auth: Tuple[SessionContext, UserProfile] = Depends(_require_user),
    ):
        session, user = auth
        listing = ds.load_requests(source, session.current())
        notice = DELETE_DONE_MESSAGE.format(deleted) if deleted else ""
        return _render_requests(request, user, listing, notice=notice)

    @app.get("/dashboard/requests/{issue_key}", response_class=HTMLResponse)
    def request_detail(
        request: Request,
        issue_key: str,
        auth: Tuple[SessionContext, UserProfile] = Depends(_require_user),
    ):
        session, user = auth
        listing = ds.load_requests(source, session.current())
        item = ds.find_request(listing.requests, issue_key)
        if item is None:
            return _render_requests(
                request,
                user,
                listing,
                error=listing.error or f"Request {issue_key} not found",
                status_code=404,
            )
        return _render(request, "request_detail.html", {"user": user, "item": item})

    @app.post("/dashboard/requests/{issue_key}/delete")
    def request_delete(
        request: Request,
        issue_key: str,
        auth: Tuple[SessionContext, UserProfile] = Depends(_require_user),
    ):
        session, user = auth
        token = session.current()
        try:
            source.delete_request(token, issue_key)
        except SDError as e:
            logger.error("Error deleting request {}: {}", issue_key, e)
            listing = ds.load_requests(source, token)
            return _render_requests(request, user, listing, error=str(e), status_code=_delete_error_status(e))
        return RedirectResponse(url=f"/dashboard/requests?deleted={issue_key}", status_code=303)

    return app
