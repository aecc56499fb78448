"""HTTP REST handlers for the casino engine"""
import json
import logging
import contextvars
from typing import Any, Callable, Optional

import sentry_sdk
from tornado import web
from tornado.ioloop import IOLoop
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from casino_engine.application.dto.adjust_balance_request import AdjustBalanceRequest
from casino_engine.application.dto.place_bet_request import PlaceBetRequest
from casino_engine.application.ports.rate_limiter_port import RateLimiterPort
from casino_engine.application.use_cases.adjust_balance_use_case import AdjustBalanceUseCase
from casino_engine.application.use_cases.admin_dashboard_use_case import AdminDashboardUseCase
from casino_engine.application.use_cases.open_account_use_case import OpenAccountUseCase
from casino_engine.application.use_cases.place_bet_use_case import PlaceBetUseCase
from casino_engine.application.use_cases.player_stats_use_case import PlayerStatsUseCase
from casino_engine.application.use_cases.reconcile_account_use_case import ReconcileAccountUseCase
from casino_engine.domain.exceptions import CasinoError, MalformedRequest, NotAuthenticated, RateLimited

logger = logging.getLogger(__name__)

MAX_PAGE_SIZE = 100


class HealthHandler(web.RequestHandler):
    """Health check endpoint"""

    def get(self):
        self.write({"status": "ok"})


class MetricsHandler(web.RequestHandler):
    """Prometheus metrics endpoint"""

    def get(self):
        self.set_header('Content-Type', CONTENT_TYPE_LATEST)
        self.write(generate_latest())


class ApiHandler(web.RequestHandler):
    """JSON envelope, caller identity and error mapping shared by the API routes

    The user id is set by the auth gateway in front of this service; the bearer
    token is only forwarded to storage, never verified here.
    """

    def user_id(self) -> str:
        user_id = self.request.headers.get('X-User-Id')
        if not user_id:
            raise NotAuthenticated()
        return user_id

    def bearer_token(self) -> Optional[str]:
        header = self.request.headers.get('Authorization', '')
        if header.startswith('Bearer '):
            return header[len('Bearer '):].strip() or None
        return None

    def json_body(self) -> dict:
        try:
            data = json.loads(self.request.body or b'{}')
        except ValueError:
            raise MalformedRequest()
        if not isinstance(data, dict):
            raise MalformedRequest("Request body must be a JSON object")
        return data

    def int_argument(self, name: str, default: int, maximum: int = MAX_PAGE_SIZE) -> int:
        try:
            value = int(self.get_argument(name, str(default)))
        except ValueError:
            return default
        return max(0, min(value, maximum))

    async def respond(self, operation: Callable[[], Any], status: int = 200) -> None:
        """Run a blocking operation off the IO loop and write its result or error"""
        context = contextvars.copy_context()
        try:
            data = await IOLoop.current().run_in_executor(None, context.run, operation)
        except CasinoError as e:
            self.set_status(e.status_code)
            # Server-side failures answer with a fixed message
            message = e.default_message if e.status_code >= 500 else e.message
            self.write({"success": False, "error": message})
            return
        except Exception as e:
            logger.exception(f"Unhandled error on {self.request.method} {self.request.path}")
            sentry_sdk.capture_exception(e)
            self.set_status(500)
            self.write({"success": False, "error": "Internal server error"})
            return

        self.set_status(status)
        self.write(data)


class PlaceBetHandler(ApiHandler):
    """POST /games/bet"""

    def initialize(self, place_bet_use_case: PlaceBetUseCase, open_account_use_case: OpenAccountUseCase,
                   rate_limiter: RateLimiterPort):
        self.place_bet_use_case = place_bet_use_case
        self.open_account_use_case = open_account_use_case
        self.rate_limiter = rate_limiter

    async def post(self):
        # Continue trace from upstream
        transaction = sentry_sdk.continue_trace({
            "sentry-trace": self.request.headers.get("sentry-trace"),
            "baggage": self.request.headers.get("baggage")
        }, op="game.bet", name="place_bet")

        with sentry_sdk.start_transaction(transaction):
            await self.respond(self._place_bet)

    def _place_bet(self) -> dict:
        user_id = self.user_id()
        sentry_sdk.set_user({"id": user_id})
        if not self.rate_limiter.hit(user_id):
            raise RateLimited("Too many bets, please slow down")

        request = PlaceBetRequest.from_dict(self.json_body(), user_id, self.bearer_token())
        self.open_account_use_case.execute(user_id, self.request.headers.get('X-User-Name', user_id))
        response = self.place_bet_use_case.execute(request)
        return {"success": True, "data": response.to_dict(), "message": response.message}


class BetHistoryHandler(ApiHandler):
    """GET /games/history"""

    def initialize(self, player_stats_use_case: PlayerStatsUseCase):
        self.player_stats_use_case = player_stats_use_case

    async def get(self):
        await self.respond(self._history)

    def _history(self) -> dict:
        bets = self.player_stats_use_case.history(self.user_id(), limit=self.int_argument('limit', 50))
        return {"success": True, "data": [bet.to_public_dict() for bet in bets]}


class PlayerStatsHandler(ApiHandler):
    """GET /games/stats"""

    def initialize(self, player_stats_use_case: PlayerStatsUseCase):
        self.player_stats_use_case = player_stats_use_case

    async def get(self):
        await self.respond(self._stats)

    def _stats(self) -> dict:
        stats = self.player_stats_use_case.stats(self.user_id(), self.get_argument('game_type', None))
        return {"success": True, "data": stats.to_dict()}


class AdminHandler(ApiHandler):
    """Base for routes restricted to admin accounts"""

    def initialize(self, admin_dashboard_use_case: AdminDashboardUseCase):
        self.admin_dashboard_use_case = admin_dashboard_use_case

    def admin_id(self) -> str:
        admin = self.admin_dashboard_use_case.authorize(self.user_id())
        sentry_sdk.set_user({"id": admin.id, "role": admin.role})
        return admin.id


class AdjustBalanceHandler(AdminHandler):
    """POST /admin/adjust-balance"""

    def initialize(self, admin_dashboard_use_case: AdminDashboardUseCase,
                   adjust_balance_use_case: AdjustBalanceUseCase):
        super().initialize(admin_dashboard_use_case)
        self.adjust_balance_use_case = adjust_balance_use_case

    async def post(self):
        await self.respond(self._adjust)

    def _adjust(self) -> dict:
        request = AdjustBalanceRequest.from_dict(self.json_body(), self.admin_id())
        response = self.adjust_balance_use_case.execute(request)
        return {"success": True, "data": response.to_dict(), "message": "Balance adjusted successfully"}


class UsersHandler(AdminHandler):
    """GET /admin/users"""

    async def get(self):
        await self.respond(self._users)

    def _users(self) -> dict:
        self.admin_id()
        users = self.admin_dashboard_use_case.list_users(
            self.int_argument('limit', 100), self.int_argument('offset', 0, maximum=10 ** 9)
        )
        return {"success": True, "data": users}


class UserDetailsHandler(AdminHandler):
    """GET /admin/users/<id>"""

    async def get(self, user_id: str):
        await self.respond(lambda: self._details(user_id))

    def _details(self, user_id: str) -> dict:
        self.admin_id()
        return {"success": True, "data": self.admin_dashboard_use_case.user_details(user_id)}


class ReconcileHandler(AdminHandler):
    """GET /admin/users/<id>/reconcile"""

    def initialize(self, admin_dashboard_use_case: AdminDashboardUseCase,
                   reconcile_use_case: ReconcileAccountUseCase):
        super().initialize(admin_dashboard_use_case)
        self.reconcile_use_case = reconcile_use_case

    async def get(self, user_id: str):
        await self.respond(lambda: self._reconcile(user_id))

    def _reconcile(self, user_id: str) -> dict:
        self.admin_id()
        return {"success": True, "data": self.reconcile_use_case.execute(user_id)}


class TransactionsHandler(AdminHandler):
    """GET /admin/transactions"""

    async def get(self):
        await self.respond(self._transactions)

    def _transactions(self) -> dict:
        self.admin_id()
        transactions = self.admin_dashboard_use_case.list_transactions(
            self.int_argument('limit', 100), self.int_argument('offset', 0, maximum=10 ** 9)
        )
        return {"success": True, "data": transactions}


class DashboardHandler(AdminHandler):
    """GET /admin/dashboard"""

    async def get(self):
        await self.respond(self._dashboard)

    def _dashboard(self) -> dict:
        self.admin_id()
        return {"success": True, "data": self.admin_dashboard_use_case.dashboard()}
