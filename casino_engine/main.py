"""
Casino Engine - Clean Architecture Entry Point

Serves the wagering API over HTTP. Configuration comes from environment
variables; see config/container.py for storage and messaging settings.
"""
import os
import logging

import sentry_sdk
from tornado import web, ioloop
from sentry_sdk.integrations.tornado import TornadoIntegration

from casino_engine import __version__
from casino_engine.config.container import Container
from casino_engine.presentation.http.handlers import (
    HealthHandler,
    MetricsHandler,
    PlaceBetHandler,
    BetHistoryHandler,
    PlayerStatsHandler,
    AdjustBalanceHandler,
    UsersHandler,
    UserDetailsHandler,
    ReconcileHandler,
    TransactionsHandler,
    DashboardHandler
)

logger = logging.getLogger(__name__)

# Configuration
version = os.environ.get('APP_VERSION', __version__)
sentry_debug = os.environ.get('SENTRY_DEBUG', 'false').lower() == 'true'
sentry_profiles_rate = float(os.environ.get('SENTRY_PROFILES_SAMPLE_RATE', '0'))
sentry_traces_rate = float(os.environ.get('SENTRY_TRACES_SAMPLE_RATE', '1.0'))
sentry_environment = os.environ.get('SENTRY_ENVIRONMENT', 'development')


def init_sentry():
    sentry_sdk.init(
        dsn=os.environ.get('SENTRY_DSN'),
        integrations=[TornadoIntegration()],
        traces_sample_rate=sentry_traces_rate,
        environment=sentry_environment,
        profiles_sample_rate=sentry_profiles_rate,
        debug=sentry_debug,
        release=f"casino-engine@{version}",
        auto_session_tracking=True
    )


def make_routes(container: Container) -> list:
    """Route table; handlers receive their use cases from the container"""
    admin = {"admin_dashboard_use_case": container.get_admin_dashboard_use_case()}
    player_stats = {"player_stats_use_case": container.get_player_stats_use_case()}

    return [
        (r"/health", HealthHandler),
        (r"/metrics", MetricsHandler),
        (r"/games/bet", PlaceBetHandler, {
            "place_bet_use_case": container.get_place_bet_use_case(),
            "open_account_use_case": container.get_open_account_use_case(),
            "rate_limiter": container.rate_limiter
        }),
        (r"/games/history", BetHistoryHandler, player_stats),
        (r"/games/stats", PlayerStatsHandler, player_stats),
        (r"/admin/adjust-balance", AdjustBalanceHandler, dict(
            admin, adjust_balance_use_case=container.get_adjust_balance_use_case()
        )),
        (r"/admin/users", UsersHandler, admin),
        (r"/admin/users/([^/]+)", UserDetailsHandler, admin),
        (r"/admin/users/([^/]+)/reconcile", ReconcileHandler, dict(
            admin, reconcile_use_case=container.get_reconcile_use_case()
        )),
        (r"/admin/transactions", TransactionsHandler, admin),
        (r"/admin/dashboard", DashboardHandler, admin),
    ]


def make_app():
    """Create Tornado application with Clean Architecture handlers"""
    return web.Application(make_routes(Container.get_instance()))


def main():
    logging.basicConfig(level=logging.INFO)
    init_sentry()

    app = make_app()
    port = int(os.environ.get('PORT', 8082))
    app.listen(port)

    logger.info(f"Casino Engine {version} started on :{port}")
    ioloop.IOLoop.current().start()


if __name__ == "__main__":
    main()
