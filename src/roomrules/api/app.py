"""
Flask application factory for roomrules.
"""
import time
from dataclasses import dataclass
from typing import Callable, Optional

from flask import Flask
from flask_cors import CORS

from ..config import Config
from ..logger import get_logger
from ..services.catalog import CatalogService
from ..services.property_rules import PropertyRulesService
from ..services.rules import SizingRulesService
from ..store.client import SupabaseClient
from .routes import api_bp

logger = get_logger(__name__)


@dataclass
class Services:
    """Service instances shared by all requests of one app."""
    property_rules: PropertyRulesService
    sizing_rules: SizingRulesService
    catalog: CatalogService

    @classmethod
    def build(
        cls,
        client: SupabaseClient,
        clock: Callable[[], float] = time.monotonic,
    ) -> "Services":
        return cls(
            property_rules=PropertyRulesService(client, clock=clock),
            sizing_rules=SizingRulesService(client, clock=clock),
            catalog=CatalogService(client, clock=clock),
        )


def create_app(client: Optional[SupabaseClient] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        client: Store client; built from Config when omitted

    Returns:
        Configured Flask app instance
    """
    app = Flask(__name__)

    app.config['SECRET_KEY'] = Config.SECRET_KEY
    app.config['ENV'] = Config.FLASK_ENV

    cors_origins = Config.get_cors_origins()
    if cors_origins == ["*"]:
        CORS(app)
    else:
        CORS(app, origins=cors_origins)

    app.extensions['roomrules'] = Services.build(client or SupabaseClient.from_config())

    app.register_blueprint(api_bp)

    @app.route('/health')
    def health():
        """Health check endpoint."""
        return {'status': 'healthy', 'version': '1.0.0'}

    logger.info("Flask app created")
    logger.info(f"Configuration: {Config.get_summary()}")

    errors = Config.validate()
    if errors:
        logger.warning(f"Configuration warnings: {errors}")

    return app
