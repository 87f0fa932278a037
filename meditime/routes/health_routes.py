# meditime/routes/health_routes.py
from datetime import datetime, timezone

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from meditime.extensions import db
from meditime.helpers import api_response

health_bp = Blueprint("health", __name__, url_prefix="/api/v1")


@health_bp.route("/health")
def health_check():
    config = current_app.config
    try:
        db.session.execute(text("SELECT 1"))
        database = "connected"
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Database health check failed: {e}")
        database = "unreachable"

    data = {
        "status": "ok" if database == "connected" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": database,
        "env": {
            "DATABASE_URL": bool(config.get("SQLALCHEMY_DATABASE_URI")),
            "JWT_SECRET_KEY": config.get("JWT_SECRET_KEY") != "super-secret",
        },
    }
    return api_response(
        database == "connected",
        "Health check",
        data,
        status_code=200 if database == "connected" else 503,
    )
