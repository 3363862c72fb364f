# synccircle/services/health_service.py

from sqlalchemy import text
from synccircle import db
import time
import logging
from datetime import datetime, timezone
import psutil

logger = logging.getLogger(__name__)

class HealthService:
    @staticmethod
    def get_system_health():
        """Process and host metrics; degrades instead of raising."""
        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            return {
                "status": "online",
                "timestamp": timestamp,
                "server_time": time.time(),
                "cpu_usage": psutil.cpu_percent(interval=0.1),
                "memory_usage": psutil.virtual_memory().percent,
                "uptime": time.time() - psutil.boot_time()
            }
        except (psutil.Error, OSError) as e:
            logger.error(f"Error getting system health: {str(e)}")
            return {
                "status": "degraded",
                "timestamp": timestamp,
                "error": "Could not retrieve full system health"
            }

    @staticmethod
    def check_database_connection():
        try:
            return db.session.execute(text("SELECT 1")).scalar() == 1
        except Exception as e:
            logger.error(f"Database connection check failed: {str(e)}")
            db.session.rollback()
            return False

    @classmethod
    def get_health_status(cls):
        """
        Overall status: ``healthy`` when the database answers and system
        metrics were collected, ``degraded`` when only the metrics failed,
        ``unhealthy`` when the database is unreachable.
        """
        system_health = cls.get_system_health()
        db_ok = cls.check_database_connection()

        if not db_ok:
            overall = "unhealthy"
        elif system_health["status"] != "online":
            overall = "degraded"
        else:
            overall = "healthy"

        return {
            **system_health,
            "database_connection": "healthy" if db_ok else "unhealthy",
            "health_status": overall
        }
