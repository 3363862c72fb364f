# synccircle/controllers/health_controller.py

from synccircle.services.health_service import HealthService

class HealthController:
    @staticmethod
    def ping():
        return {"status": "pong", "message": "Server is running"}

    @staticmethod
    def get_health_status():
        return HealthService.get_health_status()
