# marketplace/services/notification_service.py
from marketplace.celery_worker import celery_app
from marketplace.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Order notifications, processed asynchronously by Celery.
    Dispatch is best effort: a placed order stays placed when the broker is down.
    """

    @staticmethod
    def send_order_notification(user_id: int, order_id: int) -> bool:
        try:
            send_order_notification_task.delay(user_id, order_id)
            return True
        except Exception as e:
            logger.warning(f"Could not queue notification for order {order_id}: {e}")
            return False


@celery_app.task(name="marketplace.services.notification_service.send_order_notification_task")
def send_order_notification_task(user_id: int, order_id: int):
    """
    Celery task. A real deployment would hand this to an email or push gateway,
    for now it only logs.
    """
    logger.info(f"[NOTIFICATION] User {user_id}: Order {order_id} is being processed")

    return {"user_id": user_id, "order_id": order_id, "status": "sent"}
