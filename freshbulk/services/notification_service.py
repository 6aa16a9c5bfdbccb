# freshbulk/services/notification_service.py
from freshbulk.celery_worker import celery_app
from freshbulk.domain.schemas import OrderOut
from freshbulk.services.email_client import EmailClient
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)


class NotificationService:
    """
    Powiadomienia email o zamowieniach.
    Tylko wrzuca task do Celery (fire-and-forget) - blad kolejki jest
    logowany i polykany, nigdy nie psuje zapisu zamowienia/statusu.
    """

    def send_order_confirmation(self, order: OrderOut) -> bool:
        try:
            send_order_confirmation_task.delay(order.model_dump(mode="json"))
        except Exception:
            logger.exception(f"Nie udalo sie zakolejkowac potwierdzenia dla {order.order_number}")
            return False

        logger.info(f"[NOTIFICATION] Potwierdzenie zamowienia {order.order_number} zakolejkowane")
        return True

    def send_order_status_update(self, order: OrderOut, status: str) -> bool:
        try:
            send_order_status_update_task.delay(order.model_dump(mode="json"), status)
        except Exception:
            logger.exception(f"Nie udalo sie zakolejkowac zmiany statusu dla {order.order_number}")
            return False

        logger.info(f"[NOTIFICATION] Zmiana statusu {order.order_number} -> {status} zakolejkowana")
        return True


@celery_app.task(name="freshbulk.services.notification_service.send_order_confirmation_task")
def send_order_confirmation_task(order_data: dict):
    order = OrderOut.model_validate(order_data)
    sent = EmailClient().send_order_confirmation(order)

    if sent:
        logger.info(f"Order confirmation email sent to {order.customer_email} for order {order.order_number}")
    else:
        logger.warning(f"Failed to send order confirmation email for order {order.order_number}")

    return {"order_number": order.order_number, "sent": sent}


@celery_app.task(name="freshbulk.services.notification_service.send_order_status_update_task")
def send_order_status_update_task(order_data: dict, status: str):
    order = OrderOut.model_validate(order_data)
    sent = EmailClient().send_order_status_update(order, status)

    if sent:
        logger.info(f"Order status update email sent to {order.customer_email} for order {order.order_number}")
    else:
        logger.warning(f"Failed to send order status update email for order {order.order_number}")

    return {"order_number": order.order_number, "status": status, "sent": sent}
