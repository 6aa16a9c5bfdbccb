# freshbulk/services/email_client.py
from html import escape

import requests
from requests import RequestException

from freshbulk.domain.schemas import OrderOut
from freshbulk.utils.formatters import format_date, format_price
from freshbulk.utils.retry import http_retry
from freshbulk.utils.settings import (
    SENDGRID_API_KEY,
    SENDGRID_API_URL,
    EMAIL_FROM,
    EMAIL_FROM_NAME,
    SUPPORT_EMAIL,
)
from freshbulk.utils.logging import get_logger

logger = get_logger(__name__)


STATUS_MESSAGES = {
    "In Progress": "Your order is being prepared. We'll let you know once it's on the way.",
    "Processing": "Your order is now being processed. We'll update you when it's ready for shipping.",
    "Shipped": "Great news! Your order has been shipped and is on its way to you.",
    "Delivered": "Your order has been delivered successfully. We hope you enjoy your fresh produce!",
    "Cancelled": "Your order has been cancelled as requested. If you have any questions, please contact our support team.",
}


def status_message(status: str) -> str:
    return STATUS_MESSAGES.get(status, f"Your order status has been updated to {status}.")


class EmailClient:
    """
    Klient SendGrid v3 (HTTP API).
    Bez klucza API nic nie wysyla i zwraca False.
    Bledy HTTP -> retry, potem log i False (nigdy wyjatek).
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_url: str | None = None,
        sender: str = EMAIL_FROM,
        sender_name: str = EMAIL_FROM_NAME,
        timeout: int = 5,
    ):
        self.api_key = SENDGRID_API_KEY if api_key is None else api_key
        self.api_url = api_url or SENDGRID_API_URL
        self.sender = sender
        self.sender_name = sender_name
        self.timeout = timeout

    @http_retry()
    def _post(self, payload: dict) -> None:
        resp = requests.post(
            self.api_url,
            json=payload,
            headers={"Authorization": f"Bearer {self.api_key}"},
            timeout=self.timeout,
        )
        resp.raise_for_status()

    def send_email(self, to: str, subject: str, text: str, html: str) -> bool:
        if not self.api_key:
            logger.warning(f"Brak SENDGRID_API_KEY - email do {to} nie zostal wyslany")
            return False

        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self.sender, "name": self.sender_name},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text},
                {"type": "text/html", "value": html},
            ],
        }

        try:
            self._post(payload)
        except RequestException as e:
            logger.error(f"Nie udalo sie wyslac emaila do {to}: {e}")
            return False

        logger.info(f"Email '{subject}' wyslany do {to}")
        return True

    def send_order_confirmation(self, order: OrderOut) -> bool:
        subject = f"FreshBulk Order Confirmation - #{order.order_number}"
        intro = "Thank you for your order with FreshBulk. Your order has been received and is being processed."
        text, html = render_order_email(order, title=f"Order Confirmation - #{order.order_number}", message=intro)
        return self.send_email(order.customer_email, subject, text, html)

    def send_order_status_update(self, order: OrderOut, status: str) -> bool:
        subject = f"FreshBulk Order Status Update - #{order.order_number}"
        text, html = render_order_email(
            order,
            title=f"Order Status Update - #{order.order_number}",
            message=status_message(status),
        )
        return self.send_email(order.customer_email, subject, text, html)


def render_order_email(order: OrderOut, title: str, message: str) -> tuple[str, str]:
    """Zwraca (text, html) dla maila o zamowieniu."""
    item_lines = [
        f"{i.product_name}: {i.quantity} x {format_price(i.price)} = {format_price(i.total)}"
        for i in order.items
    ]
    details = [
        ("Order Number", order.order_number),
        ("Order Date", format_date(order.created_at)),
        ("Status", order.status),
        ("Total Amount", format_price(order.total_amount)),
    ]
    address = f"{order.delivery_address}, {order.delivery_city} {order.delivery_postal_code}"
    tracking = (
        "You can track your order status by using the order tracking feature "
        f"on our website with your order number: {order.order_number}"
    )
    support = f"If you have any questions, please contact our support team at {SUPPORT_EMAIL}."

    text = "\n".join(
        [
            title,
            "",
            f"Hello {order.customer_name},",
            "",
            message,
            "",
            "Order Details:",
            *[f"{label}: {value}" for label, value in details],
            "",
            "Ordered Items:",
            *[f"- {line}" for line in item_lines],
            "",
            f"Delivery Address: {address}",
            "",
            tracking,
            "",
            support,
            "",
            "Thank you for choosing FreshBulk!",
        ]
    )

    html = (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        f'<h2 style="color: #4CAF50;">{title}</h2>'
        f"<p>Hello {escape(order.customer_name)},</p>"
        f"<p>{message}</p>"
        '<div style="margin: 20px 0; padding: 15px; border: 1px solid #e1e1e1; border-radius: 5px;">'
        '<h3 style="margin-top: 0;">Order Details:</h3>'
        + "".join(f"<p><strong>{label}:</strong> {escape(str(value))}</p>" for label, value in details)
        + "<h4>Ordered Items:</h4><ul>"
        + "".join(f"<li>{escape(line)}</li>" for line in item_lines)
        + "</ul>"
        f"<h4>Delivery Address:</h4><p>{escape(address)}</p>"
        "</div>"
        f"<p>{tracking}</p>"
        f"<p>{support}</p>"
        "<p>Thank you for choosing FreshBulk!</p>"
        "</div>"
    )
    return text, html
