from fastapi import Request

from charityconnect.core.config import Settings
from charityconnect.services.notifications import SmsNotifier
from charityconnect.services.payments import PaymentGateway


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_notifier(request: Request) -> SmsNotifier:
    return request.app.state.notifier


def get_payment_gateway(request: Request) -> PaymentGateway:
    return request.app.state.payment_gateway
