"""Order domain constants.

Defines status choices and valid status transitions for the order
state machine.
"""

from django.db import models


class OrderStatus(models.IntegerChoices):
    PROCESSING = 1, "Processamento"
    SHIPPED = 2, "Enviado"
    DELIVERED = 3, "Entregue"
    CANCELLED = 4, "Cancelado"


VALID_TRANSITIONS: dict[int, set[int]] = {
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

TERMINAL_STATES: set[int] = {OrderStatus.DELIVERED, OrderStatus.CANCELLED}

RECENT_ORDERS_LIMIT = 10
