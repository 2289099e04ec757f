"""Mapper for Order ORM ↔ Domain conversion."""

from datetime import UTC, datetime

from orderflow.domain.common.value_objects import Money, OrderId
from orderflow.domain.ordering.entities import Order, OrderLine, OrderStatus
from orderflow.models import Order as OrderORM
from orderflow.models import OrderLine as OrderLineORM


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything is stored in UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _as_utc_or_none(value: datetime | None) -> datetime | None:
    return _as_utc(value) if value is not None else None


class OrderMapper:
    """Mapper for Order ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: OrderORM) -> Order:
        """Convert ORM model to domain entity."""
        return Order.create_with_id(
            id=OrderId(orm_model.id),
            customer_email=orm_model.customer_email,
            shipping_address=orm_model.shipping_address,
            lines=[
                OrderLine(
                    sku=line.sku,
                    quantity=line.quantity,
                    unit_price=Money(line.unit_price_cents, line.currency),
                )
                for line in orm_model.lines
            ],
            status=OrderStatus(orm_model.status),
            placed_at=_as_utc(orm_model.placed_at),
            payment_reference=orm_model.payment_reference,
            tracking_number=orm_model.tracking_number,
            cancellation_reason=orm_model.cancellation_reason,
            paid_at=_as_utc_or_none(orm_model.paid_at),
            shipped_at=_as_utc_or_none(orm_model.shipped_at),
            cancelled_at=_as_utc_or_none(orm_model.cancelled_at),
        )

    def to_orm(self, domain_entity: Order, orm_model: OrderORM | None = None) -> OrderORM:
        """Convert domain entity to ORM model."""
        if orm_model:
            # Lines are fixed once an order is placed; only lifecycle fields move
            orm_model.status = domain_entity.status.value
            orm_model.payment_reference = domain_entity.payment_reference
            orm_model.tracking_number = domain_entity.tracking_number
            orm_model.cancellation_reason = domain_entity.cancellation_reason
            orm_model.paid_at = domain_entity.paid_at
            orm_model.shipped_at = domain_entity.shipped_at
            orm_model.cancelled_at = domain_entity.cancelled_at
            return orm_model

        return OrderORM(
            id=domain_entity.id.value if domain_entity.id.is_assigned else None,
            customer_email=domain_entity.customer_email,
            shipping_address=domain_entity.shipping_address,
            status=domain_entity.status.value,
            payment_reference=domain_entity.payment_reference,
            tracking_number=domain_entity.tracking_number,
            cancellation_reason=domain_entity.cancellation_reason,
            placed_at=domain_entity.placed_at,
            paid_at=domain_entity.paid_at,
            shipped_at=domain_entity.shipped_at,
            cancelled_at=domain_entity.cancelled_at,
            lines=[
                OrderLineORM(
                    position=position,
                    sku=line.sku,
                    quantity=line.quantity,
                    unit_price_cents=line.unit_price.amount_cents,
                    currency=line.unit_price.currency,
                )
                for position, line in enumerate(domain_entity.lines)
            ],
        )
