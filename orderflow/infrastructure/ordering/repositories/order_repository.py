"""Repository for Order domain entities."""

from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload

from orderflow.application.common.pagination import Pagination
from orderflow.domain.common.value_objects import OrderId
from orderflow.domain.ordering.entities import Order, OrderStatus
from orderflow.domain.ordering.exceptions import OrderNotFoundError
from orderflow.infrastructure.ordering.mappers.order_mapper import OrderMapper
from orderflow.models import Order as OrderORM


class OrderRepository:
    """Repository for Order domain entities."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = OrderMapper()

    def get(self, order_id: OrderId) -> Order:
        """
        Load an order by ID.

        Raises:
            OrderNotFoundError: If no order has this ID
        """
        stmt = (
            select(OrderORM)
            .options(selectinload(OrderORM.lines))
            .where(OrderORM.id == order_id.value)
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        if orm_model is None:
            raise OrderNotFoundError(order_id.value)
        return self.mapper.to_domain(orm_model)

    def save(self, order: Order) -> Order:
        """
        Save an order entity (create or update).

        Args:
            order: The order entity to save

        Returns:
            Saved order entity with database-generated values
        """
        if not order.id.is_assigned:
            # Create new
            orm_model = self.mapper.to_orm(order)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
            return self.mapper.to_domain(orm_model)
        # Update existing
        orm_model = self.db.get(OrderORM, order.id.value)
        if not orm_model:
            raise OrderNotFoundError(order.id.value)
        self.mapper.to_orm(order, orm_model)
        self.db.commit()
        self.db.refresh(orm_model)
        return self.mapper.to_domain(orm_model)

    def list_by_status(
        self, status: OrderStatus | None, pagination: Pagination
    ) -> tuple[list[Order], int]:
        """
        Page through orders, oldest first.

        Args:
            status: Only return orders in this status; None for all
            pagination: Page to return

        Returns:
            Tuple of (orders on the page, total matching orders)
        """
        stmt = select(OrderORM).options(selectinload(OrderORM.lines))
        count_stmt = select(func.count(OrderORM.id))
        if status is not None:
            stmt = stmt.where(OrderORM.status == status.value)
            count_stmt = count_stmt.where(OrderORM.status == status.value)

        stmt = (
            stmt.order_by(OrderORM.placed_at.asc(), OrderORM.id.asc())
            .offset(pagination.offset)
            .limit(pagination.limit)
        )
        orm_models = self.db.execute(stmt).scalars().all()
        total = self.db.execute(count_stmt).scalar() or 0
        return [self.mapper.to_domain(orm) for orm in orm_models], total
