"""Use case for paging through orders."""

from dataclasses import dataclass, field

from orderflow.application.common.pagination import PaginatedResult, Pagination
from orderflow.application.common.use_case import Query, UseCase
from orderflow.application.ordering.protocols.order_repository import OrderRepositoryProtocol
from orderflow.domain.ordering.entities import Order, OrderStatus


@dataclass(frozen=True)
class ListOrdersQuery(Query):
    status: OrderStatus | None = None
    pagination: Pagination = field(default_factory=Pagination)


class ListOrdersUseCase(UseCase[ListOrdersQuery, PaginatedResult[Order]]):
    """Use case for listing orders, optionally filtered by status."""

    def __init__(self, order_repository: OrderRepositoryProtocol) -> None:
        self.order_repository = order_repository

    def execute(self, query: ListOrdersQuery) -> PaginatedResult[Order]:
        orders, total = self.order_repository.list_by_status(query.status, query.pagination)
        return PaginatedResult(items=orders, total=total, pagination=query.pagination)
