"""Use case for reading a single order."""

from dataclasses import dataclass

from orderflow.application.common.use_case import Query, UseCase
from orderflow.application.ordering.protocols.order_repository import OrderRepositoryProtocol
from orderflow.domain.common.value_objects import OrderId
from orderflow.domain.ordering.entities import Order


@dataclass(frozen=True)
class GetOrderQuery(Query):
    order_id: int


class GetOrderUseCase(UseCase[GetOrderQuery, Order]):
    def __init__(self, order_repository: OrderRepositoryProtocol) -> None:
        self.order_repository = order_repository

    def execute(self, query: GetOrderQuery) -> Order:
        return self.order_repository.get(OrderId(query.order_id))
