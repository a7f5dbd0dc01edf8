"""
Жизненный цикл балансировщика: save / destroy.

save:
1. Проверка агрегата (name, location, resource_group, коллекции).
   При ошибке сервис не вызывается.
2. Один вызов create_load_balancer (без retry).
3. Ответ парсится и вливается в агрегат (id, resource_group, ...).
   Ответ без id считается ошибкой, агрегат остаётся UNPERSISTED.

destroy:
1. Агрегат должен быть сохранён (есть id) и иметь name и resource_group.
2. Один вызов delete_load_balancer; агрегат помечается удалённым.

Состояния: UNPERSISTED → PERSISTED (save) → DELETED (destroy).
"""

from typing import Optional

from ..core.domain.parser import parse_load_balancer
from ..core.domain.required import find_missing, format_required_message
from ..core.domain.validator import LoadBalancerValidator
from ..core.exceptions import (
    AzureNetworkError,
    BoundaryError,
    PreconditionError,
    format_error_for_log,
)
from ..core.logging import get_logger
from ..core.models import LoadBalancer, LoadBalancerState
from .service import LoadBalancerService

logger = get_logger(__name__)

RESOURCE = "load_balancer"


class LoadBalancerLifecycle:
    """
    Сохранение и удаление балансировщика через сервис Azure.

    Example:
        client = AzureNetworkClient.from_config(load_config().validated())
        lifecycle = LoadBalancerLifecycle(client)

        lb = LoadBalancer.from_dict({...})
        lifecycle.save(lb)      # lb.id заполнен
        lifecycle.destroy(lb)   # lb.state == DELETED
    """

    def __init__(
        self,
        service: LoadBalancerService,
        validator: Optional[LoadBalancerValidator] = None,
    ):
        self.service = service
        self.validator = validator or LoadBalancerValidator()

    def save(self, lb: LoadBalancer) -> LoadBalancer:
        """
        Создаёт или обновляет балансировщик.

        Args:
            lb: Агрегат

        Returns:
            LoadBalancer: Тот же агрегат с полями из ответа Azure

        Raises:
            PreconditionError: Не заданы name/location/resource_group или агрегат удалён
            StructuralError: Коллекция неверной формы
            ValidationError: У записи нет обязательных полей
            BoundaryError: Ошибка Azure API или ответ без id
        """
        if lb.state == LoadBalancerState.DELETED:
            raise PreconditionError(
                f"Load balancer {lb.name} was destroyed and can not be saved",
                details={"name": lb.name, "resource_group": lb.resource_group},
            )

        self.validator.validate(lb).raise_for_error()

        log = logger.bind(resource=lb.name, resource_group=lb.resource_group, operation="save")
        log.info(f"Сохранение балансировщика {lb.name}")

        try:
            response = self.service.create_load_balancer(
                lb.name,
                lb.location,
                lb.resource_group,
                lb.frontend_ip_configurations,
                lb.backend_address_pool_names,
                lb.load_balancing_rules,
                lb.probes,
                lb.inbound_nat_rules,
                lb.inbound_nat_pools,
            )
        except Exception as e:
            log.error(f"Ошибка сохранения: {format_error_for_log(e)}")
            wrapped = self._boundary_error(e, lb)
            if wrapped is e:
                raise
            raise wrapped from e

        parsed = parse_load_balancer(response or {})
        if not parsed.id:
            log.error("Ответ Azure не содержит id балансировщика")
            raise BoundaryError(
                f"Azure response for load balancer {lb.name} has no id",
                resource=RESOURCE,
                name=lb.name,
                resource_group=lb.resource_group,
            )
        lb.merge(parsed)
        log.info(f"Балансировщик {lb.name} сохранён", id=lb.id)
        return lb

    def destroy(self, lb: LoadBalancer) -> None:
        """
        Удаляет балансировщик.

        Args:
            lb: Сохранённый агрегат

        Raises:
            PreconditionError: Нет name/resource_group или агрегат не сохранён
            BoundaryError: Ошибка Azure API
        """
        missing = find_missing(lb, ("resource_group", "name"))
        if missing:
            raise PreconditionError(format_required_message(missing), missing=missing)
        if lb.state != LoadBalancerState.PERSISTED:
            raise PreconditionError(
                f"Load balancer {lb.name} is {lb.state.value} and can not be destroyed",
                details={"name": lb.name, "resource_group": lb.resource_group},
            )

        log = logger.bind(resource=lb.name, resource_group=lb.resource_group, operation="destroy")
        log.info(f"Удаление балансировщика {lb.name}")

        try:
            self.service.delete_load_balancer(lb.resource_group, lb.name)
        except Exception as e:
            log.error(f"Ошибка удаления: {format_error_for_log(e)}")
            wrapped = self._boundary_error(e, lb)
            if wrapped is e:
                raise
            raise wrapped from e

        lb.deleted = True
        log.info(f"Балансировщик {lb.name} удалён")

    @staticmethod
    def _boundary_error(error: Exception, lb: LoadBalancer) -> AzureNetworkError:
        """Ошибка сервиса → BoundaryError с контекстом ресурса."""
        if isinstance(error, BoundaryError):
            return error.with_context(resource=RESOURCE, name=lb.name, resource_group=lb.resource_group)
        if isinstance(error, AzureNetworkError):
            return error
        return BoundaryError(
            f"{error.__class__.__name__}: {error}",
            resource=RESOURCE,
            name=lb.name,
            resource_group=lb.resource_group,
        )
