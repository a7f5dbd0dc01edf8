"""
Базовый класс клиента Azure Resource Manager.

HTTP сессия, авторизация, построение URL ресурсов, обработка ошибок.
"""

import logging
from typing import Any, Dict, Optional, Union

import requests

from ...core.credentials import (
    AzureCredentials,
    DEFAULT_RESOURCE_URL,
    TokenCache,
    get_token,
)
from ...core.exceptions import BoundaryError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


class AzureClientBase:
    """
    Базовый класс для клиента Azure.

    Отвечает за HTTP сессию и вызовы REST API.
    """

    def __init__(
        self,
        subscription_id: str,
        credentials: Optional[AzureCredentials] = None,
        token: Optional[str] = None,
        resource_url: str = DEFAULT_RESOURCE_URL,
        timeout: int = DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
        token_cache: Optional[TokenCache] = None,
    ):
        """
        Инициализация клиента.

        Токен берётся в следующем порядке:
        1. Параметр token (готовый заголовок "Bearer ...")
        2. token_cache.get(credentials) - кэш с authority/resource из конфигурации
        3. get_token(credentials) - общий кэш (публичное облако Azure)

        Args:
            subscription_id: ID подписки Azure
            credentials: Учётные данные service principal
            token: Готовый токен (опционально)
            resource_url: URL Azure Resource Manager
            timeout: Таймаут HTTP запросов
            verify_ssl: Проверять SSL сертификат
            session: requests.Session (опционально)
            token_cache: Кэш токенов (опционально)

        Raises:
            ValueError: Не указаны subscription_id или способ авторизации
        """
        if not subscription_id:
            raise ValueError("Не указан subscription_id Azure")
        if not token and credentials is None:
            raise ValueError("Укажите credentials или token для авторизации в Azure")

        self.subscription_id = subscription_id
        self.resource_url = resource_url.rstrip("/")
        self.timeout = timeout
        self._credentials = credentials
        self._token = token
        self._token_cache = token_cache

        self.session = session or requests.Session()
        self.session.verify = verify_ssl
        self.session.headers.update(
            {
                "Accept": "application/json",
                "Content-Type": "application/json",
            }
        )

        logger.info(f"Azure клиент инициализирован: {self.resource_url} (subscription={subscription_id})")

    def _authorization(self) -> str:
        if self._token:
            return self._token
        if self._token_cache is not None:
            return self._token_cache.get(self._credentials)
        return get_token(self._credentials)

    def _resource_path(
        self,
        resource_group: str,
        provider: str,
        kind: str,
        name: Optional[str] = None,
    ) -> str:
        """
        Путь ресурса ARM.

        Example:
            /subscriptions/S/resourceGroups/RG/providers/Microsoft.Network/loadBalancers/LB
        """
        path = (
            f"/subscriptions/{self.subscription_id}/resourceGroups/{resource_group}"
            f"/providers/{provider}/{kind}"
        )
        if name:
            path += f"/{name}"
        return path

    def _resource_url(
        self,
        resource_group: str,
        provider: str,
        kind: str,
        name: Optional[str] = None,
        api_version: str = "",
    ) -> str:
        url = f"{self.resource_url}{self._resource_path(resource_group, provider, kind, name)}"
        if api_version:
            url += f"?api-version={api_version}"
        return url

    def _request(
        self,
        method: str,
        url: str,
        body: Optional[Dict[str, Any]] = None,
    ) -> Union[Dict[str, Any], list]:
        """
        Выполняет запрос к Azure API.

        Args:
            method: HTTP метод
            url: Полный URL
            body: JSON тело (опционально)

        Returns:
            JSON ответа или {} для пустого ответа

        Raises:
            BoundaryError: Ошибка сети или HTTP статус >= 400
        """
        try:
            headers = {"Authorization": self._authorization()}
            logger.debug(f"{method} {url}")
            response = self.session.request(
                method,
                url,
                json=body,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BoundaryError(f"Ошибка запроса к Azure API: {e}", url=url) from e

        if response.status_code >= 400:
            raise BoundaryError(
                self._error_message(response),
                status_code=response.status_code,
                url=url,
            )

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise BoundaryError(
                "Ответ Azure API не является JSON",
                status_code=response.status_code,
                url=url,
            ) from e

    @staticmethod
    def _error_message(response: requests.Response) -> str:
        """Извлекает сообщение из тела ошибки ARM ({"error": {"code", "message"}})."""
        try:
            payload = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        error = payload.get("error") if isinstance(payload, dict) else None
        if isinstance(error, dict):
            code = error.get("code")
            message = error.get("message") or ""
            return f"{code}: {message}" if code else message
        return response.text or f"HTTP {response.status_code}"
