"""
Получение токена Azure AD для Resource Manager API.

Client credentials flow (tenant_id / client_id / client_secret).
Учётные данные берутся из параметров, переменных окружения или config.yaml.

Пример использования:
    creds = AzureCredentials.from_env()
    token = get_token(creds)  # "Bearer eyJ0eXAi..."
"""

import os
import time
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

import requests

from .exceptions import AuthenticationError

logger = logging.getLogger(__name__)

DEFAULT_AUTHORITY_URL = "https://login.microsoftonline.com"
DEFAULT_RESOURCE_URL = "https://management.azure.com"

# Обновляем токен заранее, чтобы он не истёк посреди запроса
TOKEN_REFRESH_MARGIN = 60


@dataclass(frozen=True)
class AzureCredentials:
    """
    Учётные данные service principal.

    Attributes:
        tenant_id: ID тенанта Azure AD
        client_id: ID приложения
        client_secret: Секрет приложения
    """
    tenant_id: str
    client_id: str
    client_secret: str

    # Имена переменных окружения
    ENV_TENANT_ID = "AZURE_TENANT_ID"
    ENV_CLIENT_ID = "AZURE_CLIENT_ID"
    ENV_CLIENT_SECRET = "AZURE_CLIENT_SECRET"

    @classmethod
    def from_env(cls) -> "AzureCredentials":
        """
        Загружает учётные данные из переменных окружения.

        Raises:
            AuthenticationError: Не задана одна из переменных
        """
        values = {
            "tenant_id": os.environ.get(cls.ENV_TENANT_ID, ""),
            "client_id": os.environ.get(cls.ENV_CLIENT_ID, ""),
            "client_secret": os.environ.get(cls.ENV_CLIENT_SECRET, ""),
        }
        missing = [key for key, value in values.items() if not value]
        if missing:
            raise AuthenticationError(
                f"Не заданы учётные данные Azure: {', '.join(missing)}"
            )
        return cls(**values)

    def __repr__(self) -> str:
        return f"AzureCredentials(tenant_id={self.tenant_id!r}, client_id={self.client_id!r})"


def request_token(
    credentials: AzureCredentials,
    authority_url: str = DEFAULT_AUTHORITY_URL,
    resource_url: str = DEFAULT_RESOURCE_URL,
    session: Optional[requests.Session] = None,
    timeout: int = 30,
) -> Tuple[str, float]:
    """
    Запрашивает access token у Azure AD.

    Args:
        credentials: Учётные данные service principal
        authority_url: URL Azure AD
        resource_url: Ресурс, для которого выдаётся токен
        session: requests.Session (опционально)
        timeout: Таймаут запроса

    Returns:
        Tuple[str, float]: ("Bearer <token>", unix-время истечения)

    Raises:
        AuthenticationError: Ошибка сети или отказ Azure AD
    """
    url = f"{authority_url.rstrip('/')}/{credentials.tenant_id}/oauth2/token"
    data = {
        "grant_type": "client_credentials",
        "client_id": credentials.client_id,
        "client_secret": credentials.client_secret,
        "resource": f"{resource_url.rstrip('/')}/",
    }
    http = session or requests.Session()

    logger.debug(f"Запрос токена Azure AD для tenant {credentials.tenant_id}")
    try:
        response = http.post(url, data=data, timeout=timeout)
    except requests.RequestException as e:
        raise AuthenticationError(f"Не удалось получить токен: {e}", url=url) from e

    if response.status_code >= 400:
        try:
            payload = response.json()
        except ValueError:
            payload = {}
        message = payload.get("error_description") or payload.get("error") or response.text
        raise AuthenticationError(
            f"Azure AD отклонил запрос токена: {message}",
            status_code=response.status_code,
            url=url,
        )

    payload = response.json()
    token = payload.get("access_token")
    if not token:
        raise AuthenticationError("Ответ Azure AD не содержит access_token", url=url)

    expires_on = float(payload.get("expires_on") or time.time() + float(payload.get("expires_in", 3600)))
    return f"Bearer {token}", expires_on


class TokenCache:
    """
    Кэш токенов: один токен на набор учётных данных до истечения.

    Example:
        cache = TokenCache()
        token = cache.get(creds)  # запрос к Azure AD
        token = cache.get(creds)  # из кэша
    """

    def __init__(
        self,
        authority_url: str = DEFAULT_AUTHORITY_URL,
        resource_url: str = DEFAULT_RESOURCE_URL,
        session: Optional[requests.Session] = None,
    ):
        self.authority_url = authority_url
        self.resource_url = resource_url
        self._session = session
        self._tokens: Dict[AzureCredentials, Tuple[str, float]] = {}

    def get(self, credentials: AzureCredentials) -> str:
        """Возвращает действующий токен, при необходимости запрашивает новый."""
        cached = self._tokens.get(credentials)
        if cached and cached[1] - TOKEN_REFRESH_MARGIN > time.time():
            return cached[0]

        token, expires_on = request_token(
            credentials,
            authority_url=self.authority_url,
            resource_url=self.resource_url,
            session=self._session,
        )
        self._tokens[credentials] = (token, expires_on)
        return token

    def clear(self) -> None:
        self._tokens.clear()


_default_cache = TokenCache()


def get_token(credentials: AzureCredentials) -> str:
    """
    Возвращает токен из общего кэша.

    Args:
        credentials: Учётные данные service principal

    Returns:
        str: Заголовок Authorization ("Bearer ...")
    """
    return _default_cache.get(credentials)
