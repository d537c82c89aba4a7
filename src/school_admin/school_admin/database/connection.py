from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from supabase import Client, ClientOptions, create_client

from ..core.exceptions import ConfigurationError


@dataclass
class SupabaseConfig:
    url: str
    key: str
    photo_bucket: str = "photos"


class DatabaseConnection:
    """Singleton-like Supabase client factory.

    Note: We create a short-lived client per operation and send the caller's
    access token as its bearer, so the backend's row-level security sees the
    signed-in user. Refreshing that token is the web layer's job.
    """

    _instance: Optional["DatabaseConnection"] = None

    def __init__(self, config: SupabaseConfig, *, access_token_provider: Optional[Callable[[], Optional[str]]] = None):
        if not config.url or not config.key:
            raise ConfigurationError("Missing Supabase environment variables")
        self._config = config
        self._access_token_provider = access_token_provider

    @property
    def config(self) -> SupabaseConfig:
        return self._config

    @classmethod
    def get_instance(cls, config: SupabaseConfig, **kwargs) -> "DatabaseConnection":
        if cls._instance is None:
            cls._instance = DatabaseConnection(config, **kwargs)
        return cls._instance

    def connect(self, *, anonymous: bool = False) -> Client:
        access_token = None
        if not anonymous and self._access_token_provider:
            access_token = self._access_token_provider()
        if not access_token:
            return create_client(self._config.url, self._config.key)

        options = ClientOptions(headers={"Authorization": f"Bearer {access_token}"})
        return create_client(self._config.url, self._config.key, options=options)
