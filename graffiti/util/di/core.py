"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from graffiti.config import (
    ClusteringSettings,
    QuerySettings,
    RateLimitSettings,
    RetrySettings,
    Settings,
    SubscriptionSettings,
)
from graffiti.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings loaded from environment variables and ``.env``."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide
    def provide_query_settings(self, settings: Settings) -> QuerySettings:
        return settings.query

    @provide
    def provide_clustering_settings(self, settings: Settings) -> ClusteringSettings:
        return settings.clustering

    @provide
    def provide_subscription_settings(
        self, settings: Settings
    ) -> SubscriptionSettings:
        return settings.subscriptions

    @provide
    def provide_rate_limit_settings(self, settings: Settings) -> RateLimitSettings:
        return settings.rate_limit

    @provide
    def provide_retry_settings(self, settings: Settings) -> RetrySettings:
        return settings.retry
