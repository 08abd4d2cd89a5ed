"""Configuration DI providers (non-mockable)."""

from dishka import Scope, provide

from persona.config import Settings, VotingSettings
from persona.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings for the whole application lifetime.

    Read once from environment variables and .env when the container is
    first asked for them.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_voting_settings(self, settings: Settings) -> VotingSettings:
        """Provide voter identity and paging limits for vote routes."""
        return settings.voting
