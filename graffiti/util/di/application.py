"""Application layer DI providers."""

from dishka import Scope, provide

from graffiti.application.usecase.subscription import (
    SubscribeUseCase,
    UnsubscribeUseCase,
    UpdateSubscriptionAreaUseCase,
)
from graffiti.application.usecase.tag import (
    CreateTagUseCase,
    DeleteTagUseCase,
    GetTagUseCase,
    QueryTagsUseCase,
    VoteTagUseCase,
)
from graffiti.domain.service import RateLimiter, SubscriptionHub, TagService
from graffiti.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    scope = Scope.REQUEST

    # Tag use cases
    @provide
    def get_create_tag_use_case(
        self, tag_service: TagService, rate_limiter: RateLimiter
    ) -> CreateTagUseCase:
        """Provide create tag use case."""
        return CreateTagUseCase(tag_service=tag_service, rate_limiter=rate_limiter)

    @provide
    def get_vote_tag_use_case(self, tag_service: TagService) -> VoteTagUseCase:
        """Provide vote use case."""
        return VoteTagUseCase(tag_service=tag_service)

    @provide
    def get_delete_tag_use_case(self, tag_service: TagService) -> DeleteTagUseCase:
        """Provide delete tag use case."""
        return DeleteTagUseCase(tag_service=tag_service)

    @provide
    def get_get_tag_use_case(self, tag_service: TagService) -> GetTagUseCase:
        """Provide get tag use case."""
        return GetTagUseCase(tag_service=tag_service)

    @provide
    def get_query_tags_use_case(self, tag_service: TagService) -> QueryTagsUseCase:
        """Provide query tags use case."""
        return QueryTagsUseCase(tag_service=tag_service)

    # Subscription use cases
    @provide
    def get_subscribe_use_case(self, hub: SubscriptionHub) -> SubscribeUseCase:
        """Provide subscribe use case."""
        return SubscribeUseCase(hub=hub)

    @provide
    def get_update_area_use_case(
        self, hub: SubscriptionHub
    ) -> UpdateSubscriptionAreaUseCase:
        """Provide update subscription area use case."""
        return UpdateSubscriptionAreaUseCase(hub=hub)

    @provide
    def get_unsubscribe_use_case(self, hub: SubscriptionHub) -> UnsubscribeUseCase:
        """Provide unsubscribe use case."""
        return UnsubscribeUseCase(hub=hub)
