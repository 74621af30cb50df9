# roilens/domain/services/i_query_dispatcher.py
from abc import ABC, abstractmethod
from typing import Optional

from roilens.domain.common.result import Result
from roilens.domain.models.dispatch_models import DispatchRequest


class IQueryDispatcher(ABC):
    """Service that sends queued images to a vision model in one request."""

    @abstractmethod
    def dispatch(self, request: DispatchRequest, api_key: Optional[str],
                 model: Optional[str] = None) -> Result[str]:
        """
        Send all images of a request as a single multimodal query.

        Args:
            request: Images, profile and prompt settings for this dispatch
            api_key: Model service credential
            model: Model identifier; the primary model when omitted

        Returns:
            Result containing the response text, or a classified DomainError.
            Nothing is retried.
        """
        pass
