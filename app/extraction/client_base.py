from abc import ABC, abstractmethod


class BaseCompletionClient(ABC):
    """Contract for provider-specific completion clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        temperature: float,
        max_tokens: int,
        system_prompt: str,
        user_prompt: str,
        json_schema: dict[str, object],
    ) -> str:
        """Return the provider's single completion as plain text.

        Raises:
            EmptyResponseError: if the provider returned no content.
            ExtractionNetworkError: if the provider call failed.
        """
