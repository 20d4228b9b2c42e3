from abc import ABC, abstractmethod


class LLMClient(ABC):
    @abstractmethod
    def generate_response(self, prompt: str) -> str:
        """Send *prompt* and return the raw completion text.

        Raises GenerationError when the service cannot be reached or answers
        with something unusable.
        """
        pass
