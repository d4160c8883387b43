"""OpenAI Responses API client for plain text generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from fitness_tracker.services.gateway import TextGenerationClient


@dataclass
class OpenAITextClient(TextGenerationClient):
    """Text generation client backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    store: bool = False

    @classmethod
    def create(cls, api_key: str) -> "OpenAITextClient":
        """Create a client with SDK-level retries disabled."""
        return cls(client=AsyncOpenAI(api_key=api_key, max_retries=0))

    async def generate(self, *, model: str, prompt: str) -> str:
        """Send the prompt as a single user input and return the output text."""
        response = await self.client.responses.create(
            model=model,
            input=prompt,
            store=self.store,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()
