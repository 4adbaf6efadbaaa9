from .azure import AzureCompletionProvider
from .chat_completions import ChatCompletionsProvider
from .openai import OpenAICompatibleProvider

__all__ = ["AzureCompletionProvider", "ChatCompletionsProvider", "OpenAICompatibleProvider"]
