"""llmls - list LLM models from OpenRouter and a local Ollama server."""

__version__ = "1.0.0"
