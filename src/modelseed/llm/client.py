"""LLM client wrapper supporting OpenAI, Gemini and local OpenAI-compatible servers."""

from typing import List, Dict, Optional
from modelseed.config.settings import get_settings
from modelseed.config.logging import get_logger

logger = get_logger(__name__)

# Global client instances
_gemini_client: Optional[object] = None
_openai_client: Optional[object] = None

# Global forced provider (None = use priority, "openai"/"local"/"gemini" = force that provider)
_forced_provider: Optional[str] = None


class LLMConfigurationError(ValueError):
    """Raised when no LLM provider is configured."""

    pass


def _get_gemini_client():
    """Get or create the global Gemini client."""
    global _gemini_client
    if _gemini_client is None:
        try:
            import google.generativeai as genai
        except ImportError:
            raise ImportError(
                "google-generativeai package not installed. "
                "Install with: pip install google-generativeai"
            )
        settings = get_settings()
        if not settings.gemini_api_key:
            raise LLMConfigurationError("GEMINI_API_KEY not set in environment")
        genai.configure(api_key=settings.gemini_api_key)
        _gemini_client = genai
        logger.debug("Initialized Gemini client")
    return _gemini_client


def _get_openai_client():
    """Get or create the global OpenAI client."""
    global _openai_client
    if _openai_client is None:
        try:
            from openai import OpenAI
        except ImportError:
            raise ImportError(
                "openai package not installed. "
                "Install with: pip install openai"
            )
        settings = get_settings()
        if not settings.openai_api_key:
            raise LLMConfigurationError("OPENAI_API_KEY not set in environment")
        _openai_client = OpenAI(
            api_key=settings.openai_api_key,
            timeout=settings.llm_timeout,
        )
        logger.debug(f"Initialized OpenAI client with timeout={settings.llm_timeout}s")
    return _openai_client


def set_forced_provider(provider: Optional[str]) -> None:
    """
    Force a specific LLM provider to be used.

    Args:
        provider: "openai", "local", "gemini", or None to use priority order
    """
    global _forced_provider
    _forced_provider = provider
    logger.info(f"Forced LLM provider set to: {provider}")


def chat(messages: List[Dict[str, str]], json_mode: bool = False) -> str:
    """
    Send messages to an LLM (OpenAI, Gemini, or local OpenAI-compatible).

    Providers are tried in priority order OpenAI > Gemini > Local; a provider
    that fails hands over to the next configured one.

    Args:
        messages: List of message dicts with 'role' and 'content' keys
        json_mode: Ask the provider to reply with a single JSON object

    Returns:
        Content of the assistant's response

    Raises:
        LLMConfigurationError: If no provider is configured
        Exception: If the last configured provider fails
    """
    settings = get_settings()

    if _forced_provider == "openai":
        return _chat_openai(messages, json_mode)
    elif _forced_provider == "local":
        return _chat_local(messages, json_mode)
    elif _forced_provider == "gemini":
        return _chat_gemini(messages, json_mode)

    use_openai = settings.openai_api_key and settings.model_name
    use_gemini = settings.gemini_api_key and settings.gemini_model
    use_local = settings.llm_url and settings.model

    if not use_openai and not use_local and not use_gemini:
        raise LLMConfigurationError(
            "No LLM API configured. Set either OPENAI_API_KEY/MODEL_NAME, "
            "GEMINI_API_KEY/GEMINI_MODEL, or LLM_URL/MODEL in .env"
        )

    if use_openai:
        try:
            return _chat_openai(messages, json_mode)
        except Exception as e:
            if not (use_gemini or use_local):
                raise
            logger.warning(f"OpenAI call failed: {e}. Falling back to next provider...")

    if use_gemini:
        try:
            return _chat_gemini(messages, json_mode)
        except Exception as e:
            if not use_local:
                raise
            logger.warning(f"Gemini call failed: {e}. Falling back to next provider...")

    return _chat_local(messages, json_mode)


def _chat_gemini(messages: List[Dict[str, str]], json_mode: bool = False) -> str:
    """Send messages to Gemini API."""
    settings = get_settings()
    genai = _get_gemini_client()

    logger.debug(
        f"Sending chat request to Gemini {settings.gemini_model} "
        f"(temperature={settings.temperature}, timeout={settings.llm_timeout}s)"
    )

    # Gemini takes a single prompt here: system content is prepended to the
    # last user message.
    system_content = ""
    user_parts = []
    for msg in messages:
        if msg["role"] == "system":
            system_content = msg["content"]
        elif msg["role"] == "user":
            user_parts.append(msg["content"])

    last_user = user_parts[-1] if user_parts else ""
    full_prompt = f"{system_content}\n\n{last_user}" if system_content else last_user

    generation_config = {"temperature": settings.temperature}
    if json_mode:
        generation_config["response_mime_type"] = "application/json"

    def _make_request():
        model = genai.GenerativeModel(model_name=settings.gemini_model)
        response = model.generate_content(
            full_prompt,
            generation_config=generation_config,
            request_options={"timeout": settings.llm_timeout},
        )
        if getattr(response, "text", None):
            content = response.text
        elif getattr(response, "parts", None):
            content = "".join(part.text for part in response.parts if hasattr(part, "text"))
        else:
            raise ValueError("Empty response from Gemini")
        logger.debug(f"Received response ({len(content)} chars)")
        return content

    # Single attempt: a failed call is never retried against the same provider
    try:
        return _make_request()
    except Exception as e:
        logger.error(f"Gemini API call to {settings.gemini_model} failed: {e}")
        raise


def _chat_local(messages: List[Dict[str, str]], json_mode: bool = False) -> str:
    """Send messages to local OpenAI-compatible API."""
    settings = get_settings()

    try:
        from openai import OpenAI
    except ImportError:
        raise ImportError(
            "openai package not installed. "
            "Install with: pip install openai"
        )

    # Ensure base_url ends with /v1 if it doesn't already
    base_url = settings.llm_url.rstrip("/")
    if not base_url.endswith("/v1"):
        base_url = f"{base_url}/v1"

    client = OpenAI(
        base_url=base_url,
        api_key="not-needed",  # Local APIs often don't require a real key
        timeout=settings.llm_timeout,
    )

    logger.debug(
        f"Sending chat request to local model {settings.model} at {settings.llm_url} "
        f"(temperature={settings.temperature}, timeout={settings.llm_timeout}s)"
    )

    def _make_request():
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = client.chat.completions.create(
            model=settings.model,
            messages=messages,
            temperature=settings.temperature,
            **kwargs,
        )

        if not response.choices:
            raise ValueError("No choices in response from local LLM")

        content = response.choices[0].message.content
        if content is None:
            raise ValueError("No content in message from local LLM")

        logger.debug(f"Received response ({len(content)} chars)")
        return content

    # Single attempt: a failed call is never retried against the same provider
    try:
        return _make_request()
    except Exception as e:
        logger.error(f"Local LLM API call to {settings.model} failed: {e}")
        raise


def _chat_openai(messages: List[Dict[str, str]], json_mode: bool = False) -> str:
    """Send messages to OpenAI API."""
    settings = get_settings()
    client = _get_openai_client()

    logger.debug(
        f"Sending chat request to OpenAI {settings.model_name} "
        f"(temperature={settings.temperature}, timeout={settings.llm_timeout}s)"
    )

    def _make_request():
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = client.chat.completions.create(
            model=settings.model_name,
            messages=messages,
            temperature=settings.temperature,
            **kwargs,
        )
        content = response.choices[0].message.content
        if content is None:
            raise ValueError("No content in message from OpenAI")
        logger.debug(f"Received response ({len(content)} chars)")
        return content

    # Single attempt: a failed call is never retried against the same provider
    try:
        return _make_request()
    except Exception as e:
        logger.error(f"OpenAI API call to {settings.model_name} failed: {e}")
        raise
