"""
LLM provider abstraction.

The provider is picked by settings.LLM_PROVIDER ("openai", "gemini" or "anthropic")
and the model by the matching entry in settings.LLM_MODELS.

Report services only need a callable that turns a prompt into text, so
``generate`` is what gets injected into them by default.
"""

import re

DEFAULT_PROVIDER = "gemini"

DEFAULT_MODELS = {
    "openai": "gpt-4o",
    "gemini": "gemini-1.5-pro",
    "anthropic": "claude-sonnet-4-6",
}


def _strip_fences(text):
    """Strip markdown code fences that some models wrap responses in."""
    text = text.strip()
    if text.startswith("```"):
        text = re.sub(r'^```(?:json|markdown)?\s*\n?', '', text)
        text = re.sub(r'\n?```\s*$', '', text)
    return text.strip()


def _provider_and_model(settings):
    provider = getattr(settings, "LLM_PROVIDER", DEFAULT_PROVIDER) or DEFAULT_PROVIDER
    models = {**DEFAULT_MODELS, **getattr(settings, "LLM_MODELS", {})}
    if provider not in models:
        raise ValueError(f"Unknown LLM provider: {provider!r}")
    return provider, models[provider]


def generate(prompt, system_prompt=None, json_mode=False):
    """
    Generate a response from the configured LLM provider.

    Args:
        prompt: The user message / full instruction block.
        system_prompt: Optional system instruction.
        json_mode: If True, instructs the model to return valid JSON.

    Returns:
        The model's response as a string.
    """
    from django.conf import settings

    provider, model = _provider_and_model(settings)

    if provider == "openai":
        from openai import OpenAI
        client = OpenAI(api_key=settings.OPENAI_API_KEY)
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        kwargs = {}
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}
        response = client.chat.completions.create(
            model=model,
            messages=messages,
            **kwargs,
        )
        return response.choices[0].message.content

    if provider == "gemini":
        from google import genai
        from google.genai import types
        client = genai.Client(api_key=settings.GEMINI_API_KEY)
        response = client.models.generate_content(
            model=model,
            contents=prompt,
            config=types.GenerateContentConfig(
                system_instruction=system_prompt,
                response_mime_type="application/json" if json_mode else "text/plain",
            ),
        )
        return response.text

    if provider == "anthropic":
        import anthropic
        sys = system_prompt or ""
        if json_mode:
            sys += "\n\nRespond only with valid JSON. No other text."
        kwargs = {"system": sys.strip()} if sys.strip() else {}
        client = anthropic.Anthropic(api_key=settings.ANTHROPIC_API_KEY)
        response = client.messages.create(
            model=model,
            max_tokens=8192,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
        return _strip_fences(response.content[0].text)

    raise ValueError(f"Unknown LLM provider: {provider!r}")
