"""List Gemini models that support generateContent."""

import httpx

from vaatsalya.config import get_settings


def main() -> int:
    """List models available to the configured API key."""
    settings = get_settings()

    try:
        response = httpx.get(
            settings.gemini_base_url,
            params={"key": settings.gemini_api_key},
            timeout=settings.request_timeout_seconds,
        )
    except httpx.HTTPError as exc:
        print(f"Could not reach {settings.gemini_base_url}: {exc}")
        return 1

    if not response.is_success:
        print(f"Model listing failed with status: {response.status_code}")
        return 1

    print("Available models:")
    for model in response.json().get("models", []):
        if "generateContent" in model.get("supportedGenerationMethods", []):
            print(f"- {model['name'].removeprefix('models/')}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
