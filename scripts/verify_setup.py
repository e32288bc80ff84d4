"""Verify that the project is set up correctly."""

import importlib
import sys


def _check_import(module_name: str, errors: list[str], label: str | None = None) -> None:
    """Import a module and print status."""
    try:
        module = importlib.import_module(module_name)
        version = getattr(module, "__version__", None)
        if version is not None:
            print(f"✅ {label or module_name} {version}")
        else:
            print(f"✅ {label or module_name}")
    except ImportError as exc:
        errors.append(f"{label or module_name}: {exc}")


def main() -> None:
    """Run setup verification."""
    print("🔍 Verifying project setup...\n")

    errors: list[str] = []

    print(f"Python version: {sys.version}")
    print("✅ Python version OK")

    print("\nChecking dependencies...")
    _check_import("httpx", errors)
    _check_import("pydantic", errors)
    _check_import("pydantic_settings", errors, label="pydantic-settings")
    _check_import("typer", errors)
    _check_import("rich", errors)

    print("\nChecking configuration...")
    try:
        from vaatsalya.config import get_settings

        settings = get_settings()
        print("✅ Settings loaded")
        print(f"   Model: {settings.gemini_model}")
        print(f"   Endpoint: {settings.gemini_base_url}")
        print(f"   Max attempts: {settings.max_attempts}")
    except Exception as exc:
        errors.append(f"Configuration: {exc}")

    print("\n" + "=" * 50)
    if errors:
        print("❌ Setup verification FAILED")
        print("\nErrors:")
        for error in errors:
            print(f"  • {error}")
        sys.exit(1)

    print("✅ Setup verification PASSED")


if __name__ == "__main__":
    main()
