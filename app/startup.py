"""Startup validation and configuration checks."""

from deps import Path

from baseline_guard.errors import ConfigError

from .config import resolve_settings


def validate_config() -> None:
    """Warn at startup if the configuration is invalid or no dataset can be found."""
    try:
        settings = resolve_settings()
    except ConfigError as e:
        print(f"⚠️  WARNING: invalid configuration: {e}")
        print("   /check requests will fail until baseline.config or the environment is fixed.")
        return
    candidates = settings.dataset_candidates()
    if not any(Path(p).is_file() for p in candidates):
        print("⚠️  WARNING: web-features data.json not found. /check will return 503.")
        print("   Set BASELINE_DATA or place data.json at one of:")
        for p in candidates:
            print(f"   - {p}")
