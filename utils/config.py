"""
Runtime settings, read from the environment (and a local .env file).
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

DEFAULT_AUTOMATION_WEBHOOK_URL = (
    "https://n8n-three.southafricanorth.azurecontainer.io/webhook/"
    "451f53ab-faa0-4e23-be71-4c937f1bfffa"
)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class FormSettings:
    cloudinary_cloud_name: str = "vic-3e"
    cloudinary_upload_preset: str = "n8n-ai-preset"
    webhook_proxy_url: str = "http://localhost:8000/api/webhook"
    automation_webhook_url: str = DEFAULT_AUTOMATION_WEBHOOK_URL
    draft_dir: Path = Path(".drafts")
    draft_key: str = "store-form-draft"
    autosave_delay: float = 2.0
    http_timeout: float = 30.0
    public_base_url: str = "http://localhost:8501"
    log_level: str = "INFO"
    proxy_host: str = "0.0.0.0"
    proxy_port: int = 8000

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "FormSettings":
        """Build settings from environment variables, loading .env first."""
        load_dotenv(dotenv_path)
        env = os.environ.get
        return cls(
            cloudinary_cloud_name=env("CLOUDINARY_CLOUD_NAME", cls.cloudinary_cloud_name),
            cloudinary_upload_preset=env("CLOUDINARY_UPLOAD_PRESET", cls.cloudinary_upload_preset),
            webhook_proxy_url=env("WEBHOOK_PROXY_URL", cls.webhook_proxy_url),
            automation_webhook_url=env("AUTOMATION_WEBHOOK_URL", cls.automation_webhook_url),
            draft_dir=Path(env("DRAFT_DIR", str(cls.draft_dir))),
            draft_key=env("DRAFT_KEY", cls.draft_key),
            autosave_delay=_env_float("AUTOSAVE_DELAY_SECONDS", cls.autosave_delay),
            http_timeout=_env_float("HTTP_TIMEOUT_SECONDS", cls.http_timeout),
            public_base_url=env("PUBLIC_BASE_URL", cls.public_base_url),
            log_level=env("LOG_LEVEL", cls.log_level).upper(),
            proxy_host=env("PROXY_HOST", cls.proxy_host),
            proxy_port=int(_env_float("PROXY_PORT", cls.proxy_port)),
        )
