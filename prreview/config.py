"""Configuration loading from YAML and environment.

Secrets (tokens, API keys) are taken from environment variables or from
files (Docker secrets). Never put real tokens in config files committed to
the repo.
"""

import os
from pathlib import Path
from typing import Any, List

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXCLUDED_SUFFIXES = [".md", ".js", ".css", ".html", ".htm"]

# Lowercase env keys used by earlier deployments of the bot: key -> (section, field)
LEGACY_ENV_KEYS = {
    "github_owner": ("bot", "owner"),
    "github_repo": ("bot", "repo"),
    "trigger_phrase": ("bot", "trigger_phrase"),
    "llm_api_endpoint": ("llm", "api_endpoint"),
    "llm_model_name": ("llm", "model_name"),
    "llm_ctx_size": ("llm", "ctx_size"),
    "llm_api_key": ("llm", "api_key"),
}

# Injected by load_config so secret lookups can read env/file
_current_env: dict[str, str] = {}


def _read_secret(env_key: str, file_env_key: str) -> str | None:
    """Read secret from env var or from file path in env (e.g. Docker
    secrets)."""
    value = _current_env.get(env_key)
    if value:
        return value.strip()
    file_path = _current_env.get(file_env_key)
    if file_path:
        return Path(file_path).read_text().strip()
    return None


class BotConfig(BaseSettings):
    """Target repository and review trigger."""

    model_config = SettingsConfigDict(env_prefix="BOT_", extra="ignore")

    owner: str = Field(default="staru09", description="Repository owner (user or org)")
    repo: str = Field(default="LFX_test", description="Repository name")
    trigger_phrase: str = Field(default="flows review", description="Comment prefix that requests a review")
    excluded_suffixes: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_SUFFIXES),
        description="Changed files ending with these suffixes are not reviewed",
    )
    webhook_secret: str = Field(default="", description="Secret for webhook signature verification")

    @property
    def repository(self) -> str:
        """Full repository name (owner/repo)."""
        return f"{self.owner}/{self.repo}"


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT or app token; use env or secret file")
    api_url: str = Field(default="https://api.github.com", description="API base URL")
    raw_url: str = Field(default="https://raw.githubusercontent.com", description="Raw file content base URL")
    timeout: int = Field(default=30, ge=1, description="Timeout in seconds for API and raw fetch calls")


class LLMConfig(BaseSettings):
    """OpenAI-compatible model backend settings."""

    model_config = SettingsConfigDict(env_prefix="LLM_", extra="ignore", protected_namespaces=())

    api_endpoint: str = Field(default="https://yicoder9b.us.gaianet.network/v1", description="API base URL")
    model_name: str = Field(default="yicoder9b", description="Model name sent with each request")
    ctx_size: int = Field(default=126000, ge=0, description="Model context size in tokens")
    api_key: str = Field(default="LLAMAEDGE", description="Bearer API key")
    timeout: int = Field(default=300, ge=1, description="Timeout in seconds")

    @field_validator("ctx_size", mode="before")
    @classmethod
    def _ctx_size_or_zero(cls, value: Any) -> Any:
        """Non-numeric or negative context size falls back to 0 (empty budget)."""
        if isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                return 0
        if isinstance(value, int) and value < 0:
            return 0
        return value

    @property
    def char_budget(self) -> int:
        """Soft input limit in characters (about 2 chars per token)."""
        return 2 * self.ctx_size


class WebhookConfig(BaseSettings):
    """Webhook server settings."""

    model_config = SettingsConfigDict(env_prefix="WEBHOOK_", extra="ignore")

    host: str = Field(default="0.0.0.0", description="Bind host")
    port: int = Field(default=8000, ge=1, le=65535, description="Bind port")
    path: str = Field(default="/webhook/github", description="Webhook URL path")


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log format",
    )


class AppConfig(BaseSettings):
    """Root application config from YAML + env."""

    model_config = SettingsConfigDict(extra="ignore")

    bot: BotConfig = Field(default_factory=BotConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or Docker secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")

    @property
    def webhook_secret_resolved(self) -> str:
        """Resolve webhook secret from config, env or Docker secret file."""
        s = self.bot.webhook_secret
        if s and not s.startswith("${"):
            return s
        return _read_secret("WEBHOOK_SECRET", "WEBHOOK_SECRET_FILE") or ""

    @property
    def llm_api_key_resolved(self) -> str:
        """Resolve model API key from Docker secret file or config."""
        file_path = _current_env.get("LLM_API_KEY_FILE")
        if file_path:
            return Path(file_path).read_text().strip()
        return self.llm.api_key


def _substitute_env(value: Any) -> Any:
    """Replace ${VAR} and $VAR in strings with os.environ."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return _current_env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return _current_env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v) for v in value]
    return value


def _apply_legacy_env(raw: dict[str, Any]) -> dict[str, Any]:
    """Overlay lowercase legacy env keys (e.g. github_owner) onto raw
    sections."""
    merged = {section: dict(raw.get(section) or {}) for section in ("bot", "github", "llm", "webhook", "logging")}
    for env_key, (section, field) in LEGACY_ENV_KEYS.items():
        value = _current_env.get(env_key)
        if value is not None:
            merged[section][field] = value
    return merged


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load config from an optional YAML file and environment.

    Precedence per field: legacy lowercase env keys, then YAML, then
    prefixed env (BOT_*, LLM_*, ...), then defaults. Secrets: GITHUB_TOKEN
    or GITHUB_TOKEN_FILE, WEBHOOK_SECRET or WEBHOOK_SECRET_FILE.
    """
    global _current_env

    _current_env = dict(os.environ)

    path = config_path or Path("config.yaml")
    raw: dict[str, Any] = {}
    if path.is_file():
        raw = yaml.safe_load(path.read_text()) or {}
        raw = _substitute_env(raw)

    sections = _apply_legacy_env(raw)

    return AppConfig(
        bot=BotConfig(**sections["bot"]),
        github=GitHubConfig(**sections["github"]),
        llm=LLMConfig(**sections["llm"]),
        webhook=WebhookConfig(**sections["webhook"]),
        logging=LoggingConfig(**sections["logging"]),
    )
