from dataclasses import dataclass
from pathlib import Path
import tomllib


@dataclass(frozen=True)
class AppConfig:
    base_url: str = "http://www.runkeeper.com"
    cache_dir: str = "tmp"
    user_agent: str = "runkeeper-miles/0.1"


@dataclass(frozen=True)
class ScrapeConfig:
    rate_limit_seconds: float = 1.0
    timeout_seconds: float = 30.0


@dataclass(frozen=True)
class Config:
    app: AppConfig
    scrape: ScrapeConfig

    @property
    def cache_dir(self) -> Path:
        return Path(self.app.cache_dir)


DEFAULT_CONFIG_PATH = Path("config.toml")


def default_config() -> Config:
    return Config(app=AppConfig(), scrape=ScrapeConfig())


def load_config(path: Path | None = None) -> Config:
    config_path = path or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        if path is None:
            return default_config()
        raise FileNotFoundError(
            f"Missing {config_path}. Copy config.example.toml to config.toml and edit it."
        )

    raw = tomllib.loads(config_path.read_text(encoding="utf-8"))

    app = raw.get("app", {})
    scrape = raw.get("scrape", {})

    return Config(
        app=AppConfig(**app),
        scrape=ScrapeConfig(**scrape),
    )
