"""
Configuration management for SiftCore using Pydantic.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, ClassVar, List, cast

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

# --- Nested Configuration Models ---


class SelectorWeight(BaseModel):
    """A content selector and the score offset granted to its matches."""

    selector: str
    score: float


DEFAULT_CONTENT_SELECTORS: List[SelectorWeight] = [
    SelectorWeight(selector="article", score=100),
    SelectorWeight(selector="[role='main']", score=95),
    SelectorWeight(selector="main", score=90),
    SelectorWeight(selector=".post-content", score=85),
    SelectorWeight(selector=".entry-content", score=85),
    SelectorWeight(selector=".article-content", score=85),
    SelectorWeight(selector=".content-body", score=80),
    SelectorWeight(selector="#content", score=75),
    SelectorWeight(selector=".content", score=70),
    SelectorWeight(selector=".post", score=65),
    SelectorWeight(selector=".markdown-body", score=90),
    SelectorWeight(selector="[itemprop='articleBody']", score=95),
]

# header/footer are handled separately: they survive inside an <article>
DEFAULT_NOISE_SELECTORS: List[str] = [
    "script",
    "style",
    "noscript",
    "iframe",
    "nav",
    "aside",
    ".advertisement",
    ".ad",
    ".ads",
    ".social-share",
    ".comments",
    ".related-posts",
    ".sidebar",
    "[role='navigation']",
    "[role='banner']",
    "[role='complementary']",
    "[class*='cookie']",
    "[id*='cookie']",
    "[class*='popup']",
    "[class*='modal']",
    "[class*='newsletter']",
    ".hidden",
    "[hidden]",
    "[aria-hidden='true']",
]


class ScoringConfig(BaseModel):
    """Weights and thresholds of the content-density scorer."""

    min_content_length: int = Field(default=200, ge=0, description="Text length below which an element scores 0.")
    length_divisor: float = Field(default=10.0, gt=0, description="Characters per base-score point.")
    max_length_score: float = Field(default=100.0, ge=0, description="Cap on the text-length component.")
    paragraph_weight: float = Field(default=5.0, description="Points per <p> descendant.")
    max_link_text_ratio: float = Field(default=0.5, description="Link-text ratio above which the block is penalised.")
    link_density_penalty: float = Field(default=50.0, description="Penalty for link-heavy blocks.")
    heading_bonus: float = Field(default=10.0, description="Bonus when an h1/h2/h3 is present.")
    many_paragraphs_threshold: int = Field(default=3, ge=0, description="Paragraph count above which a bonus applies.")
    many_paragraphs_bonus: float = Field(default=10.0)
    blockquote_bonus: float = Field(default=5.0)
    list_bonus: float = Field(default=5.0)
    comment_penalty: float = Field(default=20.0, description="Penalty when a comment section is present.")
    form_threshold: int = Field(default=2, ge=0, description="Form count above which a penalty applies.")
    form_penalty: float = Field(default=15.0)
    fallback_threshold: float = Field(
        default=100.0, description="Best selector score under which every <div> is scored as well."
    )

    @field_validator("max_link_text_ratio")
    @classmethod
    def validate_ratio(cls, v: float) -> float:
        """Ensure the link ratio is in valid range."""
        if not 0.0 <= v <= 1.0:
            raise ValueError("max_link_text_ratio must be between 0.0 and 1.0")
        return v


class ExtractionSettings(BaseModel):
    """Configuration for the content extraction engine."""

    parser: str = Field(default="html.parser", description="BeautifulSoup tree builder.")
    content_selectors: List[SelectorWeight] = Field(
        default_factory=lambda: [s.model_copy() for s in DEFAULT_CONTENT_SELECTORS],
        description="Priority-ordered selectors with score offsets",
    )
    noise_selectors: List[str] = Field(
        default_factory=lambda: list(DEFAULT_NOISE_SELECTORS),
        description="Selectors removed before scoring",
    )
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    min_paragraph_length: int = Field(default=50, ge=0, description="Minimum length of a counted paragraph.")
    words_per_minute: int = Field(default=200, gt=0, description="Reading speed for reading-time estimates.")
    max_link_text_length: int = Field(default=100, gt=3, description="Link text is truncated beyond this length.")
    guess_code_language: bool = Field(
        default=False, description="Guess code block language with Pygments when no class names it."
    )

    @field_validator("content_selectors")
    @classmethod
    def validate_content_selectors(cls, v: List[SelectorWeight]) -> List[SelectorWeight]:
        """Ensure the selector table is not empty."""
        if not v:
            raise ValueError("content_selectors must contain at least one selector")
        return v

    @property
    def min_content_length(self) -> int:
        return self.scoring.min_content_length


class MonitoringConfig(BaseModel):
    """Configuration for logging."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: str | None = Field(
        default=None,
        description="Path to log file. If None, logs to the console.",
    )
    json_logs: bool = Field(default=False, description="Render console logs as JSON.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "SiftCore"
    version: str = "0.1.0"
    extraction: ExtractionSettings = Field(default_factory=ExtractionSettings)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="SIFT_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def find_config_file() -> Path | None:
    current_dir = Path.cwd()
    paths_to_check = [
        current_dir / "siftcore.yaml",
        current_dir / "siftcore.yml",
    ]
    for path in paths_to_check:
        if path.exists():
            return path

    return None


# --- Lazy Configuration Loader ---


class LazyConfig:
    """
    A proxy for the Config object that delays its loading and validation
    until an attribute is first accessed.
    """

    _config: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __getattr__(self, name: str) -> Any:
        if self.__class__._config is None:
            with self.__class__._lock:
                if self.__class__._config is None:
                    self.__class__._config = self._load_config_with_fallback()
        return getattr(self.__class__._config, name)

    def _load_config_with_fallback(self) -> Config:
        """Load configuration from file or fall back to defaults."""
        config_path = find_config_file()
        if config_path:
            try:
                log.info("Lazy loading configuration from: %s", config_path)
                return Config.from_yaml(config_path)
            except (ValidationError, FileNotFoundError, yaml.YAMLError) as e:
                log.error(
                    "Failed to load or validate configuration from '%s': %s. Falling back to default settings.",
                    config_path,
                    e,
                    exc_info=log.getEffectiveLevel() <= logging.DEBUG,
                )
        else:
            log.debug("No config file found. Using default settings for lazy load.")

        try:
            return Config()
        except ValidationError as e:
            log.critical("FATAL: Default configuration is invalid: %s", e, exc_info=True)
            raise RuntimeError(f"Default configuration is invalid, cannot start: {e}") from e


# --- Global Settings Instance ---
settings: "Config" = cast("Config", LazyConfig())
