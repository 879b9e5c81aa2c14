"""
Configuration management using Pydantic Settings.

Automatically loads configuration from config/vocabulary.yaml and environment variables.
Provides type-safe access to:
- Reference vocabularies (elements, weapon damage, statuses, kinsect extracts)
- Heading and info-box lookup tables
- Game8 markup conventions (tab groups, placeholder glyphs)
- Fetch and pipeline settings
"""

from pathlib import Path
from typing import Dict, List, Optional
import yaml
from pydantic import BaseModel, Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarkupConfig(BaseModel):
    """Markup conventions the extraction engine depends on."""

    heading_tags: List[str] = Field(
        default_factory=lambda: ['h1', 'h2', 'h3', 'h4', 'h5', 'h6']
    )
    tab_container_class: str = 'a-tabContainer'
    tab_label_tag: str = 'li'
    tab_panel_class: str = 'a-tabPanel'
    tab_index_attribute: str = 'data-tab-index'
    placeholders: List[str] = Field(
        default_factory=lambda: ['-', '–', '—', '−', 'ー', '―', 'N/A']
    )


class VocabularyConfig(BaseSettings):
    """
    Configuration automatically loaded from config/vocabulary.yaml.

    Vocabularies are ordered lists, not sets: prefix matching returns the
    first token that matches, so order is part of the contract.

    Attributes:
        elements: Element tokens (fire, water, ...)
        weapon_damage: Weapon damage type tokens (sever, blunt, ammo)
        elemental_blights: Elemental blight tokens applicable to monsters
        abnormal_statuses: Abnormal status tokens applicable to monsters
        kinsect_extracts: Kinsect extract colors
        ranks: Material rank tokens (tab names of the materials section)
        material_columns: Column tokens of a materials table
        section_lookup: Heading substring → logical section name
        info_lookup: Info box row label substring → info field
        markup: Markup conventions

    Example:
        >>> config = VocabularyConfig()
        >>> config.attack_types
        ['sever', 'blunt', 'ammo', 'fire', 'water', 'thunder', 'ice', 'dragon']
    """

    elements: List[str] = Field(default_factory=list)
    weapon_damage: List[str] = Field(default_factory=list)
    elemental_blights: List[str] = Field(default_factory=list)
    abnormal_statuses: List[str] = Field(default_factory=list)
    kinsect_extracts: List[str] = Field(default_factory=list)
    ranks: List[str] = Field(default_factory=list)
    material_columns: List[str] = Field(default_factory=list)
    section_lookup: Dict[str, str] = Field(
        default_factory=dict,
        description="Lowercase heading substring → logical section name"
    )
    info_lookup: Dict[str, str] = Field(
        default_factory=dict,
        description="Lowercase info row label substring → info field"
    )
    markup: MarkupConfig = Field(default_factory=MarkupConfig)

    model_config = SettingsConfigDict(
        extra='ignore'
    )

    @model_validator(mode='before')
    @classmethod
    def load_yaml_config(cls, data: dict) -> dict:
        """
        Load configuration from config/vocabulary.yaml if not already provided.

        If the data dict already has values (e.g., from tests), it is used as is.
        """
        if data:
            return data

        current_file = Path(__file__)
        project_root = current_file.parent.parent.parent  # src/mhrise_wiki/config.py -> root
        config_path = project_root / 'config' / 'vocabulary.yaml'

        if not config_path.exists():
            # Try alternative: relative to current working directory
            config_path = Path('config/vocabulary.yaml')

        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found at {config_path}. "
                f"Ensure config/vocabulary.yaml exists in project root."
            )

        with open(config_path, 'r', encoding='utf-8') as f:
            yaml_data = yaml.safe_load(f) or {}

        return yaml_data

    @property
    def attack_types(self) -> List[str]:
        """Weapon damage types followed by elements."""
        return self.weapon_damage + self.elements

    @property
    def monster_status_effects(self) -> List[str]:
        """Abnormal statuses followed by elemental blights."""
        return self.abnormal_statuses + self.elemental_blights

    def is_placeholder(self, text: Optional[str]) -> bool:
        """
        Check if text is a "no applicable value" glyph.

        Example:
            >>> get_config().is_placeholder('-')
            True
        """
        if text is None:
            return False
        return text.strip() in self.markup.placeholders


# Singleton pattern - loaded once, cached forever
_config: Optional[VocabularyConfig] = None


def get_config() -> VocabularyConfig:
    """
    Get global vocabulary config instance (lazy-loaded singleton).

    Returns:
        Singleton VocabularyConfig instance

    Example:
        >>> config = get_config()
        >>> config2 = get_config()
        >>> config is config2  # Same instance
        True
    """
    global _config
    if _config is None:
        _config = VocabularyConfig()
    return _config


class AppConfig(BaseSettings):
    """
    Application configuration loaded from environment variables.

    Environment Variables (from .env):
        MHRISE_BASE_URL: Page URL template with an {page_id} placeholder
        MHRISE_USER_AGENT: User-Agent header for page requests
        MHRISE_REQUEST_TIMEOUT: Per-request timeout in seconds
        MHRISE_RATE_LIMIT_SECONDS: Pause after each successful request
        MHRISE_MAX_WORKERS: Concurrent page fetches in a batch
        MHRISE_OUTPUT_DIR: Directory for records and failure reports

    Example:
        >>> config = get_app_config()
        >>> config.page_url(344983)
        'https://game8.co/games/Monster-Hunter-Rise/archives/344983'
    """

    base_url: str = Field(
        default="https://game8.co/games/Monster-Hunter-Rise/archives/{page_id}",
        description="Page URL template"
    )

    user_agent: str = Field(
        default="mhrise-wiki/0.1 (monster data extraction)",
        description="User-Agent header sent with every request"
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Per-request timeout in seconds"
    )

    rate_limit_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Pause after each successful request"
    )

    max_workers: int = Field(
        default=3,
        ge=1,
        description="Maximum number of pages fetched concurrently"
    )

    output_dir: str = Field(
        default="data",
        description="Directory for extracted records and failure CSVs"
    )

    model_config = SettingsConfigDict(
        env_prefix='MHRISE_',
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )

    def page_url(self, page_id) -> str:
        """Build the URL of a page from its id."""
        return self.base_url.format(page_id=page_id)


# Singleton pattern - loaded once, cached forever
_app_config: Optional[AppConfig] = None


def get_app_config() -> AppConfig:
    """
    Get global application config instance (lazy-loaded singleton).

    Configuration is loaded from environment variables and .env file.

    Returns:
        Singleton AppConfig instance
    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig()
    return _app_config


def get_section_lookup() -> Dict[str, str]:
    """
    Get heading substring → logical section lookup table.

    Example:
        >>> get_section_lookup()['kinsect']
        'kinsect_extracts'
    """
    return dict(get_config().section_lookup)
