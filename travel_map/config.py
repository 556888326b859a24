"""
Configuration for the travel map widget.

Constants (dataset endpoints, catalogs, default allow-list) live at module
level; the runtime settings are an immutable ``MapConfig`` built once per page
load and handed to the pipeline, so nothing downstream reads ambient state.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from travel_map.errors import ConfigError

# --- DATASET ENDPOINTS ---
COUNTRY_GEOJSON_URL = "https://raw.githubusercontent.com/TonyCicero/Map-Widget/refs/heads/main/world.geo.json"
US_STATES_GEOJSON_URL = "https://raw.githubusercontent.com/TonyCicero/Map-Widget/refs/heads/main/us_states.geo.json"

# --- NAVIGATION ---
DEFAULT_BASE_URL = "http://localhost:8501"
DEFAULT_PERMALINK_BASE = "/wp/location/"

# Delay before a hovered region opens its popup on the flat map
HOVER_DELAY_MS = 300

# --- LOCATION CATALOGS ---
COUNTRIES = (
    'Afghanistan', 'Albania', 'Algeria', 'Andorra', 'Angola', 'Antigua and Barbuda', 'Argentina', 'Armenia',
    'Australia', 'Austria', 'Azerbaijan', 'Bahamas', 'Bahrain', 'Bangladesh', 'Barbados', 'Belarus', 'Belgium',
    'Belize', 'Benin', 'Bhutan', 'Bolivia', 'Bosnia and Herzegovina', 'Botswana', 'Brazil', 'Brunei',
    'Bulgaria', 'Burkina Faso', 'Burundi', 'Cambodia', 'Cameroon', 'Canada', 'Cape Verde',
    'Central African Republic', 'Chad', 'Chile', 'China', 'Colombia', 'Comoros', 'Congo', 'Costa Rica',
    'Croatia', 'Cuba', 'Cyprus', 'Czech Republic', 'Democratic Republic of the Congo', 'Denmark',
    'Djibouti', 'Dominica', 'Dominican Republic', 'East Timor', 'Ecuador', 'Egypt', 'El Salvador',
    'Equatorial Guinea', 'Eritrea', 'Estonia', 'Eswatini', 'Ethiopia', 'Fiji', 'Finland', 'France',
    'Gabon', 'Gambia', 'Georgia', 'Germany', 'Ghana', 'Greece', 'Grenada', 'Guatemala', 'Guinea',
    'Guinea-Bissau', 'Guyana', 'Haiti', 'Honduras', 'Hungary', 'Iceland', 'India', 'Indonesia',
    'Iran', 'Iraq', 'Ireland', 'Israel', 'Italy', 'Ivory Coast', 'Jamaica', 'Japan', 'Jordan',
    'Kazakhstan', 'Kenya', 'Kiribati', 'Kuwait', 'Kyrgyzstan', 'Laos', 'Latvia', 'Lebanon',
    'Lesotho', 'Liberia', 'Libya', 'Liechtenstein', 'Lithuania', 'Luxembourg', 'Madagascar',
    'Malawi', 'Malaysia', 'Maldives', 'Mali', 'Malta', 'Marshall Islands', 'Mauritania', 'Mauritius',
    'Mexico', 'Micronesia', 'Moldova', 'Monaco', 'Mongolia', 'Montenegro', 'Morocco', 'Mozambique',
    'Myanmar', 'Namibia', 'Nauru', 'Nepal', 'Netherlands', 'New Zealand', 'Nicaragua', 'Niger',
    'Nigeria', 'North Korea', 'North Macedonia', 'Norway', 'Oman', 'Pakistan', 'Palau', 'Panama',
    'Papua New Guinea', 'Paraguay', 'Peru', 'Philippines', 'Poland', 'Portugal', 'Qatar',
    'Romania', 'Russia', 'Rwanda', 'Saint Kitts and Nevis', 'Saint Lucia', 'Saint Vincent and the Grenadines',
    'Samoa', 'San Marino', 'Sao Tome and Principe', 'Saudi Arabia', 'Senegal', 'Serbia', 'Seychelles',
    'Sierra Leone', 'Singapore', 'Slovakia', 'Slovenia', 'Solomon Islands', 'Somalia', 'South Africa',
    'South Korea', 'South Sudan', 'Spain', 'Sri Lanka', 'Sudan', 'Suriname', 'Sweden', 'Switzerland',
    'Syria', 'Taiwan', 'Tajikistan', 'Tanzania', 'Thailand', 'Togo', 'Tonga', 'Trinidad and Tobago',
    'Tunisia', 'Turkey', 'Turkmenistan', 'Tuvalu', 'Uganda', 'Ukraine', 'United Arab Emirates',
    'United Kingdom', 'United States of America', 'Uruguay', 'Uzbekistan', 'Vanuatu', 'Vatican City',
    'Venezuela', 'Vietnam', 'Yemen', 'Zambia', 'Zimbabwe',
)

US_STATES = (
    'Alabama', 'Alaska', 'Arizona', 'Arkansas', 'California', 'Colorado', 'Connecticut', 'Delaware',
    'Florida', 'Georgia', 'Hawaii', 'Idaho', 'Illinois', 'Indiana', 'Iowa', 'Kansas', 'Kentucky',
    'Louisiana', 'Maine', 'Maryland', 'Massachusetts', 'Michigan', 'Minnesota', 'Mississippi',
    'Missouri', 'Montana', 'Nebraska', 'Nevada', 'New Hampshire', 'New Jersey', 'New Mexico',
    'New York', 'North Carolina', 'North Dakota', 'Ohio', 'Oklahoma', 'Oregon', 'Pennsylvania',
    'Rhode Island', 'South Carolina', 'South Dakota', 'Tennessee', 'Texas', 'Utah', 'Vermont',
    'Virginia', 'Washington', 'West Virginia', 'Wisconsin', 'Wyoming',
)

# Used when the settings store has never been saved
DEFAULT_LOCATIONS = (
    'California', 'Florida', 'Maryland', 'Massachusetts', 'New York', 'Nevada', 'Pennsylvania', 'Virginia',
    'Albania', 'Austria', 'Belgium', 'Cambodia', 'Canada', 'Czech Republic', 'Denmark', 'Dominican Republic',
    'France', 'Germany', 'Greece', 'Ireland', 'Japan', 'Laos', 'Netherlands', 'Poland', 'Slovakia', 'Sweden',
    'Switzerland', 'Thailand', 'United Kingdom', 'United States of America', 'Vietnam',
)


def normalize_permalink_base(value: str) -> str:
    """Trim surrounding slashes and wrap the path in exactly one slash on each side."""
    inner = str(value).strip().strip("/")
    if not inner:
        return "/"
    return f"/{inner}/"


class MapConfig(BaseSettings):
    """Immutable widget settings, as exported by the external settings store.

    Values come from explicit init arguments (a settings file, see
    ``load_config``), then ``TRAVEL_MAP_*`` environment variables, then the
    defaults below.
    """

    model_config = SettingsConfigDict(env_prefix="TRAVEL_MAP_", frozen=True, extra="ignore")

    base_url: str = Field(default=DEFAULT_BASE_URL)
    permalink_base: str = Field(default=DEFAULT_PERMALINK_BASE)
    displayed_locations: Tuple[str, ...] = Field(default=DEFAULT_LOCATIONS)
    styles: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    country_geojson_url: str = Field(default=COUNTRY_GEOJSON_URL)
    states_geojson_url: str = Field(default=US_STATES_GEOJSON_URL)
    request_timeout: Optional[float] = Field(default=None)
    hover_delay_ms: int = Field(default=HOVER_DELAY_MS, ge=0)
    log_level: str = Field(default="INFO")

    @field_validator("base_url", mode="before")
    @classmethod
    def _strip_base_url(cls, value):
        return str(value).strip().rstrip("/")

    @field_validator("permalink_base", mode="before")
    @classmethod
    def _wrap_permalink_base(cls, value):
        return normalize_permalink_base(value)

    @field_validator("displayed_locations", mode="before")
    @classmethod
    def _split_locations(cls, value):
        # The settings store keeps the allow-list as a comma-separated string
        if value is None:
            return ()
        if isinstance(value, str):
            value = value.split(",")
        names = []
        for item in value:
            name = str(item).strip()
            if name and name not in names:
                names.append(name)
        return tuple(names)

    @field_validator("styles", mode="before")
    @classmethod
    def _drop_non_mapping_styles(cls, value):
        if not isinstance(value, dict):
            return {}
        return {str(k): v for k, v in value.items() if isinstance(v, dict)}


def load_config(path=None, **overrides) -> MapConfig:
    """
    Build a ``MapConfig`` from an optional JSON settings export.

    Args:
        path: JSON file written by the settings store, or None for env/defaults only
        **overrides: Field values that take priority over the file

    Raises:
        ConfigError: The file is missing, is not a JSON object, or holds invalid values
    """
    values = {}
    if path is not None:
        path = Path(path)
        if not path.is_file():
            raise ConfigError(f"Settings file not found: {path}")
        try:
            values = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read settings file {path}: {e}") from e
        if not isinstance(values, dict):
            raise ConfigError(f"Settings file {path} must contain a JSON object")

    values.update(overrides)
    try:
        return MapConfig(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid travel map settings: {e}") from e
