"""TOML configuration reader for site.toml."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import pendulum

if TYPE_CHECKING:
    from pathlib import Path

SITE_CONFIG_FILE = "site.toml"

UNDATED_POLICIES: frozenset[str] = frozenset({"now", "last"})


@dataclass
class ListingConfig:
    """Listing options from the [listing] table."""

    exclude: list[str] = field(default_factory=list)
    recent_groups: int = 6
    description_length: int = 80
    undated: str = "now"


@dataclass
class SiteConfig:
    """Parsed site configuration from site.toml."""

    title: str = "Documentation"
    description: str = ""
    baseurl: str = ""
    timezone: str = "UTC"
    listing: ListingConfig = field(default_factory=ListingConfig)


def normalize_baseurl(baseurl: str) -> str:
    """Normalize a base URL to ``""`` or ``/segment`` without a trailing slash."""
    value = baseurl.strip().strip("/")
    return f"/{value}" if value else ""


def validate_timezone(name: str) -> str:
    """Return *name* if it is a known IANA timezone, else raise ValueError."""
    try:
        pendulum.timezone(name)
    except (KeyError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name!r}") from exc
    return name


def _parse_listing(data: dict[str, Any]) -> ListingConfig:
    exclude = data.get("exclude", [])
    if not isinstance(exclude, list) or not all(isinstance(u, str) for u in exclude):
        raise ValueError("listing.exclude must be a list of URL strings")

    recent_groups = data.get("recent_groups", 6)
    if not isinstance(recent_groups, int) or isinstance(recent_groups, bool) or recent_groups < 1:
        raise ValueError(f"listing.recent_groups must be a positive integer: {recent_groups!r}")

    description_length = data.get("description_length", 80)
    if (
        not isinstance(description_length, int)
        or isinstance(description_length, bool)
        or description_length < 4
    ):
        raise ValueError(
            f"listing.description_length must be an integer >= 4: {description_length!r}"
        )

    undated = data.get("undated", "now")
    if undated not in UNDATED_POLICIES:
        raise ValueError(f"listing.undated must be one of {sorted(UNDATED_POLICIES)}: {undated!r}")

    return ListingConfig(
        exclude=list(exclude),
        recent_groups=recent_groups,
        description_length=description_length,
        undated=undated,
    )


def parse_site_config(content_dir: Path) -> SiteConfig:
    """Parse site.toml from the content directory."""
    config_path = content_dir / SITE_CONFIG_FILE
    if not config_path.exists():
        return SiteConfig()

    data = tomllib.loads(config_path.read_text(encoding="utf-8"))
    site_data = data.get("site", {})

    return SiteConfig(
        title=str(site_data.get("title", "Documentation")),
        description=str(site_data.get("description", "")),
        baseurl=normalize_baseurl(str(site_data.get("baseurl", ""))),
        timezone=validate_timezone(str(site_data.get("timezone", "UTC"))),
        listing=_parse_listing(data.get("listing", {})),
    )
