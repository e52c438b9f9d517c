"""Link filtering.

Filter criteria are immutable values passed to a pure predicate. An
empty selection means "match all"; a populated selection matches only
the selected values. All active criteria must pass.
"""

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from topohealth.model.topology import BandwidthTier, DataCompleteness, HealthStatus, Link
from topohealth.parsers.bandwidth import bandwidth_tier


class DriftRange(BaseModel):
    """Inclusive drift percentage window; 0..100 means unfiltered."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(default=0, ge=0)
    max: float = Field(default=100, ge=0)

    @model_validator(mode="after")
    def validate_bounds(self) -> "DriftRange":
        if self.min > self.max:
            raise ValueError("Drift range minimum must not exceed maximum")
        return self

    @property
    def is_modified(self) -> bool:
        return self.min != 0 or self.max != 100


class FilterCriteria(BaseModel):
    """Selection applied to the link list."""

    model_config = ConfigDict(frozen=True)

    bandwidth_tiers: frozenset[BandwidthTier] = Field(default_factory=frozenset)
    health_statuses: frozenset[HealthStatus] = Field(default_factory=frozenset)
    drift_range: DriftRange = Field(default_factory=DriftRange)
    data_statuses: frozenset[DataCompleteness] = Field(default_factory=frozenset)
    search_query: str = ""


class FilterStats(BaseModel):
    visible_links: int
    total_links: int
    hidden_links: int
    percentage_visible: float


def matches(link: Link, criteria: FilterCriteria) -> bool:
    """Check whether a link passes every active criterion."""
    if criteria.bandwidth_tiers and bandwidth_tier(link.bandwidth_gbps) not in criteria.bandwidth_tiers:
        return False

    if criteria.health_statuses and link.health_status not in criteria.health_statuses:
        return False

    # Drift window only applies to links that have a drift value
    if criteria.drift_range.is_modified and link.drift_pct is not None:
        if not criteria.drift_range.min <= link.drift_pct <= criteria.drift_range.max:
            return False

    if criteria.data_statuses and link.data_status not in criteria.data_statuses:
        return False

    query = criteria.search_query.strip().lower()
    if query:
        haystack = (
            link.link_code,
            link.device_a_code,
            link.device_z_code,
            link.device_a_location_name,
            link.device_z_location_name,
        )
        if not any(query in field.lower() for field in haystack):
            return False

    return True


def filter_links(links: Iterable[Link], criteria: FilterCriteria) -> list[Link]:
    """Links that pass the criteria, in input order."""
    return [link for link in links if matches(link, criteria)]


def filter_stats(all_links: list[Link], filtered_links: list[Link]) -> FilterStats:
    """Visible/hidden counts for a filtered view."""
    visible = len(filtered_links)
    total = len(all_links)
    return FilterStats(
        visible_links=visible,
        total_links=total,
        hidden_links=total - visible,
        percentage_visible=(visible / total) * 100 if total > 0 else 0,
    )
