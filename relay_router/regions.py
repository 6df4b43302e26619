from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class Region(Enum):
    NEW_YORK = "NewYork"
    FRANKFURT = "Frankfurt"
    AMSTERDAM = "Amsterdam"
    LONDON = "London"
    SALT_LAKE_CITY = "SaltLakeCity"
    TOKYO = "Tokyo"
    LOS_ANGELES = "LosAngeles"
    PITTSBURGH = "Pittsburgh"
    SINGAPORE = "Singapore"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: str | None) -> "Region":
        """Map a configuration string to a region; anything unrecognised is UNKNOWN."""
        if not value:
            return cls.UNKNOWN
        wanted = value.strip().lower()
        for region in cls:
            if region.value.lower() == wanted or region.name.lower() == wanted:
                return region
        return cls.UNKNOWN


@dataclass(frozen=True)
class EndpointTable:
    endpoints: tuple[str, ...]                 # ordered endpoint URLs / host:port
    region_index: Mapping[Region, int] = field(default_factory=dict)
    default_index: int = 0                     # used for regions not in region_index

    def __post_init__(self):
        object.__setattr__(self, "endpoints", tuple(self.endpoints))
        if not self.endpoints:
            raise ValueError("Endpoint table must list at least one endpoint")
        if any(not e for e in self.endpoints):
            raise ValueError("Endpoint table contains an empty endpoint")
        indexes = list(self.region_index.values()) + [self.default_index]
        for index in indexes:
            if not 0 <= index < len(self.endpoints):
                raise ValueError(
                    f"Endpoint index {index} out of range for {len(self.endpoints)} endpoints"
                )

    def resolve(self, region: Region) -> str:
        return self.endpoints[self.region_index.get(region, self.default_index)]
