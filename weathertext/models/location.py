"""Location data models."""

from dataclasses import dataclass
from typing import Final

from weathertext.errors import LocationFormatError

LAT_RANGE = (-90.0, 90.0)
LNG_RANGE = (-180.0, 180.0)

COORDINATE_RANGE_MESSAGE = (
    "Invalid coordinate values. Latitude must be between -90 and 90, "
    "longitude between -180 and 180."
)


@dataclass(frozen=True)
class Coordinates:
    lat: float
    lng: float

    def __post_init__(self) -> None:
        if not (LAT_RANGE[0] <= self.lat <= LAT_RANGE[1]):
            raise LocationFormatError(COORDINATE_RANGE_MESSAGE)
        if not (LNG_RANGE[0] <= self.lng <= LNG_RANGE[1]):
            raise LocationFormatError(COORDINATE_RANGE_MESSAGE)


class NotALocation:
    """Parser outcome for text that is neither coordinates nor a three-word address."""

    def __repr__(self) -> str:
        return "NOT_A_LOCATION"

    def __bool__(self) -> bool:
        return False


NOT_A_LOCATION: Final = NotALocation()
