"""Parse inbound message text into coordinates.

Three outcomes:
    Coordinates      - decimal pair or resolved three-word address
    NOT_A_LOCATION   - text has neither shape (caller sends guidance)
    LocationError    - recognised shape that failed validation or lookup
"""

import logging
import re
from typing import Protocol

from weathertext.errors import LocationLookupError
from weathertext.models.location import NOT_A_LOCATION, Coordinates, NotALocation

logger = logging.getLogger(__name__)

_NUMBER = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)"

# "51.5074,-0.1278", "(51.5, -0.12)", "51.5°N, 0.12°W"
DECIMAL_PAIR_RE = re.compile(
    rf"^\(?\s*({_NUMBER})\s*°?\s*([ns])?\s*,\s*({_NUMBER})\s*°?\s*([ew])?\s*\)?$",
    re.IGNORECASE,
)

# "filled.count.soap" (leading slashes already stripped)
THREE_WORD_RE = re.compile(r"^[a-z]+\.[a-z]+\.[a-z]+$")


class ThreeWordResolver(Protocol):
    async def resolve(self, words: str) -> Coordinates: ...


def _apply_cardinal(value: float, cardinal: str | None) -> float:
    if cardinal is not None and cardinal.lower() in ("s", "w"):
        return -abs(value)
    return value


def parse_decimal_pair(text: str) -> Coordinates | None:
    """Parse a "lat,lng" pair. Returns None if the text is not a decimal pair.

    Raises LocationFormatError when the pair is out of range.
    """
    m = DECIMAL_PAIR_RE.match(text)
    if m is None:
        return None
    lat = _apply_cardinal(float(m.group(1)), m.group(2))
    lng = _apply_cardinal(float(m.group(3)), m.group(4))
    return Coordinates(lat=lat, lng=lng)


def is_three_word_address(text: str) -> bool:
    return THREE_WORD_RE.match(text) is not None


async def parse_location(
    raw: str, resolver: ThreeWordResolver | None = None
) -> Coordinates | NotALocation:
    """Turn raw message text into coordinates.

    Decimal pairs never touch the network; three-word addresses go through
    ``resolver``.
    """
    text = raw.strip().lower().lstrip("/").strip()

    coords = parse_decimal_pair(text)
    if coords is not None:
        return coords

    if not is_three_word_address(text):
        return NOT_A_LOCATION

    if resolver is None:
        logger.warning("Three-word address %s received but no resolver is configured", text)
        raise LocationLookupError(
            "What3Words locations are not supported right now. Please send coordinates instead."
        )

    coords = await resolver.resolve(text)
    logger.info("Resolved %s to %.5f,%.5f", text, coords.lat, coords.lng)
    return coords
