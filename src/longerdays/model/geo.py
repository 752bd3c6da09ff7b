from dataclasses import dataclass
from typing import Optional

from ..errors import OutOfBoundsInputError


@dataclass(frozen=True)
class GeoCoordinate:
  latitude: float
  longitude: float
  name: Optional[str] = None

  def __post_init__(self):
    lat = float(self.latitude)
    lon = float(self.longitude)
    # NaN fails both comparisons
    if not -90.0 <= lat <= 90.0:
      raise OutOfBoundsInputError(f"Latitude must be -90 to 90, got {self.latitude}")
    if not -180.0 <= lon <= 180.0:
      raise OutOfBoundsInputError(f"Longitude must be -180 to 180, got {self.longitude}")
    object.__setattr__(self, "latitude", lat)
    object.__setattr__(self, "longitude", lon)
