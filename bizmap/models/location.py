"""Geographic coordinates."""
from bizmap.models.base import BizMapRecord


class GeoLocation(BizMapRecord):
    """A latitude/longitude pair in decimal degrees."""

    latitude: float = 0.0
    longitude: float = 0.0

    def __init__(self, latitude: float = 0.0, longitude: float = 0.0, **data):
        super().__init__(latitude=latitude, longitude=longitude, **data)

    def is_valid(self) -> bool:
        """Whether both coordinates fall inside their geographic ranges."""
        return -90.0 <= self.latitude <= 90.0 and -180.0 <= self.longitude <= 180.0

    @property
    def is_unset(self) -> bool:
        """(0.0, 0.0) is the convention for "no location supplied"."""
        return self.latitude == 0.0 and self.longitude == 0.0
