# locations.py
import logging
import os
from types import MappingProxyType

import geopandas as gpd

logger = logging.getLogger(__name__)

# name -> (lat, lng)
DEFAULT_LOCATIONS = MappingProxyType({
    "Warehouse A": (13.0827, 80.2707),          # Chennai Central
    "Hospital B": (13.0604, 80.2496),           # Apollo Hospital area
    "Depot C": (13.0878, 80.2785),              # Parrys Corner
    "Office Park D": (13.0569, 80.2425),        # T Nagar
    "Kitchen Hub": (13.0475, 80.2090),          # Guindy
    "Residential Zone E": (13.1067, 80.2206),   # Anna Nagar
    "HQ Tower": (13.0843, 80.2705),             # Fort area
    "Branch Office F": (13.0108, 80.2270),      # Adyar
    "Lab Center G": (13.0127, 80.2351),         # IIT Madras area
    "Research Facility H": (13.0674, 80.2376),  # Nungambakkam
    "Factory I": (13.1143, 80.1548),            # Ambattur
    "Maintenance Bay J": (13.0358, 80.1790),    # Porur
})


class LocationTable:
    """Read-only lookup from site name to (lat, lng)."""
    def __init__(self, coordinates=None):
        source = DEFAULT_LOCATIONS if coordinates is None else coordinates
        self._coordinates = MappingProxyType(
            {name: (float(lat), float(lng)) for name, (lat, lng) in source.items()}
        )

    def resolve(self, name):
        """Returns (lat, lng) for a known site, None otherwise."""
        return self._coordinates.get(name)

    def __contains__(self, name):
        return name in self._coordinates

    def __len__(self):
        return len(self._coordinates)

    def as_dict(self):
        return {name: {"lat": lat, "lng": lng} for name, (lat, lng) in self._coordinates.items()}

    @classmethod
    def from_geojson(cls, path, crs="EPSG:4326"):
        """
        Loads named Point features from a vector file (GeoJSON, shapefile...).
        Features without a name or with non-point geometry are skipped.
        """
        if not path or not os.path.exists(path):
            raise FileNotFoundError(f"Location file not found: {path}")

        gdf = gpd.read_file(path)
        if gdf.crs is not None and str(gdf.crs) != crs:
            gdf = gdf.to_crs(crs)

        coordinates = {}
        for _, row in gdf.iterrows():
            name = row.get("name")
            geom = row.geometry
            if not isinstance(name, str) or not name or geom is None or geom.geom_type != "Point":
                logger.warning("[from_geojson] skipping feature name=%r geometry=%s",
                               name, None if geom is None else geom.geom_type)
                continue
            coordinates[str(name)] = (geom.y, geom.x)

        logger.info("[from_geojson] loaded %d locations from %s", len(coordinates), path)
        return cls(coordinates)


def load_locations(path=None):
    """Default table, or the one stored at `path` when given."""
    if path:
        return LocationTable.from_geojson(path)
    return LocationTable()
