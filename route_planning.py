# route_planning.py
from math import sin, cos, sqrt, atan2, radians

from shapely.geometry import LineString, Point, mapping

from config import ROUTE_POINTS

EARTH_RADIUS_KM = 6371


def haversine_distance(lat1, lng1, lat2, lng2):
    """Great-circle distance in km."""
    lat1, lng1, lat2, lng2 = map(radians, [lat1, lng1, lat2, lng2])
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    a = sin(dlat/2)**2 + cos(lat1)*cos(lat2)*sin(dlng/2)**2
    c = 2*atan2(sqrt(a), sqrt(1-a))
    return EARTH_RADIUS_KM*c


def interpolate_position(lat1, lng1, lat2, lng2, fraction):
    """Point `fraction` of the way from (lat1, lng1) to (lat2, lng2), linear in degrees."""
    lat = lat1 + (lat2 - lat1)*fraction
    lng = lng1 + (lng2 - lng1)*fraction
    return lat, lng


def generate_aerial_route(pickup, delivery, num_points=ROUTE_POINTS):
    """
    Straight-line route between two (lat, lng) points as num_points + 1
    [lng, lat] pairs. Linear in degrees, not a great-circle path.
    """
    (lat1, lng1), (lat2, lng2) = pickup, delivery
    route = []
    for i in range(num_points + 1):
        if i == num_points:
            lat, lng = lat2, lng2
        else:
            lat, lng = interpolate_position(lat1, lng1, lat2, lng2, i / num_points)
        route.append([lng, lat])
    return route


def route_line(route):
    if len(route) < 2:
        return None
    return LineString(route)


def position_along_route(route, fraction):
    """[lng, lat] of the point `fraction` (0-1) of the way along the route."""
    if not route:
        return None
    line = route_line(route)
    if line is None:
        return list(route[0])
    if fraction <= 0.0:
        return list(route[0])
    if fraction >= 1.0:
        return list(route[-1])
    pt = line.interpolate(fraction, normalized=True)
    return [pt.x, pt.y]


def route_geojson(route, position=None):
    """FeatureCollection with the route line and, when known, the aircraft point."""
    features = []
    line = route_line(route)
    if line is not None:
        features.append({
            "type": "Feature",
            "properties": {"kind": "route"},
            "geometry": mapping(line),
        })
    if position is not None:
        features.append({
            "type": "Feature",
            "properties": {"kind": "aircraft"},
            "geometry": mapping(Point(position)),
        })
    return {"type": "FeatureCollection", "features": features}
