# Distance metrics over (lat, lng) degrees.
# Each metric accepts scalars or numpy arrays for the second point so the
# resolver can evaluate every node in one call.
import numpy as np

EARTH_RADIUS_M = 6_371_000.0  # sphere used by the web map's default Earth CRS


def haversine_m(a_lat, a_lng, b_lat, b_lng, *, radius_m: float = EARTH_RADIUS_M):
    phi1 = np.radians(a_lat)
    phi2 = np.radians(b_lat)
    dphi = np.radians(np.subtract(b_lat, a_lat))
    dlmb = np.radians(np.subtract(b_lng, a_lng))

    s = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlmb / 2) ** 2
    s = np.clip(s, 0.0, 1.0)  # rounding can push near-antipodal pairs past 1
    return 2 * radius_m * np.arctan2(np.sqrt(s), np.sqrt(1 - s))


def equirectangular_m(a_lat, a_lng, b_lat, b_lng, *, radius_m: float = EARTH_RADIUS_M):
    """Flat-earth projection around the mean latitude; fine at campus scale."""
    phi_m = np.radians(np.add(a_lat, b_lat) / 2)
    x = np.radians(np.subtract(b_lng, a_lng)) * np.cos(phi_m)
    y = np.radians(np.subtract(b_lat, a_lat))
    return radius_m * np.hypot(x, y)


def euclidean(a_lat, a_lng, b_lat, b_lng, **_):
    # planar units; meant for synthetic graphs
    return np.hypot(np.subtract(b_lat, a_lat), np.subtract(b_lng, a_lng))


def coord_distance(metric, a, b) -> float:
    return float(metric(a.lat, a.lng, b.lat, b.lng))
