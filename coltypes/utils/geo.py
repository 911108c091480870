"""GeoJSON <-> well-known text / well-known binary conversion.

GEOMETRY and GEOGRAPHY columns accept GeoJSON mappings. Literals are
written as WKT; values read back from drivers arrive as (E)WKB and are
returned as GeoJSON mappings.
"""

from __future__ import annotations

import struct
from typing import Optional, Union

_WKB_TYPES = {
    1: "Point",
    2: "LineString",
    3: "Polygon",
    4: "MultiPoint",
    5: "MultiLineString",
    6: "MultiPolygon",
    7: "GeometryCollection",
}

_EWKB_Z = 0x80000000
_EWKB_M = 0x40000000
_EWKB_SRID = 0x20000000


def _number(value: Union[int, float]) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _position(coords: list) -> str:
    return " ".join(_number(c) for c in coords)


def _ring(coords: list) -> str:
    return ", ".join(_position(p) for p in coords)


def _dimension(coords: list) -> str:
    # POINT Z (1 2 3)
    return "Z " if len(coords) == 3 else "ZM " if len(coords) == 4 else ""


def geojson_to_wkt(geojson: dict) -> str:
    """Convert a GeoJSON geometry mapping to WKT.

    Args:
        geojson: Mapping with "type" and "coordinates" (or "geometries")

    Returns:
        WKT string

    Raises:
        ValueError: If the geometry type is unknown

    Examples:
        >>> geojson_to_wkt({"type": "Point", "coordinates": [1, 2]})
        'POINT (1 2)'
        >>> geojson_to_wkt({"type": "LineString", "coordinates": [[100.0, 0.0], [101.0, 1.0]]})
        'LINESTRING (100 0, 101 1)'
    """
    kind = geojson.get("type")
    coords = geojson.get("coordinates")

    if kind == "Point":
        if not coords:
            return "POINT EMPTY"
        return f"POINT {_dimension(coords)}({_position(coords)})"
    if kind == "LineString":
        return f"LINESTRING ({_ring(coords)})"
    if kind == "Polygon":
        return "POLYGON (" + ", ".join(f"({_ring(r)})" for r in coords) + ")"
    if kind == "MultiPoint":
        return f"MULTIPOINT ({_ring(coords)})"
    if kind == "MultiLineString":
        return "MULTILINESTRING (" + ", ".join(f"({_ring(r)})" for r in coords) + ")"
    if kind == "MultiPolygon":
        polygons = [", ".join(f"({_ring(r)})" for r in polygon) for polygon in coords]
        return "MULTIPOLYGON (" + ", ".join(f"({p})" for p in polygons) + ")"
    if kind == "GeometryCollection":
        parts = [geojson_to_wkt(g) for g in geojson.get("geometries", [])]
        return "GEOMETRYCOLLECTION (" + ", ".join(parts) + ")"

    raise ValueError(f"Unknown GeoJSON type: {kind}")


class _WKBReader:
    """Sequential reader over a (E)WKB byte string."""

    def __init__(self, data: bytes):
        self.data = data
        self.pos = 0

    def _unpack(self, fmt: str, size: int) -> tuple:
        if self.pos + size > len(self.data):
            raise ValueError("Truncated WKB value")
        values = struct.unpack_from(fmt, self.data, self.pos)
        self.pos += size
        return values

    def read_geometry(self) -> dict:
        (byte_order,) = self._unpack("B", 1)
        endian = "<" if byte_order == 1 else ">"
        (raw_type,) = self._unpack(endian + "I", 4)

        has_z = bool(raw_type & _EWKB_Z)
        has_m = bool(raw_type & _EWKB_M)
        srid: Optional[int] = None
        if raw_type & _EWKB_SRID:
            (srid,) = self._unpack(endian + "I", 4)

        base = raw_type & 0x0FFFFFFF
        # ISO WKB encodes dimensions as 1000/2000/3000 offsets
        if base >= 1000:
            has_z = has_z or base // 1000 in (1, 3)
            has_m = has_m or base // 1000 in (2, 3)
            base %= 1000

        kind = _WKB_TYPES.get(base)
        if kind is None:
            raise ValueError(f"Unknown WKB geometry type: {base}")

        dims = 2 + int(has_z) + int(has_m)
        geometry = self._read_body(kind, endian, dims)
        if srid:
            geometry["crs"] = {"type": "name", "properties": {"name": f"EPSG:{srid}"}}
        return geometry

    def _read_point(self, endian: str, dims: int) -> list:
        return list(self._unpack(endian + "d" * dims, 8 * dims))

    def _read_points(self, endian: str, dims: int) -> list:
        (count,) = self._unpack(endian + "I", 4)
        return [self._read_point(endian, dims) for _ in range(count)]

    def _read_rings(self, endian: str, dims: int) -> list:
        (count,) = self._unpack(endian + "I", 4)
        return [self._read_points(endian, dims) for _ in range(count)]

    def _read_collection(self, endian: str) -> list:
        (count,) = self._unpack(endian + "I", 4)
        return [self.read_geometry() for _ in range(count)]

    def _read_body(self, kind: str, endian: str, dims: int) -> dict:
        if kind == "Point":
            return {"type": kind, "coordinates": self._read_point(endian, dims)}
        if kind == "LineString":
            return {"type": kind, "coordinates": self._read_points(endian, dims)}
        if kind == "Polygon":
            return {"type": kind, "coordinates": self._read_rings(endian, dims)}
        if kind == "GeometryCollection":
            return {"type": kind, "geometries": self._read_collection(endian)}

        members = self._read_collection(endian)
        return {"type": kind, "coordinates": [m["coordinates"] for m in members]}


def wkb_to_geojson(data: bytes) -> dict:
    """Decode WKB or PostGIS EWKB bytes to a GeoJSON mapping.

    Examples:
        >>> import struct
        >>> wkb_to_geojson(struct.pack("<BIdd", 1, 1, 1.0, 2.0))
        {'type': 'Point', 'coordinates': [1.0, 2.0]}
    """
    return _WKBReader(bytes(data)).read_geometry()


def hex_wkb_to_geojson(value: Union[str, bytes]) -> dict:
    """Decode a hex-encoded (E)WKB value, as PostGIS returns it."""
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("ascii")
    return wkb_to_geojson(bytes.fromhex(value))
