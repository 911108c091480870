"""Spatial column types. Values are GeoJSON mappings."""

from __future__ import annotations

from typing import Any, Optional

from coltypes.core.data_type import AbstractType, build_options
from coltypes.models.keys import TypeKey
from coltypes.models.options import CallOptions
from coltypes.sql_string import escape as default_escape
from coltypes.utils.geo import geojson_to_wkt


class GEOMETRY(AbstractType):
    """Geometry column, optionally constrained to a shape and SRID.

    Examples:
        >>> GEOMETRY().stringify({"type": "Point", "coordinates": [1, 2]})
        "GeomFromText('POINT (1 2)')"
    """

    key = TypeKey.GEOMETRY
    self_escaping = True

    def __init__(self, geometry_type: Any = None, srid: Optional[int] = None, **kwargs: Any):
        super().__init__(
            build_options(geometry_type, {"geometry_type": geometry_type, "srid": srid}, kwargs)
        )

    @property
    def geometry_type(self) -> Optional[str]:
        return self.options.geometry_type

    @property
    def srid(self) -> Optional[int]:
        return self.options.srid

    def _stringify(self, value: Any, options: CallOptions) -> Any:
        escape = options.escape or default_escape
        return f"GeomFromText({escape(geojson_to_wkt(value))})"


class GEOGRAPHY(GEOMETRY):
    """Geography column: spatial objects on an elliptic coordinate system."""

    key = TypeKey.GEOGRAPHY
