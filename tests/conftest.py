from __future__ import annotations

import pytest

from routequest.core.types import Route, Waypoint

PUERTA_DEL_SOL = (40.4168, -3.7038)
PLAZA_MAYOR = (40.4154, -3.7074)
PALACIO_REAL = (40.4180, -3.7143)


@pytest.fixture
def madrid_route() -> Route:
    return Route(
        route_id="madrid_test",
        name="Ruta de prueba",
        waypoints=[
            Waypoint(id="sol", name="Puerta del Sol", lat=PUERTA_DEL_SOL[0], lon=PUERTA_DEL_SOL[1]),
            Waypoint(id="mayor", name="Plaza Mayor", lat=PLAZA_MAYOR[0], lon=PLAZA_MAYOR[1]),
            Waypoint(id="palacio", name="Palacio Real", lat=PALACIO_REAL[0], lon=PALACIO_REAL[1]),
        ],
    )
