from dataclasses import dataclass, field
from typing import Optional

from config import CRUISE_ALTITUDE_M, MAX_PAYLOAD_KG

ORDER_PENDING = "Pending"
ORDER_APPROVED = "Approved"
ORDER_IN_FLIGHT = "In Flight"
ORDER_DELIVERED = "Delivered"

AIRCRAFT_IDLE = "Idle"
AIRCRAFT_IN_FLIGHT = "In Flight"
AIRCRAFT_LANDING = "Landing"
AIRCRAFT_CHARGING = "Charging"

MODE_MANUAL = "Manual"
MODE_SEMI_AUTO = "Semi-Auto"
MODE_AUTO = "Auto"


@dataclass
class Order:
    """A delivery request between two named locations."""
    id: str
    package_type: str
    weight: str
    pickup: str
    delivery: str
    status: str = ORDER_PENDING


@dataclass
class Aircraft:
    """The single simulated vehicle."""
    battery: float = 87.0
    payload_weight: float = 0.0
    max_payload: float = MAX_PAYLOAD_KG
    status: str = AIRCRAFT_IDLE
    mode: str = MODE_SEMI_AUTO
    signal: float = 98.0
    satellites: int = 12
    camera_active: bool = True
    speed: float = 0.0


@dataclass
class Mission:
    """Progress, timing and route of the current (or last) flight.

    route holds [lng, lat] pairs, route_progress mirrors progress / 100.
    """
    progress: float = 0.0
    elapsed: float = 0.0
    eta: float = 0.0
    distance: float = 0.0
    altitude: float = CRUISE_ALTITUDE_M
    speed: float = 0.0
    route_progress: float = 0.0
    route: list = field(default_factory=list)


def seed_orders():
    """Orders present when the simulator boots."""
    return [
        Order("ORD-4821", "Medical Supplies", "2.4 kg", "Warehouse A", "Hospital B"),
        Order("ORD-4822", "Electronics", "1.8 kg", "Depot C", "Office Park D"),
        Order("ORD-4823", "Food Package", "3.1 kg", "Kitchen Hub", "Residential Zone E"),
        Order("ORD-4824", "Documents", "0.5 kg", "HQ Tower", "Branch Office F"),
        Order("ORD-4825", "Lab Samples", "1.2 kg", "Lab Center G", "Research Facility H"),
        Order("ORD-4826", "Spare Parts", "4.0 kg", "Factory I", "Maintenance Bay J"),
    ]


def find_order(orders, order_id) -> Optional[Order]:
    return next((o for o in orders if o.id == order_id), None)
