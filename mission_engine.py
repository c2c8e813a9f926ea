# mission_engine.py
import copy
import logging
import math
import random
import re
import threading
from dataclasses import asdict

from config import (
    CRUISE_SPEED_KMH, CRUISE_ALTITUDE_M, PROGRESS_INCREMENT,
    BATTERY_DRAIN_PER_TICK, RETURN_HOME_PROGRESS, ROUTE_POINTS,
    DEFAULT_PAYLOAD_KG, TICK_SIMULATED_SECONDS
)
from fleet_models import (
    Aircraft, Mission, Order, find_order, seed_orders,
    ORDER_PENDING, ORDER_APPROVED, ORDER_IN_FLIGHT, ORDER_DELIVERED,
    AIRCRAFT_IDLE, AIRCRAFT_IN_FLIGHT
)
from locations import LocationTable
from route_planning import haversine_distance, generate_aerial_route, position_along_route

logger = logging.getLogger(__name__)

_WEIGHT_RE = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")
_ORDER_ID_RE = re.compile(r"^ORD-(\d+)$")


def parse_weight(text, default=DEFAULT_PAYLOAD_KG):
    """Leading number of a free-text quantity ("2.4 kg" -> 2.4); default if none or zero."""
    m = _WEIGHT_RE.match(text or "")
    if not m:
        return default
    value = float(m.group(1))
    return value or default


class MissionEngine:
    """
    Owns the order queue, the aircraft and the single active mission.

    Commands return True when they changed state and False when their
    preconditions were not met (in which case nothing was touched).
    advance() is the tick; a MissionScheduler calls it on a fixed period.
    """
    def __init__(self, locations=None, orders=None, aircraft=None, rng=None):
        self.locations = locations if locations is not None else LocationTable()
        self._orders = list(seed_orders() if orders is None else orders)
        self._aircraft = aircraft if aircraft is not None else Aircraft()
        self._mission = Mission()
        self._active_order_id = None
        self._rng = rng if rng is not None else random.Random()
        self._lock = threading.RLock()

    # ---- read surface ----

    @property
    def orders(self):
        with self._lock:
            return copy.deepcopy(self._orders)

    @property
    def aircraft(self):
        with self._lock:
            return copy.deepcopy(self._aircraft)

    @property
    def mission(self):
        with self._lock:
            return copy.deepcopy(self._mission)

    @property
    def active_mission_order_id(self):
        with self._lock:
            return self._active_order_id

    @property
    def is_active(self):
        with self._lock:
            return self._active_order_id is not None

    def get_order(self, order_id):
        with self._lock:
            order = find_order(self._orders, order_id)
            return copy.deepcopy(order)

    def aircraft_position(self):
        with self._lock:
            return position_along_route(self._mission.route, self._mission.route_progress)

    def snapshot(self):
        with self._lock:
            return {
                "orders": [asdict(o) for o in self._orders],
                "aircraft": asdict(self._aircraft),
                "mission": asdict(self._mission),
                "active_mission_order_id": self._active_order_id,
            }

    # ---- order commands ----

    def approve_order(self, order_id):
        with self._lock:
            order = find_order(self._orders, order_id)
            if not order:
                logger.debug("[approve_order] no order %s", order_id)
                return False
            order.status = ORDER_APPROVED
            logger.info("[approve_order] %s approved", order_id)
            return True

    def reject_order(self, order_id):
        with self._lock:
            before = len(self._orders)
            self._orders = [o for o in self._orders if o.id != order_id]
            removed = before - len(self._orders)
            if removed:
                logger.info("[reject_order] %s removed", order_id)
            else:
                logger.debug("[reject_order] no order %s", order_id)
            return bool(removed)

    def add_order(self, order: Order):
        with self._lock:
            self._orders.append(order)
            logger.info("[add_order] %s queued (%s -> %s)", order.id, order.pickup, order.delivery)
            return True

    def next_order_id(self):
        with self._lock:
            numbers = [int(m.group(1)) for m in
                       (_ORDER_ID_RE.match(o.id) for o in self._orders) if m]
            return f"ORD-{max(numbers, default=4820) + 1}"

    def create_order(self, package_type, weight, pickup, delivery):
        """Builds a Pending order with a fresh id and queues it."""
        with self._lock:
            order = Order(self.next_order_id(), package_type, weight, pickup, delivery)
            self.add_order(order)
            return copy.deepcopy(order)

    # ---- mission commands ----

    def start_mission(self, order_id):
        with self._lock:
            order = find_order(self._orders, order_id)
            if not order or order.status != ORDER_APPROVED:
                logger.debug("[start_mission] %s is missing or not approved", order_id)
                return False
            if self._active_order_id:
                logger.debug("[start_mission] %s already flying", self._active_order_id)
                return False

            pickup = self.locations.resolve(order.pickup)
            delivery = self.locations.resolve(order.delivery)
            if not pickup or not delivery:
                logger.debug("[start_mission] unknown location for %s", order_id)
                return False

            route = generate_aerial_route(pickup, delivery, ROUTE_POINTS)
            distance = haversine_distance(pickup[0], pickup[1], delivery[0], delivery[1])
            total_eta = round(distance / CRUISE_SPEED_KMH * 3600)
            weight = parse_weight(order.weight)

            self._active_order_id = order_id
            order.status = ORDER_IN_FLIGHT
            self._aircraft.status = AIRCRAFT_IN_FLIGHT
            self._aircraft.payload_weight = weight
            self._aircraft.speed = CRUISE_SPEED_KMH
            self._mission = Mission(
                progress=0.0,
                elapsed=0.0,
                eta=total_eta,
                distance=distance,
                altitude=CRUISE_ALTITUDE_M,
                speed=CRUISE_SPEED_KMH,
                route_progress=0.0,
                route=route,
            )
            logger.info("[start_mission] %s: %s -> %s, %.2f km, eta %ss, payload %.1f kg",
                        order_id, order.pickup, order.delivery, distance, total_eta, weight)
            return True

    def emergency_stop(self):
        with self._lock:
            if not self._active_order_id:
                return False
            order = find_order(self._orders, self._active_order_id)
            if order:
                order.status = ORDER_PENDING
            self._aircraft.status = AIRCRAFT_IDLE
            self._aircraft.payload_weight = 0.0
            self._mission = Mission()
            logger.info("[emergency_stop] %s aborted, order back to pending", self._active_order_id)
            self._active_order_id = None
            return True

    def return_home(self):
        """Fast-forwards progress; the following tick completes the flight."""
        with self._lock:
            if not self._active_order_id:
                return False
            progress = max(self._mission.progress, RETURN_HOME_PROGRESS)
            self._mission.progress = progress
            self._mission.route_progress = progress / 100
            logger.info("[return_home] %s progress -> %.1f%%", self._active_order_id, progress)
            return True

    def toggle_camera(self):
        with self._lock:
            self._aircraft.camera_active = not self._aircraft.camera_active
            return True

    # ---- tick ----

    def advance(self, delta_seconds=TICK_SIMULATED_SECONDS):
        """Applies one tick. Returns False when no mission is active."""
        with self._lock:
            if not self._active_order_id:
                return False
            self._advance_mission(delta_seconds)
            self._drain_aircraft()
            return True

    def _advance_mission(self, delta_seconds):
        m = self._mission
        new_progress = min(m.progress + PROGRESS_INCREMENT, 100.0)
        new_route_progress = new_progress / 100

        if new_progress >= 100:
            order = find_order(self._orders, self._active_order_id)
            if order:
                order.status = ORDER_DELIVERED
            self._aircraft.status = AIRCRAFT_IDLE
            self._aircraft.payload_weight = 0.0
            self._aircraft.speed = 0.0
            m.progress = 100.0
            m.route_progress = 1.0
            m.eta = 0.0
            m.speed = 0.0
            logger.info("[advance] %s delivered after %.0fs", self._active_order_id, m.elapsed)
            self._active_order_id = None
            return

        new_elapsed = m.elapsed + delta_seconds
        total_time = m.distance / (CRUISE_SPEED_KMH / 3600)
        m.progress = new_progress
        m.route_progress = new_route_progress
        m.elapsed = new_elapsed
        m.eta = max(0.0, total_time * (1 - new_route_progress))
        m.altitude = round(CRUISE_ALTITUDE_M + math.sin(new_elapsed * 0.3) * 8)
        m.speed = round(40 + self._rng.random() * 6)
        logger.debug("[advance] progress=%.1f eta=%.0f alt=%s speed=%s",
                     m.progress, m.eta, m.altitude, m.speed)

    def _drain_aircraft(self):
        a = self._aircraft
        a.battery = max(0.0, a.battery - BATTERY_DRAIN_PER_TICK)
        a.signal = min(100.0, max(85.0, a.signal + (self._rng.random() - 0.5) * 2))
        a.satellites = max(8, min(14, a.satellites + self._rng.randint(-1, 1)))
