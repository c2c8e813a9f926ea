import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Optional

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

from config import (
    API_HOST, API_PORT, LOG_LEVEL, LOCATIONS_PATH,
    TICK_INTERVAL, CRUISE_SPEED_KMH, CRUISE_ALTITUDE_M
)
from fleet_models import Order, ORDER_PENDING
from locations import load_locations
from mission_engine import MissionEngine
from mission_scheduler import MissionScheduler
from route_planning import route_geojson

logger = logging.getLogger(__name__)


class OrderIn(BaseModel):
    id: Optional[str] = None
    package_type: str
    weight: str
    pickup: str
    delivery: str
    status: str = ORDER_PENDING


def create_app(engine=None, scheduler=None):
    """Builds the API around one engine and its tick driver."""
    if engine is None:
        engine = MissionEngine(locations=load_locations(LOCATIONS_PATH))
    if scheduler is None:
        scheduler = MissionScheduler(engine)

    @asynccontextmanager
    async def lifespan(app):
        yield
        scheduler.stop()

    app = FastAPI(title="Drone Delivery Mission Simulator", version="1.0.0", lifespan=lifespan)
    app.state.engine = engine
    app.state.scheduler = scheduler

    @app.get("/")
    def index():
        return {
            "msg": "Single aircraft, single mission delivery simulator",
            "tick_interval": scheduler.interval,
            "cruise_speed_kmh": CRUISE_SPEED_KMH,
            "cruise_altitude_m": CRUISE_ALTITUDE_M,
        }

    @app.get("/state")
    def get_state():
        return engine.snapshot()

    @app.get("/locations")
    def list_locations():
        return engine.locations.as_dict()

    # Orders

    @app.get("/orders")
    def list_orders():
        return [asdict(o) for o in engine.orders]

    @app.post("/orders")
    def add_order(body: OrderIn):
        if body.id is None:
            order = engine.create_order(body.package_type, body.weight, body.pickup, body.delivery)
        else:
            order = Order(body.id, body.package_type, body.weight,
                          body.pickup, body.delivery, body.status)
            engine.add_order(order)
        return {"applied": True, "order": asdict(order)}

    @app.post("/orders/{order_id}/approve")
    def approve_order(order_id: str):
        return {"applied": engine.approve_order(order_id), "order_id": order_id}

    @app.post("/orders/{order_id}/reject")
    def reject_order(order_id: str):
        return {"applied": engine.reject_order(order_id), "order_id": order_id}

    @app.post("/orders/{order_id}/start")
    def start_mission(order_id: str):
        applied = scheduler.start_mission(order_id)
        return {"applied": applied, "order_id": order_id, "mission": asdict(engine.mission)}

    # Aircraft

    @app.get("/aircraft")
    def get_aircraft():
        return asdict(engine.aircraft)

    @app.post("/aircraft/camera")
    def toggle_camera():
        applied = engine.toggle_camera()
        return {"applied": applied, "camera_active": engine.aircraft.camera_active}

    # Mission

    @app.get("/mission")
    def get_mission():
        return {
            "active_mission_order_id": engine.active_mission_order_id,
            "mission": asdict(engine.mission),
        }

    @app.get("/mission/route")
    def get_route():
        return route_geojson(engine.mission.route, engine.aircraft_position())

    @app.post("/mission/emergency-stop")
    def emergency_stop():
        return {"applied": scheduler.emergency_stop()}

    @app.post("/mission/return-home")
    def return_home():
        return {"applied": engine.return_home()}

    return app


app = create_app()


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s"
    )
    logger.info("[main] serving on %s:%s, tick every %.2fs", API_HOST, API_PORT, TICK_INTERVAL)
    uvicorn.run(app, host=API_HOST, port=API_PORT, log_level=LOG_LEVEL.lower())
