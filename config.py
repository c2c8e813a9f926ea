# config.py
import os
from dotenv import load_dotenv

load_dotenv()  # Reads from .env

# Simulation clock
TICK_INTERVAL = float(os.getenv("TICK_INTERVAL", "0.6"))
TICK_SIMULATED_SECONDS = float(os.getenv("TICK_SIMULATED_SECONDS", "1.0"))

# Flight envelope
CRUISE_SPEED_KMH = float(os.getenv("CRUISE_SPEED_KMH", "42"))
CRUISE_ALTITUDE_M = float(os.getenv("CRUISE_ALTITUDE_M", "150"))
PROGRESS_INCREMENT = float(os.getenv("PROGRESS_INCREMENT", "1.5"))
BATTERY_DRAIN_PER_TICK = float(os.getenv("BATTERY_DRAIN_PER_TICK", "0.08"))
RETURN_HOME_PROGRESS = float(os.getenv("RETURN_HOME_PROGRESS", "95"))
ROUTE_POINTS = int(os.getenv("ROUTE_POINTS", "50"))
DEFAULT_PAYLOAD_KG = float(os.getenv("DEFAULT_PAYLOAD_KG", "2.0"))
MAX_PAYLOAD_KG = 5.0

LOCATIONS_PATH = os.getenv("LOCATIONS_PATH")

API_HOST = os.getenv("API_HOST", "127.0.0.1")
API_PORT = int(os.getenv("API_PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
