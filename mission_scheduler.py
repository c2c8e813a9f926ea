import logging
import threading

from config import TICK_INTERVAL, TICK_SIMULATED_SECONDS

logger = logging.getLogger(__name__)


class MissionScheduler:
    """
    Calls engine.advance() every `interval` seconds while a mission is active.
    The loop ends by itself once the engine has no active mission, so a
    completed delivery disarms the driver without anyone calling stop().
    """
    def __init__(self, engine, interval=TICK_INTERVAL, simulated_seconds=TICK_SIMULATED_SECONDS):
        self.engine = engine
        self.interval = interval
        self.simulated_seconds = simulated_seconds

        self.thread = None
        self._stop_event = None
        # Guards arming against the loop's decision to exit.
        self._lock = threading.Lock()

    @property
    def running(self):
        return self.thread is not None and self.thread.is_alive() and not self._stop_event.is_set()

    def start(self):
        """Arms the background tick thread. No-op if already running or idle."""
        with self._lock:
            if self.running or not self.engine.is_active:
                return False
            self._stop_event = threading.Event()
            self.thread = threading.Thread(
                target=self._update_loop, args=(self._stop_event,),
                name="mission-scheduler", daemon=True
            )
            self.thread.start()
        logger.info("[start] tick driver armed (every %.2fs)", self.interval)
        return True

    def stop(self):
        with self._lock:
            if self._stop_event is None:
                return
            self._stop_event.set()
            thread = self.thread
        if thread and thread is not threading.current_thread():
            thread.join()
        logger.info("[stop] tick driver disarmed")

    def _update_loop(self, stop_event):
        while not stop_event.wait(self.interval):
            self.engine.advance(self.simulated_seconds)
            with self._lock:
                if not self.engine.is_active:
                    stop_event.set()
                    logger.info("[_update_loop] mission finished, driver idle")
                    break

    # Commands that change whether a mission is active also arm/disarm the driver.

    def start_mission(self, order_id):
        applied = self.engine.start_mission(order_id)
        if applied:
            self.start()
        return applied

    def emergency_stop(self):
        self.stop()
        return self.engine.emergency_stop()
