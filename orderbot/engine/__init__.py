"""Engine layer: scheduler, OrderEngine facade, headless simulation loop."""

from orderbot.engine.scheduler import Scheduler
from orderbot.engine.order_engine import OrderEngine
from orderbot.engine.sim_loop import SimulationLoop

__all__ = ["OrderEngine", "Scheduler", "SimulationLoop"]
