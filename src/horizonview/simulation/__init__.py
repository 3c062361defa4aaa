from horizonview.simulation.clock import FrameClock
from horizonview.simulation.commands import AppliedChanges, ParameterChange, ParameterQueue
from horizonview.simulation.config import SimulationConfig, configure_logging
from horizonview.simulation.context import FrameUpdate, SimulationContext

__all__ = [
    "AppliedChanges",
    "FrameClock",
    "FrameUpdate",
    "ParameterChange",
    "ParameterQueue",
    "SimulationConfig",
    "SimulationContext",
    "configure_logging",
]
