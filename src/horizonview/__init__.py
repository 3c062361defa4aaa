from horizonview.camera.frame import FrameBuilder
from horizonview.errors import DomainError, FrameDegeneracyError, HorizonViewError, ParameterError
from horizonview.observer import ObserverState, OrbitalMotionIntegrator
from horizonview.shader import QUALITY_STEPS, ShaderParameters, ShaderTemplateCompiler, compile_template
from horizonview.simulation import SimulationConfig, SimulationContext

__version__ = "0.1.0"

__all__ = [
    "QUALITY_STEPS",
    "DomainError",
    "FrameBuilder",
    "FrameDegeneracyError",
    "HorizonViewError",
    "ObserverState",
    "OrbitalMotionIntegrator",
    "ParameterError",
    "ShaderParameters",
    "ShaderTemplateCompiler",
    "SimulationConfig",
    "SimulationContext",
    "compile_template",
]
