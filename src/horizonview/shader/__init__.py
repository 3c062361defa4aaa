from horizonview.shader.compiler import (
    ShaderProgram,
    ShaderTemplateCompiler,
    compile_template,
    template_flags,
)
from horizonview.shader.parameters import (
    QUALITY_STEPS,
    ObserverParameters,
    PlanetParameters,
    ShaderParameters,
    steps_for_quality,
)

__all__ = [
    "QUALITY_STEPS",
    "ObserverParameters",
    "PlanetParameters",
    "ShaderParameters",
    "ShaderProgram",
    "ShaderTemplateCompiler",
    "compile_template",
    "steps_for_quality",
    "template_flags",
]
