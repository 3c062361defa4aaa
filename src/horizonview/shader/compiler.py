from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from horizonview.shader.template import Template, parse_template

if TYPE_CHECKING:
    from horizonview.shader.parameters import ShaderParameters

logger = logging.getLogger(__name__)


def template_flags(params: ShaderParameters) -> dict[str, bool]:
    """Boolean section bindings, in the order they are resolved.

    ``fast`` quality always drops the planet, whatever ``planet.enabled`` says.
    """
    return {
        "planetEnabled": params.planet.enabled and params.quality != "fast",
        "observerMotion": params.observer.motion,
        "light_travel_time": params.light_travel_time,
        "lorentz_contraction": params.lorentz_contraction,
        "gravitational_time_dilation": params.gravitational_time_dilation,
        "doppler_shift": params.doppler_shift,
        "aberration": params.aberration,
        "beaming": params.beaming,
        "accretion_disk": params.accretion_disk,
    }


def template_scalars(params: ShaderParameters) -> dict[str, Any]:
    return {"n_steps": params.n_steps}


class ShaderTemplateCompiler:
    """Compile a shader template against ShaderParameters.

    The template is parsed once at construction; ``compile`` is a pure tree walk, so
    repeated calls with equal parameters return identical text.
    """

    def __init__(self, template_text: str) -> None:
        self.template_text = template_text
        self.template: Template = parse_template(template_text)

    def compile(self, params: ShaderParameters) -> str:
        return self.template.render(template_flags(params), template_scalars(params))


def compile_template(template_text: str, params: ShaderParameters) -> str:
    """One-shot form of :meth:`ShaderTemplateCompiler.compile`."""
    return ShaderTemplateCompiler(template_text).compile(params)


class ShaderProgram:
    """Compiled-program cache guarded by a dirty flag.

    ``needs_update`` starts set so the first ``refresh`` compiles; afterwards only
    ``invalidate`` sets it again.
    """

    def __init__(self, compiler: ShaderTemplateCompiler) -> None:
        self.compiler = compiler
        self.needs_update = True
        self.text: str | None = None
        self.compile_count = 0

    def invalidate(self) -> None:
        self.needs_update = True

    def refresh(self, params: ShaderParameters) -> str | None:
        """Recompile if dirty. Returns the new text, or None when the cache was current."""
        if not self.needs_update and self.text is not None:
            return None

        self.text = self.compiler.compile(params)
        self.needs_update = False
        self.compile_count += 1
        logger.debug(
            "compiled shader program #%d (%d chars, quality=%s, flags=%s)",
            self.compile_count,
            len(self.text),
            params.quality,
            template_flags(params),
        )
        return self.text

    def current(self, params: ShaderParameters) -> str:
        """Return the program text, compiling first if it is stale."""
        fresh = self.refresh(params)
        return fresh if fresh is not None else str(self.text)
