"""Parameter checks shared by the material constructors."""

from pathtracer.core.vector import Color


def check_albedo(albedo: Color) -> None:
    """Raise ValueError if any albedo component is outside [0, 1]."""
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
