# materials/blank.py
from pathtracer.materials.material import Material


class Blank(Material):
    """
    Material that neither scatters nor emits. Placeholder for surfaces that
    must never shade, such as the boundary inside a constant medium.
    """
    def scatter(self, ray_in, rec):
        return None
