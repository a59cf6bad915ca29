"""Python ray caster for a single-sphere scene.

This package casts one ray per pixel from a fixed camera through an image
plane and shades it, with support for:
- A 3-component vector algebra with separate Point and Color kinds
- Closed-form ray-sphere intersection
- Sky-gradient, surface-normal, and uv test-pattern shading
- A pure-Python renderer and a Taichi kernel backend
- PPM (P3) and PNG output

Subpackages:
    core: Vector algebra, rays, shading, and the pixel loop
    geometry: The sphere primitive and its intersection test
    camera: Viewport camera with ray generation
    preview: Image export and Matplotlib preview
"""

__version__ = "0.1.0"
