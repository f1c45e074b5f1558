from pathtrace.renderer.integrator import ray_color, sky_color
from pathtrace.renderer.framebuffer import Framebuffer
from pathtrace.renderer.raytracer import Renderer, RenderJob, render_rows
