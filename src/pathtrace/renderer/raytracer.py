# renderer/raytracer.py
import logging
import math
import os
import time
from concurrent import futures
from functools import partial
from typing import List, NamedTuple, Optional, Sequence, Tuple
import numpy as np
from pathtrace.camera.camera import Camera
from pathtrace.config import RenderConfig
from pathtrace.core.utils import fresh_seed, make_rng
from pathtrace.core.vector import Vector3
from pathtrace.geometry.hittable import Hittable
from pathtrace.geometry.world import HittableList
from pathtrace.renderer.framebuffer import Framebuffer
from pathtrace.renderer.integrator import ray_color

logger = logging.getLogger(__name__)

class RenderJob(NamedTuple):
    """Everything a worker needs to render rows. Read-only once created."""
    world: Hittable
    camera: Camera
    background: Optional[Vector3]
    width: int
    height: int
    samples_per_pixel: int
    max_depth: int
    seed: int

def _clamp_sample(x: float) -> float:
    # NaN fails both comparisons, so it is dropped together with inf and negatives.
    return x if 0.0 <= x < math.inf else 0.0

def render_rows(job: RenderJob, rows: Sequence[int]) -> List[Tuple[int, np.ndarray]]:
    """
    Render the given image rows. Row j is rendered with its own generator
    seeded from (job.seed, j), so its pixels do not depend on which worker
    runs it or on what else that worker rendered before.
    """
    width, height = job.width, job.height
    spp = job.samples_per_pixel
    scale = 1.0 / spp
    s_den = max(width - 1, 1)
    t_den = max(height - 1, 1)
    camera = job.camera
    world = job.world
    background = job.background
    max_depth = job.max_depth

    results = []
    for j in rows:
        rng = make_rng(job.seed, j)
        # Row 0 is the top of the image, which is t = 1 on the viewport.
        y = height - 1 - j
        out = np.empty((width, 3), dtype=np.float64)
        for i in range(width):
            r = g = b = 0.0
            for _ in range(spp):
                s = (i + rng.random()) / s_den
                t = (y + rng.random()) / t_den
                color = ray_color(camera.get_ray(s, t, rng), background, world, max_depth, rng)
                r += _clamp_sample(color.x)
                g += _clamp_sample(color.y)
                b += _clamp_sample(color.z)
            out[i, 0] = r * scale
            out[i, 1] = g * scale
            out[i, 2] = b * scale
        results.append((j, out))
    return results

# Per-process copy of the job, set once by the pool initializer so the scene
# is pickled once per worker rather than once per chunk.
_worker_job: Optional[RenderJob] = None

def _init_worker(job: RenderJob):
    global _worker_job
    _worker_job = job

def _render_chunk_in_worker(rows: Sequence[int]) -> List[Tuple[int, np.ndarray]]:
    return render_rows(_worker_job, rows)

class Renderer:
    """
    Renders a scene into a Framebuffer, spreading chunks of rows over a pool
    of workers. The output for a given seed does not depend on the number of
    workers, the chunk size or the executor type.
    """
    def __init__(self, config: RenderConfig):
        self.config = config

    @property
    def height(self) -> int:
        return self.config.height

    def prepare_world(self, world: Hittable, camera: Camera) -> Hittable:
        """
        Build the BVH unless the scene already has one covering the camera
        shutter. An empty scene is left as is: every ray misses and sees the
        background.
        """
        if isinstance(world, HittableList):
            bvh = world.bvh_root
            if len(world) == 0:
                logger.warning("Scene is empty; rendering background only")
            elif bvh is None:
                world.build_bvh(camera.time0, camera.time1)
            elif not bvh.covers(camera.time0, camera.time1):
                logger.info("Rebuilding BVH: built for [%g, %g], shutter is [%g, %g]",
                            bvh.time0, bvh.time1, camera.time0, camera.time1)
                world.build_bvh(camera.time0, camera.time1)
        return world

    def row_chunks(self) -> List[List[int]]:
        n = self.config.rows_per_chunk
        return [list(range(start, min(start + n, self.height)))
                for start in range(0, self.height, n)]

    def worker_count(self, n_chunks: int) -> int:
        workers = self.config.workers or os.cpu_count() or 1
        return max(1, min(workers, n_chunks))

    def render(self, world: Hittable, camera: Camera) -> Framebuffer:
        config = self.config
        world = self.prepare_world(world, camera)
        if abs(camera.aspect_ratio - config.aspect_ratio) > 1e-3:
            logger.warning("Camera aspect ratio %.4f does not match image %dx%d",
                           camera.aspect_ratio, config.width, config.height)

        seed = config.seed if config.seed is not None else fresh_seed()
        job = RenderJob(world, camera, config.background, config.width, config.height,
                        config.samples_per_pixel, config.max_depth, seed)
        framebuffer = Framebuffer(config.width, config.height)
        chunks = self.row_chunks()
        workers = self.worker_count(len(chunks))

        logger.info("Rendering %dx%d, %d spp, depth %d, seed %d with %d %s worker(s)",
                    config.width, config.height, config.samples_per_pixel, config.max_depth,
                    seed, workers, config.executor)
        start = time.perf_counter()

        if config.executor == "serial" or workers == 1:
            for rows in chunks:
                self._collect(framebuffer, render_rows(job, rows))
        elif config.executor == "thread":
            with futures.ThreadPoolExecutor(max_workers=workers) as executor:
                for result in executor.map(partial(render_rows, job), chunks):
                    self._collect(framebuffer, result)
        else:
            with futures.ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                             initargs=(job,)) as executor:
                for result in executor.map(_render_chunk_in_worker, chunks):
                    self._collect(framebuffer, result)

        logger.info("Rendered %d rows in %.2fs", config.height, time.perf_counter() - start)
        return framebuffer

    @staticmethod
    def _collect(framebuffer: Framebuffer, rows: List[Tuple[int, np.ndarray]]):
        for j, colors in rows:
            framebuffer.write_row(j, colors)
        logger.debug("Finished rows %d-%d", rows[0][0], rows[-1][0])
