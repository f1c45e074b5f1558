# core/utils.py
import random
import numpy as np
from pathtrace.core.vector import Vector3

def make_rng(seed: int, stream: int) -> random.Random:
    """
    Returns an independent generator for one unit of work (an image row).
    The same (seed, stream) pair always yields the same sequence, no matter
    which worker ends up running it.
    """
    state = np.random.SeedSequence(seed, spawn_key=(stream,)).generate_state(2, dtype=np.uint32)
    return random.Random((int(state[0]) << 32) | int(state[1]))

def fresh_seed() -> int:
    """
    Draws a base seed from OS entropy for renders that did not ask for one.
    """
    return int(np.random.SeedSequence().generate_state(1, dtype=np.uint32)[0])

def random_in_unit_sphere(rng: random.Random) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.length_squared() < 1.0:
            return p

def random_unit_vector(rng: random.Random) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        l2 = p.length_squared()
        # Points too close to the center lose precision when normalized.
        if l2 > 1e-160:
            return p / l2 ** 0.5

def random_in_unit_disk(rng: random.Random) -> Vector3:
    """
    Returns a random point inside the unit disk on the xy-plane.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), 0.0)
        if p.x * p.x + p.y * p.y < 1.0:
            return p
