# geometry/bvh.py
import logging
from typing import List, Optional, Sequence
import numpy as np
from pathtrace.core.aabb import AABB
from pathtrace.core.ray import Ray
from pathtrace.geometry.hittable import Hittable, HitRecord

logger = logging.getLogger(__name__)

class EmptySceneError(ValueError):
    """Raised when a BVH is requested over no objects at all."""

class BVHNode(Hittable):
    """
    Bounding volume hierarchy over a fixed list of hittables.

    The tree lives in flat parallel lists (an arena) rather than as linked
    node objects: node i has box ``boxes[i]`` and, for interior nodes, child
    indices ``left[i]`` / ``right[i]``. Leaves have ``left[i] == -1`` and
    point at ``objects[items[i]]``. Node 0 is the root. Once built the
    structure is never modified, so it can be shared by any number of render
    workers.

    Boxes enclose moving objects only over [time0, time1]; rays cast at
    other times must not be tested against this tree.
    """
    def __init__(self, objects: List[Hittable], boxes: List[AABB], left: List[int],
                 right: List[int], items: List[int], time0: float = 0.0, time1: float = 0.0):
        self.objects = objects
        self.boxes = boxes
        self.left = left
        self.right = right
        self.items = items
        self.time0 = time0
        self.time1 = time1

    @classmethod
    def build(cls, objects: Sequence[Hittable], time0: float = 0.0, time1: float = 0.0) -> "BVHNode":
        """
        Builds the hierarchy with a median split along the axis where the
        object centroids are most spread out.
        """
        if len(objects) == 0:
            raise EmptySceneError("cannot build a BVH over an empty list of hittables")

        objects = list(objects)
        object_boxes = [obj.bounding_box(time0, time1) for obj in objects]
        centroids = [box.centroid() for box in object_boxes]

        boxes: List[AABB] = []
        left: List[int] = []
        right: List[int] = []
        items: List[int] = []

        def new_node() -> int:
            boxes.append(None)
            left.append(-1)
            right.append(-1)
            items.append(-1)
            return len(boxes) - 1

        # Explicit work stack instead of recursion: large scenes would
        # otherwise run into the interpreter's recursion limit.
        root = new_node()
        pending = [(root, list(range(len(objects))))]
        interior = []
        while pending:
            node, indices = pending.pop()
            if len(indices) == 1:
                items[node] = indices[0]
                boxes[node] = object_boxes[indices[0]]
                continue

            centroid_bounds = AABB.point(centroids[indices[0]])
            for i in indices[1:]:
                centroid_bounds = AABB.surrounding_box(centroid_bounds, AABB.point(centroids[i]))
            axis = centroid_bounds.longest_axis()

            # Sort by centroid; ties (and NaNs) fall back to insertion order.
            indices.sort(key=lambda i: (_sort_key(centroids[i][axis]), i))
            mid = len(indices) // 2

            left[node] = new_node()
            right[node] = new_node()
            pending.append((left[node], indices[:mid]))
            pending.append((right[node], indices[mid:]))
            interior.append(node)

        # Children always have larger indices than their parent, so filling
        # interior boxes in reverse creation order sees finished children.
        for node in reversed(interior):
            boxes[node] = AABB.surrounding_box(boxes[left[node]], boxes[right[node]])

        logger.info("Built BVH with %d nodes over %d objects for t in [%g, %g]",
                    len(boxes), len(objects), time0, time1)
        return cls(objects, boxes, left, right, items, time0, time1)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        boxes = self.boxes
        left = self.left
        right = self.right
        closest = None
        stack = [0]
        while stack:
            node = stack.pop()
            if boxes[node].hit(ray, t_min, t_max) is None:
                continue
            if left[node] < 0:
                rec = self.objects[self.items[node]].hit(ray, t_min, t_max)
                if rec is not None:
                    # Tighten the search interval for everything still queued.
                    t_max = rec.t
                    closest = rec
                continue
            # Right is pushed first so the left child is tested first.
            stack.append(right[node])
            stack.append(left[node])
        return closest

    def covers(self, time0: float, time1: float) -> bool:
        """
        True when the tree was built for an interval containing [time0, time1].
        """
        return self.time0 <= time0 and time1 <= self.time1

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        return self.boxes[0]

    def __len__(self) -> int:
        return len(self.boxes)

    def depth(self) -> int:
        """
        Number of nodes on the longest root-to-leaf path.
        """
        best = 0
        stack = [(0, 1)]
        while stack:
            node, d = stack.pop()
            best = max(best, d)
            if self.left[node] >= 0:
                stack.append((self.left[node], d + 1))
                stack.append((self.right[node], d + 1))
        return best

    def to_arrays(self):
        """
        Export the flattened tree as NumPy arrays.

        Returns six arrays:
          - bbox_min: (n,3) array of minimum coordinates.
          - bbox_max: (n,3) array of maximum coordinates.
          - left_indices: (n,) array (index of left child, or -1 for a leaf).
          - right_indices: (n,) array (index of right child, or -1 for a leaf).
          - is_leaf: (n,) int array (1 if leaf, 0 otherwise).
          - object_indices: (n,) array of the object index for leaf nodes (or -1).
        """
        n = len(self.boxes)
        bbox_min = np.array([[b.minimum.x, b.minimum.y, b.minimum.z] for b in self.boxes],
                            dtype=np.float64).reshape(n, 3)
        bbox_max = np.array([[b.maximum.x, b.maximum.y, b.maximum.z] for b in self.boxes],
                            dtype=np.float64).reshape(n, 3)
        left_indices = np.array(self.left, dtype=np.int32)
        right_indices = np.array(self.right, dtype=np.int32)
        is_leaf = (left_indices < 0).astype(np.int32)
        object_indices = np.array(self.items, dtype=np.int32)
        return bbox_min, bbox_max, left_indices, right_indices, is_leaf, object_indices

def _sort_key(value: float) -> float:
    # NaN keys would make the ordering inconsistent; push them to the end.
    return value if value == value else float("inf")
