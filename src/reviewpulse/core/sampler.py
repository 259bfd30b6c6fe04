"""Uniform random sampling of review texts."""

import random
from typing import Callable, Optional, Sequence

from .errors import EmptyDatasetError


class Sampler:
    """Pick one review uniformly at random.

    ``index_source`` receives the dataset length and must return an index in
    ``[0, length)``. Pass one in (or a ``seed``) for deterministic tests.
    """

    def __init__(self, index_source: Optional[Callable[[int], int]] = None, seed: Optional[int] = None):
        if index_source is None:
            rng = random.Random(seed)
            index_source = rng.randrange
        self._index_source = index_source

    def pick(self, dataset: Sequence[str]) -> str:
        if not dataset:
            raise EmptyDatasetError("Cannot sample from an empty dataset")
        return dataset[self._index_source(len(dataset))]
