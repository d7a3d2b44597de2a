from typing import List, Optional, Sequence


class ReachRadiusCache:
    """Latest reach-threshold radii, replaced wholesale on every update."""

    def __init__(self, logger):
        self.logger = logger
        self.ready = False
        self._radii: List[float] = []

    def replace(self, radii: Sequence[float], count_hint: Optional[int] = None):
        self._radii = [float(r) for r in radii]
        self.ready = True
        count = count_hint if count_hint is not None else len(self._radii)
        self.logger.info(f'Received reach threshold markers : {count}')

    def radii(self) -> List[float]:
        return list(self._radii)

    def __len__(self):
        return len(self._radii)
