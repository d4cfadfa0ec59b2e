"""
SoundVelocityProfile - depth-ordered sound speed samples.
"""

import numpy as np
from typing import Iterable, Optional, Sequence, Tuple

from .errors import DegenerateProfileError


def sound_speed_gradient(z0: float, c0: float, z1: float, c1: float) -> float:
    """
    Calculates sound speed gradient between two samples.
    
    Args:
        z0, c0: Upper sample depth (m) and sound speed (m/s)
        z1, c1: Lower sample depth (m) and sound speed (m/s)
    
    Returns:
        Gradient, (m/s)/m
    
    Raises:
        DegenerateProfileError: if both samples are at the same depth
    """
    if z1 == z0:
        # happens when the svp contains multiple entries at the same depth
        raise DegenerateProfileError(z0, z1)
    
    return (c1 - c0) / (z1 - z0)


class SoundVelocityProfile:
    """
    Sound velocity profile.
    
    Holds depth-sorted samples and the precomputed gradient of every
    interval between consecutive samples. Depths are positive down.
    """
    
    def __init__(self, depths: Sequence[float], speeds: Sequence[float],
                 timestamp: int = 0, latitude: Optional[float] = None,
                 longitude: Optional[float] = None):
        """
        Initialize profile.
        
        Args:
            depths: Sample depths, m (strictly increasing)
            speeds: Sound speed at each depth, m/s
            timestamp: Profile time, micro-seconds since epoch
            latitude: Cast latitude, degrees (optional)
            longitude: Cast longitude, degrees (optional)
        """
        depths = np.array(depths, dtype=float)
        speeds = np.array(speeds, dtype=float)
        
        if depths.ndim != 1 or speeds.ndim != 1:
            raise ValueError("depths and speeds must be 1D")
        if len(depths) == 0:
            raise ValueError("Sound velocity profile needs at least one sample")
        if len(depths) != len(speeds):
            raise ValueError(f"depths ({len(depths)}) and speeds ({len(speeds)}) must have the same length")
        if np.any(speeds <= 0):
            raise ValueError("Sound speeds must be positive")
        
        gradient = np.empty(len(depths) - 1)
        for i in range(len(depths) - 1):
            if depths[i + 1] < depths[i]:
                raise ValueError(
                    f"Sound velocity profile depths must be increasing: {depths[i]} then {depths[i + 1]}"
                )
            gradient[i] = sound_speed_gradient(depths[i], speeds[i], depths[i + 1], speeds[i + 1])
        
        for array in (depths, speeds, gradient):
            array.setflags(write=False)
        
        self._depths = depths
        self._speeds = speeds
        self._gradient = gradient
        self.timestamp = timestamp
        self.latitude = latitude
        self.longitude = longitude
    
    @classmethod
    def from_samples(cls, samples: Iterable[Tuple[float, float]], **kwargs) -> 'SoundVelocityProfile':
        """Builds a profile from (depth, speed) pairs."""
        samples = list(samples)
        depths = [depth for depth, _ in samples]
        speeds = [speed for _, speed in samples]
        return cls(depths, speeds, **kwargs)
    
    @property
    def depths(self) -> np.ndarray:
        return self._depths
    
    @property
    def speeds(self) -> np.ndarray:
        return self._speeds
    
    @property
    def sound_speed_gradient(self) -> np.ndarray:
        """Gradient of each interval, (m/s)/m. Has size - 1 entries."""
        return self._gradient
    
    @property
    def size(self) -> int:
        return len(self._depths)
    
    def __len__(self) -> int:
        return self.size
    
    def get_layer_index_for_depth(self, depth: float) -> int:
        """
        Finds the first sample below a depth.
        
        A sample lying exactly at the queried depth counts as already
        reached, so the returned sample is always strictly deeper.
        
        Args:
            depth: Query depth, m
        
        Returns:
            Sample index, or size if depth is at or below the deepest sample
        """
        return int(np.searchsorted(self._depths, depth, side='right'))
    
    def __repr__(self) -> str:
        return f"SoundVelocityProfile(size={self.size}, depths=[{self._depths[0]}, {self._depths[-1]}])"
