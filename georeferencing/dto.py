"""
DTO (Data Transfer Objects) for data transfer between modules.
"""

from typing import List, Tuple
import numpy as np
from pydantic import BaseModel, Field, validator


class PingDTO(BaseModel):
    """Single multibeam ping (one beam) as seen by the raytracer."""
    timestamp: int = Field(default=0, ge=0, description="Ping time, micro-seconds since epoch")
    along_track_angle: float = Field(..., ge=-90, le=90, description="Along-track beam angle, degrees")
    across_track_angle: float = Field(..., ge=-90, le=90, description="Across-track beam angle, degrees")
    two_way_travel_time: float = Field(..., ge=0, description="Round-trip acoustic travel time, s")
    surface_sound_speed: float = Field(..., gt=0, description="Sound speed at the transducer, m/s")
    transducer_depth: float = Field(default=0.0, description="Transducer depth, m (positive down)")
    
    @validator('two_way_travel_time', 'surface_sound_speed', 'transducer_depth')
    def validate_finite(cls, v):
        if not np.isfinite(v):
            raise ValueError("value must be finite")
        return v
    
    @property
    def one_way_travel_time(self) -> float:
        """Half of the round-trip travel time, s."""
        return self.two_way_travel_time / 2.0


class RaytracingConfigDTO(BaseModel):
    """Raytracing parameters."""
    gradient_epsilon: float = Field(
        default=1e-6,
        gt=0,
        description="Gradient magnitude below which a layer is treated as constant celerity, (m/s)/m"
    )


class InstallationDTO(BaseModel):
    """Sonar installation (mounting) parameters."""
    name: str = Field(default="", description="Installation name (optional)")
    boresight_roll: float = Field(default=0.0, ge=-180, le=180, description="Boresight roll, degrees")
    boresight_pitch: float = Field(default=0.0, ge=-90, le=90, description="Boresight pitch, degrees")
    boresight_yaw: float = Field(default=0.0, ge=-180, le=360, description="Boresight yaw, degrees")


class SidescanPingDTO(BaseModel):
    """Raw sidescan samples for one channel."""
    samples: List[float] = Field(default_factory=list, description="Sample amplitudes (all sample types stored as float)")
    distance_per_sample: float = Field(..., gt=0, description="Slant range covered by one sample, m")
    channel_number: int = Field(default=0, ge=0, description="Sidescan channel number")
    
    @property
    def slant_ranges(self) -> np.ndarray:
        """Slant range of each sample, m."""
        return np.arange(len(self.samples)) * self.distance_per_sample


class LayerSegmentDTO(BaseModel):
    """Ray displacement across one (possibly partial) layer."""
    delta_r: float = Field(..., description="Horizontal displacement, m")
    delta_z: float = Field(..., description="Vertical displacement, m (positive down)")
    travel_time: float = Field(..., ge=0, description="One-way travel time spent in the layer, s")


class PlanarRaytraceDTO(BaseModel):
    """Raytracing result in the (range, depth) plane of the ray."""
    delta_r: float = Field(..., description="Total horizontal displacement, m")
    delta_z: float = Field(..., description="Total vertical displacement, m (positive down)")
    layers: Tuple[LayerSegmentDTO, ...] = Field(default=(), description="Per-layer segments, last one is the partial layer")
    
    @property
    def vector(self) -> np.ndarray:
        """Aggregate (range, depth) as a numpy vector."""
        return np.array([self.delta_r, self.delta_z])
    
    @property
    def total_travel_time(self) -> float:
        """Sum of the layer travel times, s."""
        return float(sum(layer.travel_time for layer in self.layers))
