"""
Georeferencing - raytracing of sonar pings through a sound velocity profile.
"""

from .errors import RaytracingError, DegenerateProfileError, NumericalDomainError
from .dto import (PingDTO, RaytracingConfigDTO, InstallationDTO, SidescanPingDTO,
                  LayerSegmentDTO, PlanarRaytraceDTO)
from .svp import SoundVelocityProfile, sound_speed_gradient
from .position import Position
from .coordinate_transform import sonar2cartesian, get_dcm, get_boresight_matrix
from .raytracing import Raytracer
from .data_provider import DataProvider

__all__ = [
    'RaytracingError',
    'DegenerateProfileError',
    'NumericalDomainError',
    'PingDTO',
    'RaytracingConfigDTO',
    'InstallationDTO',
    'SidescanPingDTO',
    'LayerSegmentDTO',
    'PlanarRaytraceDTO',
    'SoundVelocityProfile',
    'sound_speed_gradient',
    'Position',
    'sonar2cartesian',
    'get_dcm',
    'get_boresight_matrix',
    'Raytracer',
    'DataProvider',
]
