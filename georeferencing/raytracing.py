"""
Raytracing - propagation of a sonar beam through a stratified water column.

The water column is described by a sound velocity profile. Each interval
between two samples is an isogradient layer: when its gradient is
negligible the ray is a straight line, otherwise it is a circular arc
whose curvature follows from Snell's law.
"""

import logging
import numpy as np
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from .coordinate_transform import sonar2cartesian, check_rotation_matrix
from .dto import PingDTO, RaytracingConfigDTO, LayerSegmentDTO, PlanarRaytraceDTO
from .errors import NumericalDomainError
from .svp import SoundVelocityProfile, sound_speed_gradient

logger = logging.getLogger(__name__)

SegmentSink = Callable[[LayerSegmentDTO], None]


def _grazing_sine(cos_bn: float) -> float:
    """sin(Bn) from cos(Bn), refusing cosines outside [-1, 1]."""
    if abs(cos_bn) > 1.0:
        raise NumericalDomainError(
            f"Grazing angle cosine {cos_bn:.12f} is outside [-1, 1]: "
            f"surface sound speed and profile are inconsistent for this ray"
        )
    return np.sqrt(1.0 - cos_bn**2)


def _check_finite(**values: float):
    for name, value in values.items():
        if not np.isfinite(value):
            raise NumericalDomainError(f"Raytracing produced a non-finite {name}: {value}")


@dataclass
class _RayState:
    """Cumulated one-way travel time and displacement of the ray."""
    travel_time: float = 0.0
    delta_r: float = 0.0
    delta_z: float = 0.0
    committed_layers: int = 0

    def commit(self, delta_z: float, delta_r: float, delta_t: float,
               segment_sink: Optional[SegmentSink] = None):
        self.delta_r += delta_r
        self.delta_z += delta_z
        self.travel_time += delta_t
        self.committed_layers += 1
        if segment_sink is not None:
            segment_sink(LayerSegmentDTO(delta_r=delta_r, delta_z=delta_z, travel_time=delta_t))


class Raytracer:
    """
    Ray tracer for multibeam and sidescan georeferencing.

    Computes where the acoustic return of a ping lies relative to the
    transducer, given the sound velocity profile and the orientation
    of the sonar. All depths and vertical displacements are positive down.
    """

    def __init__(self, config: Optional[RaytracingConfigDTO] = None):
        """
        Initialize ray tracer.

        Args:
            config: Raytracing parameters (defaults if None)
        """
        self.config = config if config is not None else RaytracingConfigDTO()

    @property
    def gradient_epsilon(self) -> float:
        return self.config.gradient_epsilon

    @staticmethod
    def constant_celerity_ray_tracing(z0: float, z1: float, c: float,
                                      snell_constant: float) -> Tuple[float, float, float]:
        """
        Straight ray across a layer of constant sound speed.

        Args:
            z0: Layer top depth, m
            z1: Layer bottom depth, m
            c: Sound speed in the layer, m/s
            snell_constant: cos(B0)/c0 of the ray, s/m

        Returns:
            Tuple (delta_z, delta_r, delta_t)
        """
        cos_bn = snell_constant * c
        sin_bn = _grazing_sine(cos_bn)
        if sin_bn == 0.0:
            raise NumericalDomainError(f"Horizontal ray can't cross layer [{z0}, {z1}] m")

        delta_z = z1 - z0
        delta_t = delta_z / (c * sin_bn)
        delta_r = cos_bn * delta_t * c
        return delta_z, delta_r, delta_t

    @staticmethod
    def constant_gradient_ray_tracing(c0: float, c1: float, gradient: float,
                                      snell_constant: float) -> Tuple[float, float, float]:
        """
        Circular ray across a layer with a linear sound speed gradient.

        Args:
            c0: Sound speed at layer top, m/s
            c1: Sound speed at layer bottom, m/s
            gradient: Sound speed gradient, (m/s)/m (non-zero)
            snell_constant: cos(B0)/c0 of the ray, s/m

        Returns:
            Tuple (delta_z, delta_r, delta_t)
        """
        cos_bnm1 = snell_constant * c0
        cos_bn = snell_constant * c1
        sin_bnm1 = _grazing_sine(cos_bnm1)
        sin_bn = _grazing_sine(cos_bn)

        if snell_constant == 0.0:
            # vertical ray, infinite radius of curvature
            delta_z = (c1 - c0) / gradient
            delta_r = 0.0
            delta_t = abs(np.log(c1 / c0) / gradient)
        else:
            radius_of_curvature = 1.0 / (snell_constant * gradient)

            log_argument = (c1 / c0) * ((1.0 + sin_bnm1) / (1.0 + sin_bn))
            if log_argument <= 0.0:
                raise NumericalDomainError(f"Travel time logarithm argument {log_argument} is not positive")

            delta_t = abs((1.0 / abs(gradient)) * np.log(log_argument))
            delta_z = radius_of_curvature * (cos_bn - cos_bnm1)
            delta_r = radius_of_curvature * (sin_bnm1 - sin_bn)

        _check_finite(delta_z=delta_z, delta_r=delta_r, delta_t=delta_t)
        return delta_z, delta_r, delta_t

    @staticmethod
    def last_layer_propagation(travel_time: float, c: float,
                               snell_constant: float) -> Tuple[float, float]:
        """
        Straight ray for the time left once no full layer fits.

        Args:
            travel_time: Remaining one-way travel time, s
            c: Sound speed in the last layer, m/s
            snell_constant: cos(B0)/c0 of the ray, s/m

        Returns:
            Tuple (delta_z, delta_r)
        """
        cos_bn = snell_constant * c
        sin_bn = _grazing_sine(cos_bn)
        delta_r = c * travel_time * cos_bn
        delta_z = c * travel_time * sin_bn
        return delta_z, delta_r

    @staticmethod
    def launch_vector_parameters(ping: PingDTO, boresight_matrix: np.ndarray,
                                 imu2nav: np.ndarray) -> Tuple[float, float, float]:
        """
        Launch direction of the beam in navigation frame.

        Args:
            ping: Ping with beam angles
            boresight_matrix: Sonar to IMU rotation (3x3)
            imu2nav: IMU to navigation (NED) rotation (3x3)

        Returns:
            Tuple (sin_az, cos_az, beta0): azimuth terms of the horizontal
            component and initial grazing angle in radians
        """
        boresight_matrix = check_rotation_matrix(boresight_matrix, "boresight_matrix")
        imu2nav = check_rotation_matrix(imu2nav, "imu2nav")

        launch_vector_sonar = sonar2cartesian(ping.along_track_angle, ping.across_track_angle, 1.0)
        launch_vector_sonar = launch_vector_sonar / np.linalg.norm(launch_vector_sonar)

        # raytracing occurs in navigation frame
        launch_vector_nav = imu2nav @ (boresight_matrix @ launch_vector_sonar)

        v_norm = np.hypot(launch_vector_nav[0], launch_vector_nav[1])

        # NED convention
        sin_az = launch_vector_nav[0] / v_norm if v_norm > 0 else 0.0
        cos_az = launch_vector_nav[1] / v_norm if v_norm > 0 else 0.0
        beta0 = np.arcsin(np.clip(launch_vector_nav[2], -1.0, 1.0))
        return sin_az, cos_az, beta0

    def _can_cross_layer(self, c0: float, c1: float, gradient: float, snell_constant: float) -> bool:
        """Whether the ray reaches the bottom of a layer instead of turning back inside it."""
        if abs(gradient) < self.gradient_epsilon:
            return abs(snell_constant * c0) < 1.0
        return abs(snell_constant * c0) <= 1.0 and abs(snell_constant * c1) <= 1.0

    def _layer_ray_tracing(self, z0: float, z1: float, c0: float, c1: float,
                           gradient: float, snell_constant: float) -> Tuple[float, float, float]:
        if abs(gradient) < self.gradient_epsilon:
            return self.constant_celerity_ray_tracing(z0, z1, c0, snell_constant)
        return self.constant_gradient_ray_tracing(c0, c1, gradient, snell_constant)

    def _trace(self, ping: PingDTO, svp: SoundVelocityProfile, boresight_matrix: np.ndarray,
               imu2nav: np.ndarray, segment_sink: Optional[SegmentSink] = None) -> Tuple[float, float, float, float]:
        """
        Walks the profile layers until the one-way travel time is reached.

        Returns:
            Tuple (sin_az, cos_az, delta_r, delta_z)
        """
        sin_az, cos_az, beta0 = self.launch_vector_parameters(ping, boresight_matrix, imu2nav)

        one_way_travel_time = ping.one_way_travel_time
        surface_sound_speed = ping.surface_sound_speed
        transducer_depth = ping.transducer_depth

        depths = svp.depths
        speeds = svp.speeds
        gradient = svp.sound_speed_gradient

        # Snell's law coefficient, using sound speed at transducer
        snell_constant = np.cos(beta0) / surface_sound_speed
        svp_cutoff_index = svp.get_layer_index_for_depth(transducer_depth)

        logger.debug(f"Raytracing: beta0={np.degrees(beta0):.4f}°, snell_constant={snell_constant:.6e} s/m, "
                     f"one_way_travel_time={one_way_travel_time:.6f}s, svp_cutoff_index={svp_cutoff_index}")

        state = _RayState()

        if svp_cutoff_index < svp.size:
            # transducer may sit between two samples: first layer uses the sound speed at transducer
            gradient_transducer_svp = sound_speed_gradient(
                transducer_depth, surface_sound_speed,
                depths[svp_cutoff_index], speeds[svp_cutoff_index]
            )
            delta_z, delta_r, delta_t = self._layer_ray_tracing(
                transducer_depth, depths[svp_cutoff_index],
                surface_sound_speed, speeds[svp_cutoff_index],
                gradient_transducer_svp, snell_constant
            )

            layer_index = svp_cutoff_index
            if state.travel_time + delta_t <= one_way_travel_time:
                state.commit(delta_z, delta_r, delta_t, segment_sink)

                # stop before last layer
                while layer_index < svp.size - 1:
                    if not self._can_cross_layer(speeds[layer_index], speeds[layer_index + 1],
                                                 gradient[layer_index], snell_constant):
                        logger.debug(f"Raytracing: ray turns inside layer {layer_index}, stopping layer walk")
                        break
                    delta_z, delta_r, delta_t = self._layer_ray_tracing(
                        depths[layer_index], depths[layer_index + 1],
                        speeds[layer_index], speeds[layer_index + 1],
                        gradient[layer_index], snell_constant
                    )
                    if state.travel_time + delta_t > one_way_travel_time:
                        break
                    state.commit(delta_z, delta_r, delta_t, segment_sink)
                    layer_index += 1

            last_layer_sound_speed = speeds[layer_index]
        else:
            # transducer is below deepest svp sample
            last_layer_sound_speed = surface_sound_speed

        last_layer_travel_time = one_way_travel_time - state.travel_time
        delta_z_final, delta_r_final = self.last_layer_propagation(
            last_layer_travel_time, last_layer_sound_speed, snell_constant
        )
        if segment_sink is not None:
            segment_sink(LayerSegmentDTO(
                delta_r=delta_r_final, delta_z=delta_z_final, travel_time=last_layer_travel_time
            ))

        logger.debug(f"Raytracing: {state.committed_layers} full layers, "
                     f"last layer c={last_layer_sound_speed:.2f}m/s for {last_layer_travel_time:.6f}s")

        delta_r_total = state.delta_r + delta_r_final
        delta_z_total = state.delta_z + delta_z_final
        _check_finite(delta_r=delta_r_total, delta_z=delta_z_total)
        return sin_az, cos_az, delta_r_total, delta_z_total

    def ray_trace(self, ping: PingDTO, svp: SoundVelocityProfile,
                  boresight_matrix: np.ndarray, imu2nav: np.ndarray) -> np.ndarray:
        """
        Raytraces a ping.

        Args:
            ping: Ping to raytrace
            svp: Sound velocity profile
            boresight_matrix: Sonar to IMU rotation (3x3)
            imu2nav: IMU to navigation (NED) rotation (3x3)

        Returns:
            Displacement of the return from the transducer in navigation
            frame (north, east, down), m
        """
        try:
            sin_az, cos_az, delta_r, delta_z = self._trace(ping, svp, boresight_matrix, imu2nav)
        except Exception as e:
            logger.error(f"Raytracing failed for ping {ping.timestamp}: {e}", exc_info=True)
            raise

        # re-orient ray in navigation frame
        return np.array([delta_r * sin_az, delta_r * cos_az, delta_z])

    def planar_ray_trace(self, ping: PingDTO, svp: SoundVelocityProfile,
                         boresight_matrix: np.ndarray, imu2nav: np.ndarray) -> PlanarRaytraceDTO:
        """
        Raytraces a ping in the vertical plane of the ray, keeping every layer.

        Args:
            ping: Ping to raytrace
            svp: Sound velocity profile
            boresight_matrix: Sonar to IMU rotation (3x3)
            imu2nav: IMU to navigation (NED) rotation (3x3)

        Returns:
            PlanarRaytraceDTO with total (range, depth) and the segment of
            each layer, the last one being the partial layer
        """
        layers = []
        try:
            _, _, delta_r, delta_z = self._trace(ping, svp, boresight_matrix, imu2nav, layers.append)
        except Exception as e:
            logger.error(f"Planar raytracing failed for ping {ping.timestamp}: {e}", exc_info=True)
            raise

        return PlanarRaytraceDTO(delta_r=delta_r, delta_z=delta_z, layers=tuple(layers))
