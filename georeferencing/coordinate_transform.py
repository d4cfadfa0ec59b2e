"""
Coordinate transforms used to build the launch vector of a beam.
"""

import numpy as np
from scipy.spatial.transform import Rotation


def sonar2cartesian(along_track_angle: float, across_track_angle: float,
                    range_: float = 1.0) -> np.ndarray:
    """
    Converts a beam direction in sonar frame to cartesian coordinates.
    
    Args:
        along_track_angle: Along-track angle, degrees
        across_track_angle: Across-track angle, degrees
        range_: Range along the beam, m
    
    Returns:
        (x, y, z) in sonar frame (x forward, y starboard, z down)
    """
    alpha = np.radians(along_track_angle)
    theta = np.radians(across_track_angle)
    return np.array([
        range_ * np.sin(alpha),
        range_ * np.cos(alpha) * np.sin(theta),
        range_ * np.cos(alpha) * np.cos(theta),
    ])


def get_dcm(roll: float, pitch: float, heading: float) -> np.ndarray:
    """
    Direction cosine matrix from body frame to local-level NED frame.
    
    Args:
        roll, pitch, heading: Attitude angles, degrees
    
    Returns:
        3x3 rotation matrix R = Rz(heading) Ry(pitch) Rx(roll)
    """
    return Rotation.from_euler('ZYX', [heading, pitch, roll], degrees=True).as_matrix()


def get_boresight_matrix(roll: float, pitch: float, yaw: float) -> np.ndarray:
    """
    Rotation from sonar frame to vehicle (IMU) frame.
    
    Args:
        roll, pitch, yaw: Boresight angles, degrees
    
    Returns:
        3x3 rotation matrix
    """
    return get_dcm(roll, pitch, yaw)


def check_rotation_matrix(matrix, name: str = "matrix") -> np.ndarray:
    """Returns matrix as a 3x3 float array, raising ValueError otherwise."""
    matrix = np.asarray(matrix, dtype=float)
    if matrix.shape != (3, 3):
        raise ValueError(f"{name} must be 3x3, got shape {matrix.shape}")
    return matrix
