"""
Position - timestamped geographic position.
"""

import numpy as np


class Position:
    """
    Timestamped WGS84 position.
    
    Sine and cosine of latitude and longitude are stored to prevent
    redundant recalculations; they are refreshed only when the
    corresponding angle is set.
    """
    
    def __init__(self, timestamp: int, latitude: float, longitude: float,
                 ellipsoidal_height: float):
        """
        Initialize position.
        
        Args:
            timestamp: Time, micro-seconds since epoch
            latitude: Latitude, degrees
            longitude: Longitude, degrees
            ellipsoidal_height: Ellipsoidal height, m
        """
        self.timestamp = timestamp
        self._vector = np.zeros(3)
        self.latitude = latitude
        self.longitude = longitude
        self.ellipsoidal_height = ellipsoidal_height
    
    @property
    def latitude(self) -> float:
        return self._vector[0]
    
    @latitude.setter
    def latitude(self, value: float):
        self._vector[0] = value
        self._slat = np.sin(np.radians(value))
        self._clat = np.cos(np.radians(value))
    
    @property
    def longitude(self) -> float:
        return self._vector[1]
    
    @longitude.setter
    def longitude(self, value: float):
        self._vector[1] = value
        self._slon = np.sin(np.radians(value))
        self._clon = np.cos(np.radians(value))
    
    @property
    def ellipsoidal_height(self) -> float:
        return self._vector[2]
    
    @ellipsoidal_height.setter
    def ellipsoidal_height(self, value: float):
        self._vector[2] = value
    
    @property
    def slat(self) -> float:
        """Sine of latitude."""
        return self._slat
    
    @property
    def clat(self) -> float:
        """Cosine of latitude."""
        return self._clat
    
    @property
    def slon(self) -> float:
        """Sine of longitude."""
        return self._slon
    
    @property
    def clon(self) -> float:
        """Cosine of longitude."""
        return self._clon
    
    @property
    def vector(self) -> np.ndarray:
        """(latitude, longitude, ellipsoidal height) copy."""
        return self._vector.copy()
    
    @staticmethod
    def sort_key(position: 'Position') -> int:
        """Key for sorting positions by timestamp."""
        return position.timestamp
    
    def __repr__(self) -> str:
        return f"( {self.latitude} , {self.longitude} , {self.ellipsoidal_height} )"
