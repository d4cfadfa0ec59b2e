"""
DataProvider - configuration provider for the raytracer.
"""

import json
from pathlib import Path
from typing import Dict, List, Optional
import logging

import numpy as np

from .coordinate_transform import get_boresight_matrix
from .dto import InstallationDTO, RaytracingConfigDTO


class DataProvider:
    """
    Provides configuration stored as JSON files.
    
    Gives access to:
    - Raytracing parameters (raytracing.json)
    - Sonar installations (installations/<id>.json)
    """
    
    def __init__(self, data_dir: Optional[str] = None):
        """
        Initialize data provider.
        
        Args:
            data_dir: Path to data directory (default: georeferencing/data/)
        """
        if data_dir is None:
            # Determine path relative to this file
            data_dir = Path(__file__).parent / 'data'
        else:
            data_dir = Path(data_dir)
        
        self.data_dir = data_dir
        self.logger = logging.getLogger(__name__)
        
        # Cache for loaded data
        self._installations = {}
    
    def _load_json(self, file_path: Path) -> Dict:
        """Loads JSON file."""
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except Exception as e:
            self.logger.error(f"Error loading {file_path}: {e}")
            raise
    
    def get_raytracing_config(self) -> RaytracingConfigDTO:
        """
        Gets raytracing parameters.
        
        Falls back to defaults when raytracing.json is missing or unreadable.
        
        Returns:
            RaytracingConfigDTO
        """
        config_path = self.data_dir / 'raytracing.json'
        if config_path.exists():
            try:
                config = RaytracingConfigDTO(**self._load_json(config_path))
                self.logger.info(f"Raytracing configuration loaded from {config_path}: "
                                 f"gradient_epsilon={config.gradient_epsilon}")
                return config
            except Exception as e:
                self.logger.warning(f"Failed to load raytracing configuration: {e}")
        else:
            self.logger.warning(f"{config_path} not found, using default raytracing configuration")
        return RaytracingConfigDTO()
    
    def get_installation(self, installation_id: str) -> InstallationDTO:
        """
        Gets sonar installation parameters.
        
        Args:
            installation_id: Installation ID
        
        Returns:
            InstallationDTO
        """
        if installation_id in self._installations:
            return self._installations[installation_id]
        
        file_path = self.data_dir / 'installations' / f'{installation_id}.json'
        if not file_path.exists():
            raise ValueError(f"Installation {installation_id} not found")
        
        installation = InstallationDTO(**self._load_json(file_path))
        self._installations[installation_id] = installation
        return installation
    
    def get_boresight_matrix(self, installation_id: str) -> np.ndarray:
        """Sonar to IMU rotation of an installation."""
        installation = self.get_installation(installation_id)
        return get_boresight_matrix(
            installation.boresight_roll,
            installation.boresight_pitch,
            installation.boresight_yaw,
        )
    
    def list_installations(self) -> List[str]:
        """Returns list of available installations."""
        installations_dir = self.data_dir / 'installations'
        if not installations_dir.exists():
            return []
        
        return sorted(f.stem for f in installations_dir.glob('*.json'))
