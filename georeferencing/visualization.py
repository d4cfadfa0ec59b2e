"""
Plots of raytracing results for quality control.
"""

import numpy as np
import matplotlib.pyplot as plt

from .dto import PlanarRaytraceDTO


def plot_planar_ray(result: PlanarRaytraceDTO, ax=None, **kwargs):
    """
    Plots a planar raytrace as a (range, depth) polyline.
    
    Each vertex is a layer boundary; the last segment is the partial layer.
    Keyword arguments are passed to ax.plot.
    
    Returns:
        Matplotlib axes
    """
    if ax is None:
        ax = plt.gca()
    
    ranges = np.concatenate([[0.0], np.cumsum([layer.delta_r for layer in result.layers])])
    depths = np.concatenate([[0.0], np.cumsum([layer.delta_z for layer in result.layers])])
    
    plot_kwargs = {'c': 'k', 'lw': 1, 'marker': '.'}
    plot_kwargs.update(kwargs)
    ax.plot(ranges, depths, **plot_kwargs)
    
    ax.set_xlabel('range [m]')
    ax.set_ylabel('depth [m]')
    if not ax.yaxis_inverted():
        ax.invert_yaxis()
    ax.set_title('Raytrace')
    return ax
