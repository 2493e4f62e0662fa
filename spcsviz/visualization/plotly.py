"""
Plotly rendering of the reference ellipsoid, its graticule and aligned projection
surfaces. Requires the optional plotly dependency (pip install spcsviz[plotly]).
"""
from typing import Iterable, Optional

import numpy as np
import plotly.graph_objects as go
from plotly.graph_objects import Figure

from spcsviz._const import CYLINDER_RINGS, CYLINDER_SEGMENTS
from spcsviz.ellipsoid import GRS80, Ellipsoid
from spcsviz.graticule import Graticule, GraticuleLine, sample_graticule
from spcsviz.projection import ProjectionTransform, cylinder_baselines

_PRIMARY_LINE_COLOR = '#888888'
_REGULAR_LINE_COLOR = '#444444'
_SURFACE_COLOR = '#3366ff'
_BASELINE_COLOR = '#ffff00'


def _draw_line(
    points: np.ndarray,
    color: str,
    name: str,
    width: float = 1.,
    opacity: float = 0.5,
) -> go.Scatter3d:
    return go.Scatter3d(
        x=points[:, 0],
        y=points[:, 1],
        z=points[:, 2],
        mode='lines',
        line=dict(color=color, width=width),
        opacity=opacity,
        name=name,
        hoverinfo='skip',
        showlegend=False,
    )


def _draw_graticule_line(line: GraticuleLine) -> go.Scatter3d:
    label = 'Latitude' if line.kind == 'parallel' else 'Longitude'
    return _draw_line(
        line.to_numpy(),
        _PRIMARY_LINE_COLOR if line.is_primary else _REGULAR_LINE_COLOR,
        f'{label} {line.value:g}°',
        width=2. if line.is_primary else 1.,
    )


def _draw_ellipsoid(ellipsoid: Ellipsoid) -> go.Surface:
    x, y, z = ellipsoid.surface_mesh()
    return go.Surface(
        x=x, y=y, z=z,
        colorscale=[[0, '#1b3a5c'], [1, '#1b3a5c']],
        showscale=False,
        opacity=1.,
        name=ellipsoid.name or 'Ellipsoid',
        hoverinfo='skip',
    )


def _draw_cylinder(transform: ProjectionTransform) -> go.Surface:
    """The transform's open cylinder, carried from its canonical frame"""
    theta, height = np.meshgrid(
        np.linspace(0., 2 * np.pi, CYLINDER_SEGMENTS + 1),
        np.linspace(-transform.surface_height / 2, transform.surface_height / 2, CYLINDER_RINGS + 1),
    )
    canonical = np.stack([
        transform.surface_radius * np.cos(theta),
        height,
        transform.surface_radius * np.sin(theta),
    ], axis=-1)

    aligned = transform.apply(canonical.reshape(-1, 3)).reshape(canonical.shape)
    return go.Surface(
        x=aligned[..., 0],
        y=aligned[..., 1],
        z=aligned[..., 2],
        colorscale=[[0, _SURFACE_COLOR], [1, _SURFACE_COLOR]],
        showscale=False,
        opacity=0.1,
        name=f'{transform.projection_type.label}: {transform.zone_name or "zone"}',
        hoverinfo='name',
    )


def draw_globe(
    ellipsoid: Ellipsoid = GRS80,
    graticule: Optional[Graticule] = None,
    transforms: Iterable[ProjectionTransform] = (),
    fig: Optional[Figure] = None,
    show_surface: bool = True,
    show_graticule: bool = True,
) -> Figure:
    """
    Plots the reference ellipsoid, its graticule and any number of aligned
    projection surfaces to a plotly graph objects Figure.

    Args:
        ellipsoid:
            (Default GRS80) The reference ellipsoid

        graticule:
            A pre-sampled graticule; sampled with default intervals if omitted

        transforms:
            Projection transforms whose surfaces should be drawn

        fig:
            A plotly figure to draw onto; a new one is created if omitted

        show_surface:
            (Default True) Whether to draw the ellipsoid surface

        show_graticule:
            (Default True) Whether to draw the graticule

    Returns:
        go.Figure
    """
    if fig is None:
        fig = go.Figure()

    if show_surface:
        fig.add_trace(_draw_ellipsoid(ellipsoid))

    if show_graticule:
        if graticule is None:
            graticule = sample_graticule(ellipsoid)
        for line in graticule.lines:
            fig.add_trace(_draw_graticule_line(line))

    for transform in transforms:
        fig.add_trace(_draw_cylinder(transform))
        basis, ring = cylinder_baselines(transform.surface_radius, transform.surface_height)
        fig.add_trace(
            _draw_line(transform.apply(basis), _BASELINE_COLOR, 'Angular basis', 3., 0.8)
        )
        fig.add_trace(
            _draw_line(transform.apply(ring), _BASELINE_COLOR, 'Center ring', 3., 0.8)
        )

    fig.update_layout(
        scene=dict(
            aspectmode='data',
            camera=dict(up=dict(x=0, y=1, z=0), eye=dict(x=0., y=0., z=2.)),
            xaxis=dict(visible=False),
            yaxis=dict(visible=False),
            zaxis=dict(visible=False),
        ),
        margin=dict(l=0, r=0, t=0, b=0),
    )
    return fig
