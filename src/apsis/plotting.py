'''3D orbit geometry plots built on elements_to_state'''

import numpy as np
import plotly.graph_objects as go
from typing import Optional, Sequence
from .bodies import EARTH, BodyParams
from .orbital_elements import OrbitalElements, OrbitRegime, elements_to_state

# share of the anomaly range out to max_radius drawn for open orbits
_OPEN_SWEEP = 0.9


def _anomaly_range(orbit: OrbitalElements, max_radius: float):
    """Limits of the anomaly field swept when drawing an orbit"""
    regime, e, a = orbit.regime, orbit.e, orbit.a
    if regime.is_closed:
        return 0.0, 2*np.pi
    if regime == OrbitRegime.RECTILINEAR_HYPERBOLIC:
        # r = |a|(cosh H - 1)
        H_max = np.arccosh(1 + max_radius/abs(a))
        return -H_max, H_max
    if regime == OrbitRegime.RECTILINEAR_PARABOLIC:
        # r = |a| D²
        D_max = np.sqrt(max_radius/abs(a))
        return -D_max, D_max
    if regime == OrbitRegime.PARABOLIC:
        p = -2*a
        cos_f = min(p/max_radius - 1, 1.0)
    else:
        p = a*(1 - e**2)
        cos_f = min((p/max_radius - 1)/e, 1.0)
    f_max = _OPEN_SWEEP*np.arccos(max(cos_f, -1.0))
    return -f_max, f_max


def sample_orbit(orbit: OrbitalElements, n_points: int = 500,
                 mu: Optional[float] = None,
                 max_radius: Optional[float] = None) -> np.ndarray:
    """
    Positions along the orbit path.

    Closed orbits are swept through one full revolution of the anomaly
    field. Open orbits are swept symmetrically about periapsis out to
    max_radius (default 10 periapsis radii, or 10 |a| when rectilinear).

    Parameters
    ----------
    orbit : OrbitalElements
        Orbit to sample; the anomaly field is ignored
    n_points : int, optional
        Number of samples (default 500)
    mu : float, optional
        Gravitational parameter [km³/s²], defaults to Earth
    max_radius : float, optional
        Largest radius drawn for open orbits [km]

    Returns
    -------
    np.ndarray
        Positions, shape (n_points, 3) [km]
    """
    if n_points < 2:
        raise ValueError(f"n_points must be at least 2, got {n_points}")
    mu = OrbitalElements.DEFAULT_MU if mu is None else mu
    if max_radius is None:
        scale = abs(orbit.a) if orbit.regime.is_rectilinear else orbit.periapsis_radius
        max_radius = 10*scale
    lo, hi = _anomaly_range(orbit, max_radius)

    base = orbit.elements.copy()
    positions = np.empty((n_points, 3))
    # rectilinear paths pass through the origin where the speed is infinite
    with np.errstate(divide='ignore', invalid='ignore'):
        for k, anomaly in enumerate(np.linspace(lo, hi, n_points)):
            base[5] = anomaly
            point = OrbitalElements(base, regime=orbit.regime, validate=False)
            positions[k] = elements_to_state(mu, point)[0]
    return positions


def _add_body_sphere(fig, radius, color, opacity, name):
    """Add a sphere for the central body at the origin."""
    u = np.linspace(0, 2 * np.pi, 30)
    v = np.linspace(0, np.pi, 20)

    x = radius * np.outer(np.cos(u), np.sin(v))
    y = radius * np.outer(np.sin(u), np.sin(v))
    z = radius * np.outer(np.ones(np.size(u)), np.cos(v))

    fig.add_trace(go.Surface(
        x=x, y=y, z=z,
        colorscale=[[0, color], [1, color]],
        showscale=False,
        opacity=opacity,
        name=name,
        hoverinfo='name'
    ))


def add_orbit_to_plot(fig: go.Figure, orbit: OrbitalElements,
                      n_points: int = 500, color: str = 'blue',
                      name: Optional[str] = None, mu: Optional[float] = None,
                      **kwargs) -> go.Figure:
    """
    Add one orbit path to an existing Plotly figure.

    Parameters:
        fig: Existing Plotly Figure object
        orbit: OrbitalElements to draw
        n_points: Number of points to sample the path (default: 500)
        color: Color of the orbit line (default: 'blue')
        name: Legend name for this orbit (default: 'Orbit N')
        mu: Gravitational parameter (default: Earth)
        **kwargs: Additional arguments passed to Scatter3d

    Returns:
        Updated Plotly Figure object (same object, modified in place)
    """
    positions = sample_orbit(orbit, n_points=n_points, mu=mu)

    if name is None:
        # Count existing scatter3d traces
        n_existing = sum(1 for trace in fig.data if isinstance(trace, go.Scatter3d))
        name = f'Orbit {n_existing + 1}'

    fig.add_trace(go.Scatter3d(
        x=positions[:, 0],
        y=positions[:, 1],
        z=positions[:, 2],
        mode='lines',
        line=dict(color=color, width=3),
        name=name,
        hovertemplate='x: %{x:.1f}<br>y: %{y:.1f}<br>z: %{z:.1f}<extra></extra>',
        **kwargs
    ))
    return fig


def plot_orbits(orbits: Sequence[OrbitalElements], body: BodyParams = EARTH,
                n_points: int = 500, show_body: bool = True,
                body_color: str = 'lightblue', body_opacity: float = 0.6,
                colors: Optional[Sequence[str]] = None) -> go.Figure:
    """
    Create a 3D plot of one or more orbits about a central body.

    Parameters:
        orbits: OrbitalElements, or a list of them
        body: Central body supplying mu and radius (default: EARTH)
        n_points: Number of points per orbit (default: 500)
        show_body: Whether to draw the central body sphere (default: True)
        body_color: Color of the central body (default: 'lightblue')
        body_opacity: Opacity of the central body (default: 0.6)
        colors: Line colors, cycled over the orbits

    Returns:
        Plotly Figure object
    """
    if isinstance(orbits, OrbitalElements):
        orbits = [orbits]
    colors = list(colors) if colors else ['red', 'blue', 'green', 'orange', 'purple']

    fig = go.Figure()
    if show_body:
        _add_body_sphere(fig, body.radius, body_color, body_opacity,
                         body.name or 'Central Body')
    for k, orbit in enumerate(orbits):
        add_orbit_to_plot(fig, orbit, n_points=n_points,
                          color=colors[k % len(colors)], mu=body.mu)

    fig.update_layout(
        scene=dict(
            xaxis_title='X [km]',
            yaxis_title='Y [km]',
            zaxis_title='Z [km]',
            aspectmode='data'
        ),
        title='Orbit Geometry',
        showlegend=True
    )
    return fig
