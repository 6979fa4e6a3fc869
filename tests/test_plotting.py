"""Tests for orbit path sampling and Plotly figures."""

import pytest
import numpy as np
import plotly.graph_objects as go

from apsis import OE, OrbitRegime, sample_orbit, plot_orbits, add_orbit_to_plot, MOON


@pytest.fixture
def ellipse():
    return OE(a=9000.0, e=0.3, i=0.6, omega=0.2, w=1.0, nu=0.0)


class TestSampleOrbit:
    """Test sampling of orbit geometry."""

    def test_closed_orbit_is_one_revolution(self, ellipse):
        """Samples follow the conic and close on themselves."""
        pos = sample_orbit(ellipse, n_points=200)
        assert pos.shape == (200, 3)
        assert np.allclose(pos[0], pos[-1])
        r = np.linalg.norm(pos, axis=1)
        assert r.min() == pytest.approx(9000.0*0.7)
        assert r.max() == pytest.approx(9000.0*1.3, rel=1e-3)

    def test_samples_lie_in_orbit_plane(self, ellipse):
        pos = sample_orbit(ellipse, n_points=50)
        r, v = ellipse.to_state()
        normal = np.cross(r, v)
        assert np.allclose(pos @ normal / np.linalg.norm(normal), 0.0, atol=1e-6)

    def test_hyperbola_stops_at_max_radius(self):
        orbit = OE(a=-10000.0, e=1.5, i=0.3, omega=0.0, w=0.0, nu=0.0)
        pos = sample_orbit(orbit, n_points=100)
        r = np.linalg.norm(pos, axis=1)
        assert np.all(np.isfinite(pos))
        assert r.max() <= 10*orbit.periapsis_radius
        assert r.min() == pytest.approx(orbit.periapsis_radius, rel=1e-3)

    def test_parabola(self):
        orbit = OE(a=-7000.0, e=1.0, i=0.3, omega=0.0, w=0.0, nu=0.0)
        pos = sample_orbit(orbit, n_points=101, max_radius=50000.0)
        r = np.linalg.norm(pos, axis=1)
        assert np.all(np.isfinite(pos))
        assert r.max() <= 50000.0
        assert r[50] == pytest.approx(7000.0)

    def test_rectilinear_path_is_a_segment(self):
        """Radial orbit samples stay on the line of apsides."""
        orbit = OE(a=5000.0, e=1.0, i=0.6, omega=0.4, w=0.9, nu=1.0)
        pos = sample_orbit(orbit, n_points=64)
        assert np.all(np.isfinite(pos))
        direction = pos[np.argmax(np.linalg.norm(pos, axis=1))]
        direction = direction / np.linalg.norm(direction)
        assert np.allclose(np.cross(pos, direction), 0.0, atol=1e-6)
        assert np.linalg.norm(pos, axis=1).max() <= 10000.0 + 1e-6

    def test_rectilinear_hyperbola(self):
        orbit = OE([-5000.0, 1.0, 0.2, 0.0, 0.0, 0.5],
                   regime=OrbitRegime.RECTILINEAR_HYPERBOLIC)
        pos = sample_orbit(orbit, n_points=21)
        assert np.all(np.isfinite(pos))
        assert np.linalg.norm(pos, axis=1).max() == pytest.approx(50000.0)

    def test_radial_parabola(self):
        orbit = OE([-4000.0, 1.0, 0.2, 0.0, 0.0, 1.0],
                   regime=OrbitRegime.RECTILINEAR_PARABOLIC)
        pos = sample_orbit(orbit, n_points=20)
        assert np.all(np.isfinite(pos))
        assert np.linalg.norm(pos, axis=1).max() == pytest.approx(40000.0)

    def test_too_few_points(self, ellipse):
        with pytest.raises(ValueError, match="n_points"):
            sample_orbit(ellipse, n_points=1)


class TestFigures:
    """Test Plotly figure construction."""

    def test_plot_orbits_with_body(self, ellipse):
        other = OE(a=12000.0, e=0.1, i=1.0, omega=0.5, w=0.0, nu=0.0)
        fig = plot_orbits([ellipse, other], n_points=50)
        assert isinstance(fig, go.Figure)
        assert len(fig.data) == 3
        assert isinstance(fig.data[0], go.Surface)
        assert fig.data[0].name == 'Earth'
        assert [trace.name for trace in fig.data[1:]] == ['Orbit 1', 'Orbit 2']

    def test_plot_single_orbit_without_body(self, ellipse):
        fig = plot_orbits(ellipse, n_points=20, show_body=False)
        assert len(fig.data) == 1
        assert isinstance(fig.data[0], go.Scatter3d)

    def test_other_body(self):
        orbit = OE(a=2500.0, e=0.05, i=0.3, omega=0.0, w=0.0, nu=0.0)
        fig = plot_orbits(orbit, body=MOON, n_points=20)
        assert fig.data[0].name == 'Moon'

    def test_add_orbit_to_plot(self, ellipse):
        fig = plot_orbits(ellipse, n_points=20)
        returned = add_orbit_to_plot(fig, ellipse, n_points=20, name='Transfer')
        assert returned is fig
        assert fig.data[-1].name == 'Transfer'
        assert len(fig.data[-1].x) == 20
