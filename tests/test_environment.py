"""
Test suite for the environment and perturbation models.

Tests cover:
- Atmospheric density curve fit and its exponential tail
- Debye length table lookup and range limits
- Drag, zonal harmonic and solar radiation pressure accelerations
- NaN sentinels and domain warnings for invalid inputs
"""

import pytest
import numpy as np

from apsis import (
    atmospheric_density, debye_length, atmospheric_drag,
    zonal_term, zonal_perturbation, solar_radiation_pressure,
    temp_config, OrbitalDomainWarning, EARTH, MOON,
)
from apsis.environment import SOLAR_FLUX, SPEED_OF_LIGHT, RADIATION_PRESSURE_COEFF


LEO = np.array([EARTH.radius + 400.0, 0.0, 0.0])
LEO_V = np.array([0.0, 7.67, 0.0])


class TestAtmosphericDensity:
    """Test the standard atmosphere curve fit."""

    def test_leo_density_magnitude(self):
        """Density at 400 km is a few 1e-12 kg/m³."""
        assert 1e-12 < atmospheric_density(400.0) < 1e-11

    def test_density_decreases_with_altitude(self):
        """Density falls monotonically through the fitted range."""
        alts = [200.0, 400.0, 600.0, 800.0]
        rho = [atmospheric_density(h) for h in alts]
        assert all(r1 > r2 for r1, r2 in zip(rho, rho[1:]))

    def test_exponential_tail(self):
        """Above 1000 km the exponential model applies."""
        assert atmospheric_density(1500.0) == pytest.approx(10**(-7e-5*1500.0 - 14.464))

    def test_no_jump_at_fit_ceiling(self):
        """Polynomial and exponential pieces nearly agree at 1000 km."""
        below = np.log10(atmospheric_density(1000.0))
        above = np.log10(atmospheric_density(1000.001))
        assert abs(below - above) < 0.1

    def test_returns_float(self):
        assert isinstance(atmospheric_density(300.0), float)


class TestDebyeLength:
    """Test the tabulated Debye length."""

    def test_table_nodes(self):
        """Tabulated altitudes return the table values exactly."""
        assert debye_length(200.0) == 5.64e-3
        assert debye_length(250.0) == 3.92e-3
        assert debye_length(2000.0) == 3.96e-2

    def test_linear_interpolation(self):
        """Values between nodes are interpolated linearly."""
        assert debye_length(225.0) == pytest.approx((5.64e-3 + 3.92e-3)/2)

    def test_held_constant_above_table(self):
        """2000 km value is held up to 30000 km."""
        assert debye_length(2500.0) == pytest.approx(3.96e-2)
        assert debye_length(30000.0) == pytest.approx(3.96e-2)

    def test_linear_ramp_to_geo(self):
        """Above 30000 km the length follows 0.1 alt - 2999.7."""
        assert debye_length(32000.0) == pytest.approx(200.3)
        assert debye_length(35000.0) == pytest.approx(500.3)

    @pytest.mark.parametrize("alt", [0.0, 199.9, 35000.1])
    def test_out_of_range(self, alt):
        """Altitudes outside [200, 35000] km return NaN with a warning."""
        with pytest.warns(OrbitalDomainWarning, match="debye_length"):
            assert np.isnan(debye_length(alt))

    def test_out_of_range_strict(self):
        with temp_config(STRICT_VALIDATION=True):
            with pytest.raises(ValueError):
                debye_length(100.0)


class TestAtmosphericDrag:
    """Test the drag acceleration model."""

    def test_magnitude(self):
        """Drag follows -1/2 rho (Cd A/m) v² with unit conversions."""
        a = atmospheric_drag(2.2, 10.0, 1000.0, LEO, LEO_V)
        expected = 0.5*atmospheric_density(400.0)*(2.2*10.0/1000.0)*(7670.0)**2/1000.0
        assert np.linalg.norm(a) == pytest.approx(expected, rel=1e-9)

    def test_opposes_velocity(self):
        """Drag is anti-parallel to the velocity."""
        v = np.array([1.0, 7.0, 2.0])
        a = atmospheric_drag(2.2, 10.0, 1000.0, LEO, v)
        assert np.linalg.norm(np.cross(a, v)) < 1e-12*np.linalg.norm(a)*np.linalg.norm(v)
        assert np.dot(a, v) < 0

    def test_scales_with_ballistic_coefficient(self):
        """Doubling Cd A / m doubles the drag."""
        a1 = atmospheric_drag(2.2, 10.0, 1000.0, LEO, LEO_V)
        a2 = atmospheric_drag(2.2, 10.0, 500.0, LEO, LEO_V)
        assert np.allclose(a2, 2*a1)

    def test_zero_velocity(self):
        """A body at rest feels no drag."""
        a = atmospheric_drag(2.2, 10.0, 1000.0, LEO, [0.0, 0.0, 0.0])
        assert np.array_equal(a, np.zeros(3))

    def test_inside_body(self):
        """Positions below the surface return a NaN vector with a warning."""
        with pytest.warns(OrbitalDomainWarning, match="atmospheric_drag"):
            a = atmospheric_drag(2.2, 10.0, 1000.0, [6000.0, 0.0, 0.0], LEO_V)
        assert a.shape == (3,)
        assert np.all(np.isnan(a))

    def test_inside_body_strict(self):
        with temp_config(STRICT_VALIDATION=True):
            with pytest.raises(ValueError, match="positive altitude"):
                atmospheric_drag(2.2, 10.0, 1000.0, [0.0, 0.0, 100.0], LEO_V)


class TestZonalHarmonics:
    """Test the J2-J6 zonal harmonic accelerations."""

    R = np.array([7000.0, 1000.0, 3000.0])

    def test_j2_matches_textbook_form(self):
        """J2 term matches the standard closed form."""
        x, y, z = self.R
        r = np.linalg.norm(self.R)
        k = -1.5*EARTH.J(2)*EARTH.mu*EARTH.radius**2/r**5
        expected = k*np.array([x*(1 - 5*z**2/r**2),
                               y*(1 - 5*z**2/r**2),
                               z*(3 - 5*z**2/r**2)])
        assert np.allclose(zonal_term(self.R, 2), expected, rtol=1e-12, atol=0)

    def test_j2_pulls_inward_at_equator(self):
        """Oblateness adds an inward pull in the equatorial plane."""
        r = np.array([7000.0, 0.0, 0.0])
        a = zonal_term(r, 2)
        assert a[0] < 0
        assert a[1] == 0.0
        assert a[2] == 0.0

    def test_j2_dominates(self):
        """Higher terms are orders of magnitude below J2."""
        j2 = np.linalg.norm(zonal_term(self.R, 2))
        for n in range(3, 7):
            assert np.linalg.norm(zonal_term(self.R, n)) < 1e-2*j2

    @pytest.mark.parametrize("degree", [2, 3, 4, 5, 6])
    def test_perturbation_is_cumulative(self, degree):
        """zonal_perturbation sums J2 through J_degree."""
        expected = sum(zonal_term(self.R, n) for n in range(2, degree + 1))
        assert np.allclose(zonal_perturbation(self.R, degree), expected, rtol=1e-14, atol=0)

    def test_odd_terms_antisymmetric(self):
        """J3 horizontal part flips sign between hemispheres, the z part does not."""
        north = zonal_term([7000.0, 0.0, 2000.0], 3)
        south = zonal_term([7000.0, 0.0, -2000.0], 3)
        assert south[0] == pytest.approx(-north[0])
        assert south[2] == pytest.approx(north[2])

    @pytest.mark.parametrize("degree", [0, 1, 7])
    def test_unsupported_degree(self, degree):
        """Degrees outside 2..6 return a NaN vector with a warning."""
        with pytest.warns(OrbitalDomainWarning, match="degree"):
            assert np.all(np.isnan(zonal_perturbation(self.R, degree)))
        with pytest.warns(OrbitalDomainWarning):
            assert np.all(np.isnan(zonal_term(self.R, degree)))

    def test_body_without_coefficient(self):
        """The Moon only carries J2."""
        r = np.array([2000.0, 0.0, 500.0])
        assert np.all(np.isfinite(zonal_perturbation(r, 2, body=MOON)))
        with pytest.warns(OrbitalDomainWarning, match="Moon"):
            assert np.all(np.isnan(zonal_perturbation(r, 3, body=MOON)))


class TestSolarRadiationPressure:
    """Test the cannonball SRP model."""

    def test_magnitude_at_one_au(self):
        a = solar_radiation_pressure(10.0, 1000.0, [1.0, 0.0, 0.0])
        expected = RADIATION_PRESSURE_COEFF*10.0*SOLAR_FLUX/(1000.0*SPEED_OF_LIGHT)/1000.0
        assert np.linalg.norm(a) == pytest.approx(expected)

    def test_along_sun_line(self):
        """Acceleration is along -sun_vec."""
        sun_vec = np.array([0.6, -0.7, 0.2])
        a = solar_radiation_pressure(10.0, 1000.0, sun_vec)
        assert np.linalg.norm(np.cross(a, sun_vec)) < 1e-12*np.linalg.norm(a)
        assert np.dot(a, sun_vec) < 0

    def test_inverse_square(self):
        """Doubling the Sun distance quarters the acceleration."""
        a1 = solar_radiation_pressure(10.0, 1000.0, [1.0, 0.0, 0.0])
        a2 = solar_radiation_pressure(10.0, 1000.0, [2.0, 0.0, 0.0])
        assert np.linalg.norm(a2) == pytest.approx(np.linalg.norm(a1)/4)
