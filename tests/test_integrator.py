"""Unit tests for the trapezoidal integrator.

Tests gravity, thrust gating, the update rule and domain errors.
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose, assert_array_equal

from orbitsim.dynamics import Body, Integrator, gravitational_force, net_force, step, step_body
from orbitsim.environment import G, MASS_OF_EARTH, RADIUS_OF_EARTH, PhysicsConfig, ReferenceFrame
from orbitsim.errors import DomainError, ZeroOrNegativeMassError, ZeroSeparationError
from orbitsim.scenarios import circular_orbit, rocket_launch

GM = G * MASS_OF_EARTH


def make_body(**kwargs) -> Body:
    defaults = {
        "name": "Probe",
        "position": (0.0, RADIUS_OF_EARTH + 10000.0),
        "extent": (20000.0, 20000.0),
        "mass": 7000.0,
    }
    defaults.update(kwargs)
    return Body(**defaults)


# =============================================================================
# Gravity Tests
# =============================================================================


class TestGravitationalForce:
    """Test the point-mass gravity force."""

    def test_magnitude_matches_newton(self):
        """|F| = G*M*m/r^2 for a body at rest."""
        r = 7.0e6
        body = make_body(position=(r, 0.0), mass=1234.0)

        force = gravitational_force(body)

        expected = G * MASS_OF_EARTH * 1234.0 / r**2
        assert_allclose(np.linalg.norm(force), expected, rtol=1e-6)

    def test_points_toward_frame(self):
        """Force is attractive, along the body-to-origin direction."""
        body = make_body(position=(3.0e6, 4.0e6))

        force = gravitational_force(body)

        direction = force / np.linalg.norm(force)
        assert_allclose(direction, [-0.6, -0.8], atol=1e-12)

    def test_inverse_square(self):
        """Doubling distance quarters the force."""
        near = gravitational_force(make_body(position=(0.0, 7.0e6)))
        far = gravitational_force(make_body(position=(0.0, 14.0e6)))

        assert_allclose(np.linalg.norm(near) / np.linalg.norm(far), 4.0, rtol=1e-9)

    def test_alternate_constants(self):
        """Integrator uses the configured frame, not Earth."""
        planet = ReferenceFrame(mass=1.0e20, radius=1.0e5, name="Rock")
        config = PhysicsConfig(gravitational_constant=1.0e-10, reference_frame=planet)
        body = make_body(position=(0.0, 2.0e5), mass=10.0)

        force = gravitational_force(body, config)

        assert_allclose(force, [0.0, -1.0e-10 * 1.0e20 * 10.0 / 2.0e5**2], rtol=1e-9)

    def test_net_force_adds_thrust_only_when_on(self):
        body = make_body(engine_force=(5.0, 100000.0))
        gravity = gravitational_force(body)

        assert_allclose(net_force(body, engine_on=False), gravity)
        assert_allclose(net_force(body, engine_on=True), gravity + np.array([5.0, 100000.0]))


# =============================================================================
# Update Rule Tests
# =============================================================================


class TestTrapezoidalStep:
    """Test the velocity and position updates."""

    def test_rocket_launch_first_step(self):
        """Rocket 10 km up, 100 kN thrust, 7000 kg, one 0.1 s step."""
        rocket = rocket_launch()

        (result,) = step([rocket], dt=0.1, engine_on=True)

        r = RADIUS_OF_EARTH + 10000.0
        a_expected = 100000.0 / 7000.0 - GM / r**2
        v_expected = a_expected * 0.1 / 2
        y_expected = r + v_expected * 0.1 / 2

        assert_allclose(result.acceleration, [0.0, a_expected], rtol=1e-9, atol=1e-12)
        assert_allclose(result.velocity, [0.0, v_expected], rtol=1e-9, atol=1e-12)
        assert_allclose(result.position, [0.0, y_expected], rtol=1e-12)

    def test_rocket_launch_approximate_values(self):
        """Order-of-magnitude check on the launch numbers."""
        (result,) = step([rocket_launch()], dt=0.1, engine_on=True)

        assert_allclose(result.acceleration[1], 4.49, rtol=5e-3)
        assert_allclose(result.velocity[1], 0.2245, rtol=5e-3)
        assert_allclose(result.position[1], 6381000.011, rtol=1e-9)

    def test_uses_memoized_acceleration(self):
        """Velocity update averages the stored and the new acceleration."""
        body = make_body(position=(0.0, 7.0e6), acceleration=(0.0, 2.0))

        (result,) = step([body], dt=1.0, engine_on=False)

        a_new = -GM / 7.0e6**2
        assert_allclose(result.velocity[1], (a_new + 2.0) / 2, rtol=1e-9)

    def test_position_uses_average_velocity(self):
        body = make_body(position=(7.0e6, 0.0), velocity=(0.0, 7500.0))

        (result,) = step([body], dt=2.0, engine_on=False)

        expected = body.position + (result.velocity + body.velocity) * 2.0 / 2
        assert_allclose(result.position, expected, rtol=1e-12)

    def test_carries_constant_properties(self):
        body = make_body(name="Keep", engine_force=(1.0, 2.0))

        (result,) = step([body], dt=0.1, engine_on=True)

        assert result.name == "Keep"
        assert result.mass == body.mass
        assert_array_equal(result.extent, body.extent)
        assert_array_equal(result.engine_force, body.engine_force)

    def test_preserves_order_and_length(self):
        bodies = [make_body(name=f"b{i}", position=(0.0, 7.0e6 + i * 1000.0)) for i in range(5)]

        result = step(bodies, dt=0.1, engine_on=False)

        assert isinstance(result, tuple)
        assert [b.name for b in result] == [f"b{i}" for i in range(5)]

    def test_integer_dt(self):
        body = rocket_launch()

        (from_int,) = step([body], dt=1, engine_on=False)
        (from_float,) = step([body], dt=1.0, engine_on=False)
        single = step_body(body, dt=-1, engine_on=True)

        assert_array_equal(from_int.position, from_float.position)
        assert_array_equal(from_int.velocity, from_float.velocity)
        assert single.velocity[1] < 0
        (from_class,) = Integrator().step([body], dt=2, engine_on=False)
        assert from_class.velocity[1] < 0

    def test_empty_input(self):
        assert step([], dt=0.1, engine_on=True) == ()

    def test_does_not_mutate_input(self):
        body = make_body(velocity=(10.0, 20.0), acceleration=(1.0, 1.0))
        position = body.position.copy()
        velocity = body.velocity.copy()
        acceleration = body.acceleration.copy()

        step([body], dt=0.1, engine_on=True)

        assert_array_equal(body.position, position)
        assert_array_equal(body.velocity, velocity)
        assert_array_equal(body.acceleration, acceleration)

    def test_bodies_are_independent(self):
        """A body's step does not depend on the other bodies."""
        a = make_body(name="a", position=(0.0, 7.0e6))
        b = make_body(name="b", position=(7.0e6, 0.0), mass=1.0e6)

        together = step([a, b], dt=0.5, engine_on=False)
        alone = step([a], dt=0.5, engine_on=False)

        assert_array_equal(together[0].position, alone[0].position)
        assert_array_equal(together[0].velocity, alone[0].velocity)

    def test_integrator_class_matches_function(self):
        body = rocket_launch()
        integrator = Integrator()

        (from_class,) = integrator.step([body], dt=0.1, engine_on=True)
        (from_function,) = step([body], dt=0.1, engine_on=True)

        assert_array_equal(from_class.position, from_function.position)
        assert_array_equal(integrator.gravitational_force(body), gravitational_force(body))


# =============================================================================
# Physical Property Tests
# =============================================================================


class TestPhysicalProperties:
    """Test properties that must hold for any body."""

    def test_mass_invariance_without_engine(self):
        """Scaling mass leaves the free-fall trajectory unchanged."""
        light = circular_orbit(altitude=400e3, mass=10.0)
        heavy = circular_orbit(altitude=400e3, mass=10.0 * 3.7e4)

        for _ in range(50):
            (light,) = step([light], dt=1.0, engine_on=False)
            (heavy,) = step([heavy], dt=1.0, engine_on=False)

        assert_allclose(heavy.acceleration, light.acceleration, rtol=1e-9)
        assert_allclose(heavy.velocity, light.velocity, rtol=1e-9)
        assert_allclose(heavy.position, light.position, rtol=1e-12)

    def test_engine_force_ignored_when_off(self):
        with_thrust = make_body(engine_force=(3.0e5, -2.0e5))
        without_thrust = make_body(engine_force=(0.0, 0.0))

        (a,) = step([with_thrust], dt=0.1, engine_on=False)
        (b,) = step([without_thrust], dt=0.1, engine_on=False)

        assert_array_equal(a.position, b.position)
        assert_array_equal(a.velocity, b.velocity)
        assert_array_equal(a.acceleration, b.acceleration)

    def test_zero_thrust_engine_on_equals_engine_off(self):
        body = make_body(engine_force=(0.0, 0.0))

        (on,) = step([body], dt=0.1, engine_on=True)
        (off,) = step([body], dt=0.1, engine_on=False)

        assert_array_equal(on.position, off.position)
        assert_array_equal(on.velocity, off.velocity)
        assert_array_equal(on.acceleration, off.acceleration)

    def test_circular_orbit_stays_circular(self):
        """A quarter orbit keeps the radius within a fraction of a percent."""
        body = circular_orbit(altitude=400e3)
        r0 = np.linalg.norm(body.position)

        for _ in range(1400):
            (body,) = step([body], dt=1.0, engine_on=False)

        r = np.linalg.norm(body.position)
        assert_allclose(r, r0, rtol=5e-3)
        assert body.position[0] < 0  # moved counter-clockwise from +y


# =============================================================================
# Reversal Tests
# =============================================================================


class TestReversal:
    """Stepping by -dt is allowed but only approximately undoes +dt."""

    def test_single_round_trip_drifts(self):
        """Forward then backward does not return exactly to the start."""
        start = rocket_launch()

        (forward,) = step([start], dt=0.1, engine_on=True)
        (back,) = step([forward], dt=-0.1, engine_on=True)

        velocity_drift = np.linalg.norm(back.velocity - start.velocity)
        assert velocity_drift > 1e-6
        assert velocity_drift < 0.5

    def test_repeated_round_trips_stay_bounded(self):
        """Drift does not grow without bound over many round trips."""
        start = rocket_launch()
        body = start

        for _ in range(50):
            (body,) = step([body], dt=0.1, engine_on=True)
            (body,) = step([body], dt=-0.1, engine_on=True)

            assert np.linalg.norm(body.position - start.position) < 0.1
            assert np.linalg.norm(body.velocity - start.velocity) < 0.5

    def test_rewind_moves_backward(self):
        """A negative step moves an orbiting body back along its path."""
        body = circular_orbit(altitude=400e3, angle_deg=90.0)

        (back,) = step([body], dt=-10.0, engine_on=False)

        # Counter-clockwise orbit from +y: rewinding moves toward +x
        assert back.position[0] > 0


# =============================================================================
# Domain Error Tests
# =============================================================================


class TestDomainErrors:
    """Test rejection of inputs outside the equations' domain."""

    @pytest.mark.parametrize("mass", [0.0, -1.0, float("nan"), 0, -1])
    def test_non_positive_mass_rejected(self, mass):
        with pytest.raises(ZeroOrNegativeMassError):
            make_body(mass=mass)

    def test_mass_error_is_domain_error(self):
        with pytest.raises(DomainError):
            make_body(mass=0.0)

    def test_zero_separation(self):
        body = make_body(position=(0.0, 0.0))

        with pytest.raises(ZeroSeparationError):
            step([body], dt=0.1, engine_on=False)

    def test_zero_separation_in_gravity(self):
        with pytest.raises(ZeroSeparationError):
            gravitational_force(make_body(position=(0.0, 0.0)))

    def test_whole_step_fails(self):
        """One bad body fails the call; there is no partial result."""
        good = make_body(name="good")
        bad = make_body(name="bad", position=(0.0, 0.0))

        with pytest.raises(ZeroSeparationError, match="bad"):
            step([good, bad], dt=0.1, engine_on=False)

    @pytest.mark.parametrize("dt", [0.0, float("inf"), float("nan")])
    def test_invalid_time_step(self, dt):
        with pytest.raises(DomainError):
            step([make_body()], dt=dt, engine_on=False)

    def test_invalid_time_step_with_no_bodies(self):
        with pytest.raises(DomainError):
            step([], dt=0.0, engine_on=False)

    def test_step_body_validates(self):
        with pytest.raises(ZeroSeparationError):
            step_body(make_body(position=(0.0, 0.0)), dt=1.0, engine_on=True)
