import numpy as np
import pytest

from seismowaves import (
    DispersionRelation,
    DisplacementGrid,
    GridSettings,
    Mode,
    ModeSet,
    animation_frames,
    displacement_grid,
    frame_times,
)


@pytest.mark.unit
class TestModeSet:
    def test_labels_truncate_to_two_decimals(self, crust_mantle):
        mode = Mode(index=1, phase_velocity=3.98765, medium=crust_mantle)
        assert mode.label == "1) 3.98"

    def test_sorted_on_construction(self, crust_mantle):
        modes = ModeSet(
            [
                Mode(index=2, phase_velocity=4.4, medium=crust_mantle),
                Mode(index=1, phase_velocity=3.9, medium=crust_mantle),
            ]
        )
        assert modes.pairs() == [(1, 3.9), (2, 4.4)]

    def test_select_by_index(self, crust_mantle_modes):
        higher = crust_mantle_modes.select([2])
        assert len(higher) == 1
        assert higher[0].index == 2

    def test_select_unknown_index(self, crust_mantle_modes):
        with pytest.raises(IndexError):
            crust_mantle_modes.select([5])

    def test_slicing_returns_mode_set(self, crust_mantle_modes):
        assert isinstance(crust_mantle_modes[:1], ModeSet)


@pytest.mark.physics
class TestModeEigenfunction:
    def test_displacement_continuous_at_interface(self, crust_mantle, crust_mantle_modes):
        relation = DispersionRelation(crust_mantle)
        x = np.linspace(-50.0, 50.0, 7)
        for mode in crust_mantle_modes:
            above = relation.layer_wavefield(mode.slowness, x, crust_mantle.thickness, 1.3)
            below = relation.half_space_wavefield(mode.slowness, x, crust_mantle.thickness, 1.3)
            np.testing.assert_allclose(above, below, rtol=1e-6, atol=1e-8)

    def test_traction_continuous_at_interface(self, crust_mantle, crust_mantle_modes):
        relation = DispersionRelation(crust_mantle)
        H, h = crust_mantle.thickness, 1e-4
        for mode in crust_mantle_modes:
            p = mode.slowness
            du1 = (
                relation.layer_wavefield(p, 0.0, H + h, 0.0)
                - relation.layer_wavefield(p, 0.0, H - h, 0.0)
            ) / (2 * h)
            du2 = (
                relation.half_space_wavefield(p, 0.0, H + h, 0.0)
                - relation.half_space_wavefield(p, 0.0, H - h, 0.0)
            ) / (2 * h)
            assert crust_mantle.mu1 * du1 == pytest.approx(crust_mantle.mu2 * du2, rel=1e-4, abs=1e-6)

    def test_decays_in_half_space(self, crust_mantle_modes):
        for mode in crust_mantle_modes:
            H = mode.medium.thickness
            near = abs(mode.eigenfunction(0.0, H, 0.0))
            far = abs(mode.eigenfunction(0.0, H + 2000.0, 0.0))
            assert far < near

    def test_eigenfunction_is_real_and_broadcasts(self, crust_mantle_modes):
        mode = crust_mantle_modes[0]
        x = np.linspace(-10, 10, 5)
        z = np.array([[0.0], [20.0], [60.0]])
        u = mode.eigenfunction(x, z, 0.0)
        assert u.shape == (3, 5)
        assert np.isrealobj(u)

    def test_surface_amplitude(self, crust_mantle_modes):
        # A1 = B1 = 1 gives u = 2 cos(w (t - p x)) at the free surface
        mode = crust_mantle_modes[0]
        assert mode.eigenfunction(0.0, 0.0, 0.0) == pytest.approx(2.0)

    def test_negative_depth_rejected(self, crust_mantle_modes):
        with pytest.raises(ValueError):
            crust_mantle_modes[0].eigenfunction(0.0, -1.0, 0.0)


@pytest.mark.physics
class TestDisplacementGrid:
    def test_default_grid_shapes(self, crust_mantle, crust_mantle_modes):
        grid = displacement_grid(crust_mantle, crust_mantle_modes, time=0.0)
        assert isinstance(grid, DisplacementGrid)
        assert grid.layer.shape == (100, 100)
        assert grid.half_space.shape == (100, 100)
        assert grid.z_layer[-1] == crust_mantle.thickness
        assert grid.z_half_space[0] == crust_mantle.thickness
        assert grid.z_half_space[-1] == 200.0
        assert grid.extent() == (-100.0, 100.0, 200.0, 0.0)
        np.testing.assert_allclose(grid.phase_velocities, crust_mantle_modes.phase_velocities)

    def test_superposition(self, crust_mantle, crust_mantle_modes):
        both = displacement_grid(crust_mantle, crust_mantle_modes, time=2.0)
        first = displacement_grid(crust_mantle, crust_mantle_modes.select([1]), time=2.0)
        second = displacement_grid(crust_mantle, crust_mantle_modes.select([2]), time=2.0)
        np.testing.assert_allclose(both.layer, first.layer + second.layer)
        np.testing.assert_allclose(both.half_space, first.half_space + second.half_space)

    def test_matches_mode_eigenfunction(self, crust_mantle, crust_mantle_modes):
        mode = crust_mantle_modes[0]
        x = np.array([-30.0, 0.0, 45.0])
        z_layer = np.array([0.0, 10.0, 35.0])
        z_half = np.array([35.0, 80.0])
        grid = displacement_grid(
            crust_mantle, [mode], time=0.7, x=x, z_layer=z_layer, z_half_space=z_half
        )
        gx, gz = np.meshgrid(x, z_layer)
        np.testing.assert_allclose(grid.layer, mode.eigenfunction(gx, gz, 0.7))
        gx, gz = np.meshgrid(x, z_half)
        np.testing.assert_allclose(grid.half_space[1:], mode.eigenfunction(gx, gz, 0.7)[1:])

    def test_empty_selection_gives_zero_field(self, crust_mantle):
        grid = displacement_grid(crust_mantle, ModeSet(), time=0.0)
        assert grid.max_abs == 0.0
        assert grid.phase_velocities.size == 0

    def test_deep_layer_extends_half_space(self):
        from seismowaves import MediumParams, find_modes

        medium = MediumParams(thickness=150.0, beta1=3.5, beta2=4.5, rho1=2.6, rho2=3.4, frequency=0.02)
        grid = displacement_grid(medium, find_modes(medium), time=0.0)
        assert grid.z_half_space[-1] == 300.0

    def test_layer_grid_outside_layer_rejected(self, crust_mantle, crust_mantle_modes):
        with pytest.raises(ValueError):
            displacement_grid(crust_mantle, crust_mantle_modes, 0.0, z_layer=[0.0, 50.0])

    def test_half_space_grid_above_interface_rejected(self, crust_mantle, crust_mantle_modes):
        with pytest.raises(ValueError):
            displacement_grid(crust_mantle, crust_mantle_modes, 0.0, z_half_space=[10.0, 50.0])

    def test_two_dimensional_axis_rejected(self, crust_mantle, crust_mantle_modes):
        with pytest.raises(ValueError):
            displacement_grid(crust_mantle, crust_mantle_modes, 0.0, x=np.zeros((2, 2)))

    def test_custom_settings(self, crust_mantle, crust_mantle_modes):
        settings = GridSettings(nx=20, nz=10, x_min=-5.0, x_max=5.0)
        grid = displacement_grid(crust_mantle, crust_mantle_modes, 0.0, settings=settings)
        assert grid.layer.shape == (10, 20)


@pytest.mark.unit
class TestAnimation:
    def test_frame_times_wrap(self):
        times = frame_times(150, period=10.0, dt=0.1)
        assert times.size == 150
        assert times.max() < 10.0
        assert times[100] == pytest.approx(0.0, abs=1e-9)

    def test_frames_share_grid_and_differ_in_time(self, crust_mantle, crust_mantle_modes):
        frames = animation_frames(crust_mantle, crust_mantle_modes, [0.0, 1.0, 12.5])
        assert len(frames) == 3
        assert frames[2].time == pytest.approx(2.5)
        np.testing.assert_array_equal(frames[0].x, frames[1].x)
        assert not np.allclose(frames[0].layer, frames[1].layer)

    def test_field_repeats_after_one_wave_period(self, crust_mantle, crust_mantle_modes):
        # one wave period 1/f later the field repeats
        period = 1.0 / crust_mantle.frequency
        a = displacement_grid(crust_mantle, crust_mantle_modes, 0.3)
        b = displacement_grid(crust_mantle, crust_mantle_modes, 0.3 + period)
        np.testing.assert_allclose(a.layer, b.layer, atol=1e-9)

    def test_invalid_frame_arguments(self):
        with pytest.raises(ValueError):
            frame_times(0)
        with pytest.raises(ValueError):
            frame_times(10, period=-1.0)
