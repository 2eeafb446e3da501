import matplotlib.pyplot as plt
import numpy as np
import pytest

from grid_fov import Grid, compute_fov, fov_mask, rasterize_fov_octant


def test_grid_shape_creation_defaults():
    g = Grid(shape=(3, 5))
    assert g.shape == (3, 5)
    assert g.height == 3 and g.width == 5
    assert not g.opaque.any()
    assert g.opaque.dtype == np.bool_


def test_grid_from_opaque_array():
    arr = np.zeros((4, 6), dtype=np.uint8)
    arr[1, 2] = 255
    g = Grid(opaque=arr)
    assert g.shape == (4, 6)
    assert g.is_opaque(2, 1)
    assert not g.is_opaque(1, 2)


def test_grid_invalid_constructor():
    with pytest.raises(ValueError):
        Grid()  # must pick opaque or shape
    with pytest.raises(ValueError):
        Grid(opaque=np.zeros((2, 2)), shape=(3, 3))
    with pytest.raises(ValueError):
        Grid(shape=(0, 4))
    with pytest.raises(ValueError):
        Grid(opaque=np.zeros((2, 2, 2)))


def test_bounds_checked_access():
    g = Grid(shape=(4, 6))
    assert g.contains(5, 3)
    assert not g.contains(6, 3)
    assert not g.contains(-1, 0)
    with pytest.raises(IndexError):
        g.is_opaque(6, 0)
    with pytest.raises(IndexError):
        g.set_opaque(0, 4)
    g.set_opaque(5, 3)
    assert g.is_opaque(5, 3)
    g.set_opaque(5, 3, False)
    assert not g.is_opaque(5, 3)


def test_new_lightmap():
    g = Grid(shape=(4, 6))
    lm = g.new_lightmap()
    assert lm.shape == (4, 6)
    assert lm.dtype == np.uint8
    assert not lm.any()


def test_methods_match_functional_api():
    arr = np.zeros((15, 15), dtype=bool)
    arr[4, 9] = arr[10, 3] = True
    g = Grid(opaque=arr)

    assert np.array_equal(g.fov((7, 7), 6, dark_walls=True),
                          compute_fov((7, 7), 6, arr, dark_walls=True))

    a = g.new_lightmap()
    b = g.new_lightmap()
    g.rasterize_octant((7, 7), 6, 3, a, skip_attenuation=True)
    rasterize_fov_octant((7, 7), 6, arr, 3, b, skip_attenuation=True)
    assert np.array_equal(a, b)


def test_grid_object_accepted_by_functional_api():
    g = Grid(shape=(9, 9))
    g.set_opaque(6, 4)
    assert np.array_equal(compute_fov((4, 4), 4, g),
                          compute_fov((4, 4), 4, g.opaque))


def test_fov_reuses_output():
    g = Grid(shape=(9, 9))
    out = np.full((9, 9), 3, dtype=np.uint8)
    result = g.fov((0, 0), 2, out, skip_attenuation=True)
    assert result is out
    assert out[8, 8] == 0            # cleared, not reached
    assert out[0, 2] == 255


def test_fov_mask():
    arr = np.zeros((11, 11), dtype=bool)
    arr[5, 7] = True
    mask = fov_mask((5, 5), 5, arr)
    assert mask.dtype == np.bool_
    assert mask[5, 7] and not mask[5, 9]
    assert not fov_mask((5, 5), 5, arr, dark_walls=True)[5, 7]


def test_plot_returns_axes():
    g = Grid(shape=(6, 8))
    g.set_opaque(2, 2)
    lm = g.fov((4, 3), 4)
    ax = g.plot(lm, origin=(4, 3), show=False)
    assert len(ax.get_images()) == 2
    assert ax.get_xlim() == (-0.5, 7.5)
    plt.close(ax.figure)

    with pytest.raises(ValueError):
        g.plot(np.zeros((2, 2), dtype=np.uint8), show=False)
    plt.close("all")
