import pytest
from PIL import Image

from auplot.tiles import TiledImage


def _gradient(w, h):
    image = Image.new("RGB", (w, h))
    for x in range(w):
        for y in range(h):
            image.putpixel((x, y), (x * 20 % 256, y * 30 % 256, (x + y) * 7 % 256))
    return image


@pytest.fixture
def tiled(tmp_path):
    image = TiledImage(tmp_path / "tiles", 10, 7, part=4)
    yield image
    image.close()


def test_new_image_is_background(tiled):
    out = tiled.image()
    assert out.size == (10, 7)
    assert out.getextrema() == ((0, 0), (0, 0), (0, 0))


def test_draw_sets_pixel_across_tiles(tiled):
    tiled.draw(9, 6, (10, 20, 30))
    tiled.draw(1, 1, (1, 2, 3))
    out = tiled.image()
    assert out.getpixel((9, 6)) == (10, 20, 30)
    assert out.getpixel((1, 1)) == (1, 2, 3)
    assert out.getpixel((5, 5)) == (0, 0, 0)


def test_draw_out_of_range(tiled):
    with pytest.raises(IndexError):
        tiled.draw(10, 0, (1, 1, 1))
    with pytest.raises(IndexError):
        tiled.draw(-1, 0, (1, 1, 1))


def test_set_image_round_trip(tiled):
    source = _gradient(11, 9)
    tiled.set_image(source)
    assert tiled.size == (11, 9)
    assert tiled.image().tobytes() == source.tobytes()


def test_crop_without_scaling(tiled):
    source = _gradient(10, 7)
    tiled.set_image(source)
    region = tiled.crop(2, 1, 6, 5, 6, 5)
    assert region.tobytes() == source.crop((2, 1, 8, 6)).tobytes()


def test_crop_scaled_size(tiled):
    tiled.set_image(_gradient(10, 7))
    region = tiled.crop(0, 0, 5, 5, 10, 3)
    assert region.size == (10, 3)


def test_crop_outside_raises(tiled):
    with pytest.raises(ValueError):
        tiled.crop(8, 0, 5, 2, 5, 2)
    with pytest.raises(ValueError):
        tiled.crop(0, 0, 0, 2, 1, 1)


def test_resize_larger_keeps_content(tiled):
    source = _gradient(10, 7)
    tiled.set_image(source)
    tiled.resize(13, 9)
    out = tiled.image()
    assert out.size == (13, 9)
    assert out.crop((0, 0, 10, 7)).tobytes() == source.tobytes()
    assert out.getpixel((12, 8)) == (0, 0, 0)
    assert out.getpixel((11, 2)) == (0, 0, 0)


def test_resize_smaller_crops(tiled):
    source = _gradient(10, 7)
    tiled.set_image(source)
    tiled.resize(5, 3)
    assert tiled.image().tobytes() == source.crop((0, 0, 5, 3)).tobytes()


def test_scale_to_same_size_is_identity(tiled):
    source = _gradient(10, 7)
    tiled.set_image(source)
    tiled.scale(10, 7)
    assert tiled.image().tobytes() == source.tobytes()


def test_scale_double_matches_nearest(tiled):
    source = _gradient(5, 3)
    tiled.set_image(source)
    tiled.scale(10, 6)
    expected = source.resize((10, 6), Image.Resampling.NEAREST)
    assert tiled.size == (10, 6)
    assert tiled.image().tobytes() == expected.tobytes()


def test_fill(tiled):
    tiled.fill((5, 6, 7))
    assert tiled.image().getextrema() == ((5, 5), (6, 6), (7, 7))
    tiled.fill()
    assert tiled.image().getextrema() == ((0, 0), (0, 0), (0, 0))


def test_clear(tiled):
    tiled.clear()
    assert tiled.size == (0, 0)
    assert tiled.image().size == (0, 0)


def test_copy_from(tmp_path, tiled):
    source = _gradient(10, 7)
    tiled.set_image(source)
    tiled.draw(3, 3, (9, 9, 9))
    with TiledImage(tmp_path / "tiles", part=4) as other:
        other.copy_from(tiled)
        assert other.size == (10, 7)
        assert other.image().tobytes() == tiled.image().tobytes()


def test_copy_from_other_part_size(tmp_path, tiled):
    source = _gradient(10, 7)
    tiled.set_image(source)
    with TiledImage(tmp_path / "tiles", part=3) as other:
        other.copy_from(tiled)
        assert other.image().tobytes() == source.tobytes()


def test_close_removes_tiles(tmp_path):
    root = tmp_path / "tiles"
    image = TiledImage(root, 6, 6, part=4)
    assert (root / "0").is_dir()
    image.close()
    assert not (root / "0").exists()


def test_negative_size_rejected(tmp_path):
    with pytest.raises(ValueError):
        TiledImage(tmp_path / "tiles", -1, 3)