"""Tests for named image loading."""

import pygame
import pytest

from fishgame.exceptions import AssetError
from fishgame.rendering.graphics import BUILTIN_GRAPHICS
from fishgame.rendering.image_loader import ImageLoader


@pytest.mark.parametrize("name", ["BG", "NEMO", "FOOD", "HEART"])
def test_builtin_graphics_for_every_named_image(name):
    image = ImageLoader.load_image(name)

    assert name in BUILTIN_GRAPHICS
    assert image.get_width() > 0 and image.get_height() > 0


def test_images_are_cached():
    assert ImageLoader.load_image("FOOD") is ImageLoader.load_image("FOOD")


def test_unknown_image_raises():
    with pytest.raises(AssetError):
        ImageLoader.load_image("SHARK")


def test_png_on_disk_overrides_builtin(tmp_path):
    override = pygame.Surface((33, 21))
    override.fill((10, 200, 10))
    pygame.image.save(override, str(tmp_path / "NEMO.png"))
    ImageLoader.configure(str(tmp_path))

    image = ImageLoader.load_image("NEMO")

    assert image.get_size() == (33, 21)


def test_unreadable_png_raises(tmp_path):
    (tmp_path / "HEART.png").write_bytes(b"not a png")
    ImageLoader.configure(str(tmp_path))

    with pytest.raises(AssetError):
        ImageLoader.load_image("HEART")
