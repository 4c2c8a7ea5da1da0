import numpy as np
import pytest
from PIL import Image

from pixconv.errors import OperationError
from pixconv.imgtypes import Blur, ColorModel, DecodedImage, FlipHorizontal, FlipVertical, Resize
from pixconv.operations import apply_operation, apply_operations


@pytest.fixture
def photo(photo_image) -> DecodedImage:
    return DecodedImage.from_pillow(photo_image)


@pytest.fixture
def checkerboard() -> DecodedImage:
    y, x = np.mgrid[0:64, 0:64]
    arr = (((x // 4 + y // 4) % 2) * 255).astype(np.uint8)
    return DecodedImage.from_pillow(Image.fromarray(arr))


def test_multiple_operations(photo):
    operations = [
        Resize(100, 200),
        Blur(1),
        FlipHorizontal(),
        Resize(200, 200),
    ]
    done = apply_operations(photo, operations)
    assert done.size == (200, 200)
    assert done.color_model is ColorModel.RGB


@pytest.mark.parametrize("size", [(400, 500), (100, 200), (1, 1), (217, 10)])
def test_resize_is_exact(photo, size):
    done = apply_operation(photo, Resize(*size))
    assert done.size == size


def test_flip_horizontal(rgb_image):
    done = apply_operation(rgb_image, FlipHorizontal())
    assert done.pixels.getpixel((0, 0)) == (0, 0, 255)
    assert done.pixels.getpixel((5, 0)) == (255, 0, 0)
    assert done.size == rgb_image.size


def test_flip_vertical(gray_image):
    done = apply_operation(gray_image, FlipVertical())
    assert done.pixels.getpixel((0, 0)) == 255
    assert done.pixels.getpixel((0, 1)) == 0
    assert done.color_model is ColorModel.GRAYSCALE


def test_flip_twice_is_identity(photo):
    done = apply_operations(photo, [FlipHorizontal(), FlipHorizontal()])
    assert done.pixels.tobytes() == photo.pixels.tobytes()


def test_blur_softens_edges(checkerboard):
    done = apply_operation(checkerboard, Blur(2))
    arr = np.asarray(done.pixels)
    assert done.size == checkerboard.size
    assert len(np.unique(arr)) > 2


def test_blur_zero_keeps_size(checkerboard):
    assert apply_operation(checkerboard, Blur(0)).size == (64, 64)


def test_indexed_buffers_are_expanded():
    image = Image.new("P", (8, 8), 1)
    image.putpalette([0, 0, 0, 10, 20, 30] + [0, 0, 0] * 254)
    indexed = DecodedImage.from_pillow(image)

    blurred = apply_operation(indexed, Blur(1))
    assert blurred.color_model is ColorModel.RGBA
    assert blurred.pixels.getpixel((4, 4))[:3] == (10, 20, 30)

    resized = apply_operation(indexed, Resize(3, 5))
    assert resized.size == (3, 5)

    flipped = apply_operation(indexed, FlipVertical())
    assert flipped.color_model is ColorModel.INDEXED


def test_order_matters(checkerboard):
    resize_then_blur = apply_operations(checkerboard, [Resize(16, 16), Blur(2)])
    blur_then_resize = apply_operations(checkerboard, [Blur(2), Resize(16, 16)])
    assert resize_then_blur.size == blur_then_resize.size
    assert resize_then_blur.pixels.tobytes() != blur_then_resize.pixels.tobytes()


def test_input_buffer_untouched(photo):
    before = photo.pixels.tobytes()
    done = apply_operations(photo, [Blur(3), FlipVertical(), Resize(10, 10)])
    assert done is not photo
    assert photo.pixels.tobytes() == before
    assert photo.size == (217, 447)


def test_no_operations_returns_input(photo):
    assert apply_operations(photo, []) is photo


def test_unknown_operation():
    image = DecodedImage.from_pillow(Image.new("L", (2, 2)))
    with pytest.raises(OperationError):
        apply_operation(image, "rotate90")


@pytest.mark.parametrize("size", [(0, 5), (5, 0), (-1, 5)])
def test_resize_to_empty_size(photo, size):
    with pytest.raises(OperationError):
        apply_operation(photo, Resize(*size))


def test_unknown_operation_aborts_pipeline(photo):
    class Rotate:
        pass

    with pytest.raises(OperationError):
        apply_operations(photo, [FlipHorizontal(), Rotate(), Resize(5, 5)])
