"""
Example: brightness adjustment usage.

Demonstrates how to use pixpro for:
- Whole-buffer brightness changes
- Region-limited adjustment with a copy
- Progress reporting
- Custom per-pixel operations
"""

import logging

import numpy as np

from pixpro import (
    BrightnessProcessor,
    Color,
    FunctionProcessor,
    PixelBuffer,
    ProgressEvent,
    Rectangle,
    adjust_brightness,
)

# Configure logging to see processing statistics
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


def generate_sample_image(width: int = 640, height: int = 480) -> PixelBuffer:
    """Generate a horizontal grey ramp."""
    ramp = np.linspace(0.0, 1.0, width, dtype=np.float32)
    rgba = np.ones((height, width, 4), dtype=np.float32)
    rgba[..., :3] = ramp[None, :, None]
    return PixelBuffer.from_array(rgba)


def example_1_whole_buffer():
    """Example 1: Brighten a whole buffer in place."""
    print("\n" + "=" * 70)
    print("EXAMPLE 1: Whole-Buffer Brightness")
    print("=" * 70)

    image = generate_sample_image()
    print(f"Mean before: {image.to_array()[..., :3].mean():.3f}")

    adjust_brightness(image, 25)

    print(f"Mean after:  {image.to_array()[..., :3].mean():.3f}")


def example_2_region_copy():
    """Example 2: Darken the top half into a new buffer."""
    print("\n" + "=" * 70)
    print("EXAMPLE 2: Region Adjustment (inplace=False)")
    print("=" * 70)

    image = generate_sample_image()
    original = image.to_array()
    top = Rectangle(0, 0, image.width, image.height // 2)
    darker = adjust_brightness(image, -40, rectangle=top, inplace=False)

    data = darker.to_array()
    print(f"Top mean:    {data[: top.height, :, :3].mean():.3f}")
    print(f"Bottom mean: {data[top.height :, :, :3].mean():.3f}")
    print(f"Original untouched: {np.array_equal(image.to_array(), original)}")


def example_3_progress():
    """Example 3: Report progress every 25%."""
    print("\n" + "=" * 70)
    print("EXAMPLE 3: Progress Listener")
    print("=" * 70)

    image = generate_sample_image()
    quarter = image.height // 4

    def on_progress(event: ProgressEvent) -> None:
        if event.rows_processed % quarter == 0:
            print(f"  {event.fraction:.0%} ({event.rows_processed}/{event.total_rows} rows)")

    BrightnessProcessor(10, max_workers=4).add_progress_listener(on_progress).process(image)


def example_4_custom_operation():
    """Example 4: Wrap a plain function as a processor."""
    print("\n" + "=" * 70)
    print("EXAMPLE 4: Custom Per-Pixel Operation")
    print("=" * 70)

    def invert(color: Color) -> Color:
        return Color(1.0 - color.r, 1.0 - color.g, 1.0 - color.b, color.a)

    image = generate_sample_image(64, 48)
    FunctionProcessor(invert, max_workers=2).process(image)

    with image.lock() as pixels:
        print(f"Leftmost pixel after invert: {pixels[0, 0]}")


if __name__ == "__main__":
    example_1_whole_buffer()
    example_2_region_copy()
    example_3_progress()
    example_4_custom_operation()
