"""
Benchmark brightness processing (Numba row kernel vs per-pixel path).
"""

import time

import numpy as np

from pixpro import BrightnessProcessor, PixelBuffer

WIDTH, HEIGHT = 1920, 1080
NUM_ITERATIONS = 20

print("=" * 80)
print("BRIGHTNESS BENCHMARK (NumPy/Numba - Row Kernel)")
print(f"Testing with {WIDTH}x{HEIGHT} pixels, {NUM_ITERATIONS} iterations")
print("=" * 80)

# Setup
rng = np.random.default_rng(0)
source = PixelBuffer.from_array(rng.random((HEIGHT, WIDTH, 4), dtype=np.float32))
pixels = WIDTH * HEIGHT

# Warmup (triggers Numba compilation)
print("\nWarming up...")
BrightnessProcessor(20).process(PixelBuffer(WIDTH, HEIGHT), source)

# Worker scaling
print("\n" + "=" * 80)
print("WORKER SCALING (vectorized=True)")
print("=" * 80)

baseline = None
for workers in [1, 2, 4, 8]:
    processor = BrightnessProcessor(20, max_workers=workers)
    target = PixelBuffer(WIDTH, HEIGHT)

    times = []
    for _ in range(NUM_ITERATIONS):
        start = time.perf_counter()
        processor.process(target, source)
        times.append((time.perf_counter() - start) * 1000)

    mean_time = np.mean(times)
    std_time = np.std(times)
    baseline = baseline or mean_time

    print(
        f"workers={workers}: {mean_time:>7.3f} ms +/- {std_time:.3f} ms "
        f"({pixels / mean_time * 1000 / 1e6:>5.0f} M pixels/s, "
        f"{baseline / mean_time:.2f}x)"
    )

# Per-pixel path (small region, it is orders of magnitude slower)
print("\n" + "=" * 80)
print("PER-PIXEL PATH (vectorized=False, 256x256 region)")
print("=" * 80)

small = PixelBuffer.from_array(rng.random((256, 256, 4), dtype=np.float32))
small_pixels = 256 * 256

for vectorized in [False, True]:
    processor = BrightnessProcessor(20, max_workers=1, vectorized=vectorized)
    target = PixelBuffer(256, 256)

    times = []
    for _ in range(3):
        start = time.perf_counter()
        processor.process(target, small)
        times.append((time.perf_counter() - start) * 1000)

    mean_time = np.mean(times)
    print(
        f"vectorized={vectorized!s:<5}: {mean_time:>9.3f} ms "
        f"({small_pixels / mean_time * 1000 / 1e6:>7.2f} M pixels/s)"
    )

print("\n" + "=" * 80)
