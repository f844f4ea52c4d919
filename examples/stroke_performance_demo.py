"""
Performance demonstration for brush strokes.

Paints long erase and restore strokes across a large cutout and reports the
time per stroke, including the history snapshot taken when it ends. Run
this script to check interactive painting stays fast on your system.

Install dependencies:
    pip install numpy Pillow
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import time
from PIL import Image

from OC_Libs.MaskEditingLib import (
    BrushSettings,
    HistoryManager,
    PixelBuffer,
    SourceImage,
    StrokeEngine,
)


def benchmark_strokes(size, brush_size, tool="erase", iterations=3):
    """Benchmark diagonal strokes on a size x size buffer."""
    print(f"\nBenchmarking {size}x{size} buffer, brush={brush_size}, tool={tool}")
    print("-" * 60)

    buffer = PixelBuffer.from_image(Image.new("RGBA", (size, size), (200, 100, 50, 255)))
    source = SourceImage(Image.new("RGBA", (size, size), (10, 20, 30, 255)))
    history = HistoryManager()
    engine = StrokeEngine(
        buffer,
        source=source,
        settings=BrushSettings(size=brush_size, hardness=50, opacity=60, tool=tool),
        on_commit=history.commit,
    )

    times = []
    for i in range(iterations):
        start = time.time()
        engine.begin_stroke((0, 0))
        for pos in range(0, size, 7):
            engine.continue_stroke((pos, pos))
        engine.end_stroke()
        elapsed = time.time() - start
        times.append(elapsed)
        label = " (warmup)" if i == 0 else ""
        print(f"  Stroke {i+1}: {elapsed:.3f}s, {engine.stamp_count} stamps{label}")

    avg = sum(times[1:]) / len(times[1:])
    print(f"Average (excluding warmup): {avg:.3f}s")
    return avg


def main():
    print("=" * 60)
    print("Brush Stroke Performance Demo")
    print("=" * 60)

    test_cases = [
        (500, 20, "erase"),
        (500, 20, "restore"),
        (1500, 60, "erase"),
        (1500, 60, "restore"),
    ]

    results = []
    for size, brush_size, tool in test_cases:
        avg = benchmark_strokes(size, brush_size, tool)
        results.append((size, brush_size, tool, avg))

    print("\n" + "=" * 60)
    print("Summary")
    print("=" * 60)
    for size, brush_size, tool, avg in results:
        print(f"  {size}x{size}  brush {brush_size:3d}  {tool:8s} {avg:.3f}s per stroke")


if __name__ == "__main__":
    main()
