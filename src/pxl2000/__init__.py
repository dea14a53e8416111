"""PXL-2000 - a toy-camcorder look for live camera frames.

Blur, sharpen, posterize and temporally interleave the luma of each
frame, then frame it with a black border.
"""

__version__ = "0.1.0"


def main() -> None:
    """Entry point for the pxl2000 command."""
    print(f"PXL-2000 v{__version__}")
    print("Toy camcorder effect for live camera frames")
    print()
    print("Available commands:")
    print("  python scripts/run_pxl2000.py                 - Preview webcam")
    print("  python scripts/run_pxl2000.py --video in.mp4  - Preview video file")
    print("  python scripts/run_pxl2000.py --video in.mp4 --output out.mp4")
    print()
    print("Settings live in config/default.yaml.")
