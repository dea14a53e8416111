#!/usr/bin/env python
"""Preview or export the PXL-2000 effect on a webcam or video file."""

import argparse
import logging
import time
from typing import Optional

import cv2

from pxl2000.filters import Pxl2000Filter
from pxl2000.sources import buffer_to_bgr, create_source
from pxl2000.utils.config import load_config


logger = logging.getLogger(__name__)


def run(
    config_path: Optional[str] = None,
    video: Optional[str] = None,
    output: Optional[str] = None,
    display: bool = True,
    workers: Optional[int] = None,
    use_palette: bool = False,
):
    """Run the filter over a source until it ends or ESC/q is pressed.

    Args:
        config_path: YAML config file (default: config/default.yaml)
        video: Read this video file instead of the webcam
        output: Write processed frames to this video file
        display: Show a preview window
        workers: Row worker threads (1 = serial)
        use_palette: Quantize the preview onto the filter's palette
    """
    overrides = {}
    if video:
        overrides["source.kind"] = "file"
        overrides["source.path"] = video
    if workers is not None:
        overrides["scheduler.max_workers"] = workers
    config = load_config(config_path, overrides=overrides)

    writer = None
    frames = 0
    start_time = time.time()

    with Pxl2000Filter.from_config(config) as pxl_filter, \
            create_source(config.source) as source:
        palette = pxl_filter.described_palette() if use_palette else None
        logger.info("Running %s on %s", pxl_filter.name, source.source_name)

        try:
            for frame in source:
                pxl_filter.process(frame.buffer)
                image = buffer_to_bgr(frame.buffer, palette)
                frames += 1

                if output:
                    if writer is None:
                        fourcc = cv2.VideoWriter_fourcc(*"mp4v")
                        writer = cv2.VideoWriter(
                            output, fourcc, source.fps, (frame.width, frame.height)
                        )
                        logger.info("Writing %s", output)
                    writer.write(image)

                if display:
                    cv2.imshow("PXL-2000", image)
                    key = cv2.waitKey(1) & 0xFF
                    if key in (27, ord("q")):
                        break
        except KeyboardInterrupt:
            logger.info("Interrupted")
        finally:
            if writer is not None:
                writer.release()
            if display:
                cv2.destroyAllWindows()

    elapsed = time.time() - start_time
    logger.info(
        "Processed %d frames in %.1fs (%.1f fps)",
        frames, elapsed, frames / elapsed if elapsed > 0 else 0.0,
    )


def main():
    parser = argparse.ArgumentParser(description="PXL-2000 camera effect")
    parser.add_argument("--config", type=str, default=None,
                        help="Path to YAML config")
    parser.add_argument("--video", type=str, default=None,
                        help="Video file to process instead of the webcam")
    parser.add_argument("--output", type=str, default=None,
                        help="Write processed frames to this file")
    parser.add_argument("--no-display", action="store_true",
                        help="Disable the preview window")
    parser.add_argument("--workers", type=int, default=None,
                        help="Row worker threads (1 = serial)")
    parser.add_argument("--palette", action="store_true",
                        help="Quantize the preview onto the 7-level grey palette")
    args = parser.parse_args()

    run(
        config_path=args.config,
        video=args.video,
        output=args.output,
        display=not args.no_display,
        workers=args.workers,
        use_palette=args.palette,
    )


if __name__ == "__main__":
    main()
