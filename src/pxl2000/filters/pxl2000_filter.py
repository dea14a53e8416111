"""Simulated PXL-2000 toy camcorder look.

Blurs, sharpens, compresses and posterizes the luma of each frame,
refreshing only half of the pixels per frame in a checkerboard that
flips every frame, then masks the edges with a solid border.

See http://fox-gieg.com/tutorials/2008/fake-pxl2000-effect/
"""

import logging
from typing import Optional

from pxl2000.color import MonochromePalette
from pxl2000.core import ImageBuffer, PaletteDescriptor
from pxl2000.parallel import RowRangeScheduler, create_scheduler
from pxl2000.utils.config import FilterConfig, Pxl2000Config

from .accumulator import FrameAccumulator
from .base_filter import ImageFilter
from .border import BorderCompositor
from .row_processor import ConvolutionRowProcessor
from .sequence import SequenceController


logger = logging.getLogger(__name__)


class Pxl2000Filter(ImageFilter):
    """Stateful PXL-2000 effect for a live stream of frames.

    Args:
        config: Effect constants. Defaults to :class:`FilterConfig`.
        scheduler: Runs the row pass. When omitted the filter creates a
            thread-pool scheduler and shuts it down in :meth:`close`.
    """

    def __init__(
        self,
        config: Optional[FilterConfig] = None,
        scheduler: Optional[RowRangeScheduler] = None,
    ):
        super().__init__()
        self.config = config or FilterConfig()
        self._owns_scheduler = scheduler is None
        self._scheduler = scheduler or create_scheduler()

        self._accumulator = FrameAccumulator()
        self._processor = ConvolutionRowProcessor(self.config)
        self._compositor = BorderCompositor(self.config.border_color)
        self._sequence = SequenceController()
        self._palette = MonochromePalette(self.config.palette_levels)

    @classmethod
    def from_config(cls, config: Pxl2000Config) -> "Pxl2000Filter":
        """Build a filter and its scheduler from the root configuration."""
        scheduler = create_scheduler(
            max_workers=config.scheduler.max_workers,
            min_rows_per_chunk=config.scheduler.min_rows_per_chunk,
        )
        instance = cls(config.filter, scheduler)
        instance._owns_scheduler = True
        return instance

    # ------------------------------------------------------------------
    # ImageFilter
    # ------------------------------------------------------------------

    def is_monochrome(self) -> bool:
        return True

    def described_palette(self) -> PaletteDescriptor:
        return self._palette.describe()

    def _apply(self, frame: ImageBuffer) -> None:
        border = self.border_width(frame.width)
        first_row, last_row = border, frame.height - border

        self._accumulator.ensure_capacity(frame)
        staged = self._accumulator.stage()

        if self._has_interior(frame, border):
            source = frame.rows()
            target = staged.reshape(frame.height, frame.width)
            phase_for = self._sequence.phase_for

            def body(lo: int, hi: int) -> None:
                self._processor.process_rows(source, target, lo, hi, border, phase_for)

            self._scheduler.for_range(body, first_row, last_row)
        else:
            logger.debug(
                "No interior in %dx%d frame with border %d, skipping row pass",
                frame.width, frame.height, border,
            )

        self._accumulator.commit(staged)
        if border < 1:
            self._compositor.fill(frame)
        else:
            self._compositor.composite(frame, staged, border)

        self._sequence.advance()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def border_width(self, width: int) -> int:
        """Border width in pixels for a frame ``width`` pixels wide."""
        return int(width * self.config.border_size)

    @staticmethod
    def _has_interior(frame: ImageBuffer, border: int) -> bool:
        return (
            border >= 1
            and frame.height - 2 * border > 0
            and frame.width - 2 * border > 0
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Drop the remembered frame; the next frame reseeds it."""
        with self._lock:
            self._accumulator.reset()

    def close(self) -> None:
        """Shut down the scheduler if this filter created it."""
        if self._owns_scheduler:
            self._scheduler.shutdown()

    def __enter__(self) -> "Pxl2000Filter":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
