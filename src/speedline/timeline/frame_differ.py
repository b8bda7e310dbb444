"""Duplicate screenshot detection.

Chrome emits a screenshot on every compositor frame, so long stretches of a
trace repeat the same image. Only the first screenshot of each run of
identical consecutive images is kept.
"""

from typing import Optional

import structlog

from ..frame import Frame

logger = structlog.get_logger()


def are_equal(frame_a: Frame, frame_b: Frame) -> bool:
    """Check whether two frames carry byte-identical images."""
    return frame_a.image_data == frame_b.image_data


class FrameDiffer:
    """Detects changes between consecutive screenshots.

    Comparison is exact byte equality against the last kept screenshot only,
    not against every earlier one.
    """

    def __init__(self):
        self.last_image: Optional[bytes] = None
        self.frames_kept = 0
        self.frames_skipped = 0

    def should_keep_frame(self, image_data: bytes) -> bool:
        """Determine if a screenshot differs from the last kept one.

        Args:
            image_data: Encoded screenshot bytes

        Returns:
            True if the screenshot should be kept, False if it repeats the
            previous one
        """
        if self.last_image is not None and image_data == self.last_image:
            self.frames_skipped += 1
            logger.debug(
                "frame_skipped_duplicate",
                size_bytes=len(image_data),
                total_skipped=self.frames_skipped,
            )
            return False

        self.last_image = image_data
        self.frames_kept += 1
        return True

    def get_stats(self) -> dict:
        """Get frame differ statistics.

        Returns:
            Dictionary with statistics
        """
        total = self.frames_kept + self.frames_skipped
        skip_rate = (self.frames_skipped / total * 100) if total > 0 else 0

        return {
            "frames_kept": self.frames_kept,
            "frames_skipped": self.frames_skipped,
            "skip_rate_percent": skip_rate,
        }
