from typing import Iterable, List, Optional
import logging

from .. import config
from ..errors import ColourFinderError
from ..models.colour import ColourResult
from ..models.focus_region import FocusRegion
from ..utils import colour_math
from .image_service import ImageService

logger = logging.getLogger(__name__)


class ColourService:
    """
    Turns focus regions into colour metadata.
    *   Decoding / cropping is delegated to ImageService.
    *   Keeps no state between calls.
    """

    def __init__(self, sample_width: int = None, sample_height: int = None):
        """
        Args:
            sample_width: width of the grid colours are computed on (defaults to env var)
            sample_height: height of that grid (defaults to env var)
        """
        env_width, env_height = config.sample_size()
        self.sample_width = env_width if sample_width is None else sample_width
        self.sample_height = env_height if sample_height is None else sample_height
        if self.sample_width <= 0 or self.sample_height <= 0:
            raise ValueError(
                f"Sample size must be positive, got {self.sample_width}x{self.sample_height}"
            )
        self.image_service = ImageService()

    # ─── Public API ────────────────────────────────────────────────
    def get_image_with_colour(self, region: FocusRegion) -> Optional[ColourResult]:
        results = self.get_images_with_colour([region])
        return results[0] if results else None

    def get_images_with_colour(self, regions: Iterable[FocusRegion]) -> List[ColourResult]:
        return self.extract_many(regions)

    def extract_one(self, region: FocusRegion) -> ColourResult:
        """
        Colour metadata for a single region.

        Raises:
            DecodeFailure: the source could not be decoded.
            RegionOutOfBounds: the rectangle does not fit the image.
        """
        image = self.image_service.load(region.source)
        sample = self.image_service.crop_and_resample(
            image, region, self.sample_width, self.sample_height
        )

        average = colour_math.to_hex(colour_math.average_colour(sample.pixels))
        brightest = colour_math.to_hex(colour_math.brightest_colour(sample.pixels))

        result = ColourResult(
            average=average,
            brightest=brightest,
            opposite=colour_math.opposite_hex(average),
            text_colour=colour_math.text_colour_hex(average),
        )
        logger.debug(f"Region {region.rectangle}: {result}")
        return result

    def extract_many(self, regions: Iterable[FocusRegion]) -> List[ColourResult]:
        """
        Results in input order. All-or-nothing: the first failing region
        aborts the batch and its error propagates.
        """
        results = []
        for i, region in enumerate(regions):
            try:
                results.append(self.extract_one(region))
            except ColourFinderError as err:
                logger.error(f"Colour extraction failed for region {i} {region.rectangle}: {err}")
                raise
        logger.info(f"Extracted colours for {len(results)} region(s)")
        return results
