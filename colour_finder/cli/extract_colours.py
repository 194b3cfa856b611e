import argparse
import json
import logging
import sys

from .. import config
from ..errors import ColourFinderError
from ..models.focus_region import FocusRegion
from ..services.colour_service import ColourService

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="colour-finder",
        description="Print average / brightest / opposite / text colours for image regions.",
    )
    parser.add_argument("image", help="Path to the source image")
    parser.add_argument(
        "--region", nargs=4, type=int, action="append", metavar=("X", "Y", "W", "H"),
        help="Focus rectangle; repeat for several. Defaults to the whole image.",
    )
    parser.add_argument(
        "--size", nargs=2, type=int, metavar=("W", "H"),
        help="Sample grid size (defaults to COLOUR_SAMPLE_WIDTH/HEIGHT or 16x16)",
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=config.log_level(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )

    width, height = args.size or (None, None)
    try:
        colour_service = ColourService(sample_width=width, sample_height=height)
        image = colour_service.image_service.load(args.image)
        rectangles = args.region or [(0, 0, image.width, image.height)]
        regions = [FocusRegion(image, *rect) for rect in rectangles]

        for result in colour_service.extract_many(regions):
            print(json.dumps(result.to_dict()))
    except (ColourFinderError, ValueError) as err:
        logger.error(f"{args.image}: {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
