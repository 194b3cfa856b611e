#!/usr/bin/env python3
"""
Media Colour Finder API Server
Upload an image plus one or more focus rectangles, get colour metadata back.
"""

import json
import logging

from flask import Flask, request, jsonify
from flask_cors import CORS
from werkzeug.exceptions import HTTPException

from . import config
from .errors import DecodeFailure, InvalidColour, RegionOutOfBounds
from .models.focus_region import FocusRegion
from .models.image import Image
from .services.colour_service import ColourService

# --- Centralized Logging Configuration ---
logging.basicConfig(
    level=config.log_level(),
    format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
    datefmt='%H:%M:%S'
)

app = Flask(__name__)
CORS(app)  # Enable CORS for frontend communication

# Configuration
ALLOWED_EXTENSIONS = config.allowed_extensions()
MAX_CONTENT_LENGTH = config.max_upload_bytes()

app.config['MAX_CONTENT_LENGTH'] = MAX_CONTENT_LENGTH

# Initialize services
colour_service = ColourService()

logger = logging.getLogger(__name__)

RECT_FIELDS = ("x", "y", "width", "height")


class InvalidRequest(Exception):
    """Malformed form input."""


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def _load_uploaded_image() -> Image:
    if 'image' not in request.files:
        raise InvalidRequest('No image provided')

    file = request.files['image']
    if file.filename == '':
        raise InvalidRequest('No file selected')
    if not allowed_file(file.filename):
        raise InvalidRequest(f'File type not allowed: {file.filename}')

    # Decode once; every region of the request shares the pixels.
    image = colour_service.image_service.load(file.read())
    logger.info(f"Image uploaded: {file.filename} ({image.width}x{image.height})")
    return image


def _parse_int(field: str, value) -> int:
    # Form fields arrive as strings, JSON regions as numbers.
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            raise InvalidRequest(f"Rectangle field {field} must be an integer, got {value!r}")
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRequest(f"Rectangle field {field} must be an integer, got {value!r}")
    return value


def _parse_rectangle(values, image: Image) -> FocusRegion:
    if all(values.get(field) in (None, '') for field in RECT_FIELDS):
        return FocusRegion(image, 0, 0, image.width, image.height)

    missing = [field for field in RECT_FIELDS if values.get(field) in (None, '')]
    if missing:
        raise InvalidRequest(f"Missing rectangle field(s): {', '.join(missing)}")
    x, y, width, height = (_parse_int(field, values[field]) for field in RECT_FIELDS)
    return FocusRegion(image, x, y, width, height)


def _error(message: str, status: int):
    return jsonify({'success': False, 'message': message}), status


@app.route('/api/colours', methods=['POST'])
def extract_colours():
    """Colour metadata for one rectangle (whole image when omitted)."""
    try:
        image = _load_uploaded_image()
        region = _parse_rectangle(request.form, image)
        result = colour_service.extract_one(region)
        return jsonify({'success': True, 'colours': result.to_dict()})

    except (InvalidRequest, RegionOutOfBounds, InvalidColour) as e:
        logger.warning(f"Rejected colour request: {e}")
        return _error(str(e), 400)
    except DecodeFailure as e:
        logger.warning(f"Undecodable upload: {e}")
        return _error(str(e), 422)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Colour extraction error: {e}")
        return _error('Error extracting colours', 500)


@app.route('/api/colours/batch', methods=['POST'])
def extract_colours_batch():
    """Colour metadata for a JSON list of rectangles, in input order."""
    try:
        image = _load_uploaded_image()
        try:
            raw_regions = json.loads(request.form.get('regions', '[]'))
        except json.JSONDecodeError:
            raise InvalidRequest('regions must be a JSON list')
        if not isinstance(raw_regions, list) or not all(isinstance(r, dict) for r in raw_regions):
            raise InvalidRequest('regions must be a JSON list of objects')

        regions = [_parse_rectangle(raw, image) for raw in raw_regions]
        results = colour_service.extract_many(regions)
        return jsonify({
            'success': True,
            'count': len(results),
            'colours': [result.to_dict() for result in results],
        })

    except (InvalidRequest, RegionOutOfBounds, InvalidColour) as e:
        logger.warning(f"Rejected batch colour request: {e}")
        return _error(str(e), 400)
    except DecodeFailure as e:
        logger.warning(f"Undecodable upload: {e}")
        return _error(str(e), 422)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Batch colour extraction error: {e}")
        return _error('Error extracting colours', 500)


@app.route('/api/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    return jsonify({
        'status': 'healthy',
        'message': 'Media Colour Finder API is running',
        'sample_size': [colour_service.sample_width, colour_service.sample_height],
    })


@app.errorhandler(413)
def too_large(e):
    """Handle file too large error."""
    return _error(f'File too large. Maximum size is {MAX_CONTENT_LENGTH // (1024 * 1024)}MB.', 413)


@app.errorhandler(500)
def internal_error(e):
    """Handle internal server error."""
    logger.error(f"Internal server error: {e}")
    return _error('Internal server error', 500)


def main():
    logger.info("Starting Media Colour Finder API Server...")
    logger.info(f"Max upload size: {MAX_CONTENT_LENGTH // (1024 * 1024)}MB")
    logger.info("Endpoints: /api/colours, /api/colours/batch, /api/health")
    app.run(host='0.0.0.0', port=config.api_server_port(), threaded=False)


if __name__ == '__main__':
    main()
