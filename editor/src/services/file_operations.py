"""
Mobius Visualizer - File Operations Service

This module handles file I/O for mapping files and PNG export.
Separates file operations from UI logic.

A mapping file is JSON:
    {"points": {"val1": {"in": [re, im] | "inf", "out": ...}, ...},
     "curve_families": ["cartesian", ...]}
"""

import json
import logging

from constants import CURVE_FAMILY_NAMES, DEFAULT_CURVE_FAMILIES
from models.curve import is_curve_family
from services.wire_format import WireFormatError, decode_mapping_set, encode_mapping_set

logger = logging.getLogger(__name__)

MAPPING_FILE_FILTER = "Mapping Files (*.json);;All Files (*)"
PNG_FILE_FILTER = "PNG Files (*.png);;All Files (*)"


def build_mapping_document(points, curve_families):
	"""Build the JSON-ready structure for a mapping file

	Args:
		points: MappingSet to save
		curve_families: Iterable of active family keys

	Returns:
		Dictionary with points and curve_families
	"""
	return {
		'points': encode_mapping_set(points),
		'curve_families': [key for key in CURVE_FAMILY_NAMES if key in set(curve_families)],
	}


def parse_mapping_document(data):
	"""Validate a decoded mapping file

	Returns:
		(MappingSet, list of curve family keys)

	Raises:
		WireFormatError: If the document is not a valid mapping file
	"""
	if not isinstance(data, dict) or 'points' not in data:
		raise WireFormatError("Not a mapping file - missing 'points'")
	points = decode_mapping_set(data['points'])

	families = data.get('curve_families', DEFAULT_CURVE_FAMILIES)
	if not isinstance(families, list):
		raise WireFormatError("'curve_families' must be a list")
	unknown = [key for key in families if not is_curve_family(key)]
	if unknown:
		raise WireFormatError(f"Unknown curve families: {', '.join(map(str, unknown))}")
	return points, list(families)


def save_mapping_to_file(points, curve_families, filename):
	"""Save a mapping and its active curve families to a JSON file

	Raises:
		OSError: If file write fails
	"""
	document = build_mapping_document(points, curve_families)
	with open(filename, 'w', encoding='utf-8') as f:
		json.dump(document, f, indent=2)

	logger.info("Mapping saved to %s", filename)


def load_mapping_from_file(filename):
	"""Load a mapping file

	Returns:
		(MappingSet, list of curve family keys)

	Raises:
		OSError: If file read fails
		WireFormatError: If the file is not valid JSON or not a mapping file
	"""
	with open(filename, 'r', encoding='utf-8') as f:
		try:
			data = json.load(f)
		except json.JSONDecodeError as e:
			raise WireFormatError(f"Failed to parse mapping file - {e}") from e

	points, families = parse_mapping_document(data)
	logger.info("Mapping loaded from %s", filename)
	return points, families


def save_image_to_file(image, filename):
	"""Write a QImage as PNG

	Raises:
		OSError: If Qt cannot write the file
	"""
	if not image.save(filename, "PNG"):
		raise OSError(f"Failed to write image to {filename}")
	logger.info("Image exported to %s", filename)
