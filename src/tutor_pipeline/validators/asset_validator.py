"""Structural validation of a generated asset directory.

Each ``<topic>.<lang>.<mode>.json`` file is parsed with the pydantic model of
its mode, and its identifying fields must agree with the file name.
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from pydantic import ValidationError

from tutor_pipeline.index_generator import parse_asset_filename
from tutor_pipeline.utils.file_io import list_files, read_json
from tutor_pipeline.validators.schema import ASSET_MODELS, ValidationReport

logger = logging.getLogger(__name__)


def validate_asset_file(path: Union[str, Path]) -> List[str]:
    """Return error messages for one asset file (empty when valid)."""
    path = Path(path)
    name = parse_asset_filename(path.name)
    if name is None:
        return [f"{path.name}: not an asset file name"]

    model = ASSET_MODELS.get(name.mode)
    if model is None:
        return [f"{path.name}: unknown mode '{name.mode}'"]

    try:
        data = read_json(path)
    except (OSError, json.JSONDecodeError) as e:
        return [f"{path.name}: unreadable ({e})"]

    if isinstance(data, dict) and data.get("mode") != name.mode:
        return [f"{path.name}: mode '{data.get('mode')}' does not match file name"]

    try:
        asset = model.model_validate(data)
    except ValidationError as e:
        return [f"{path.name}: {error['loc']} {error['msg']}" for error in e.errors()]

    errors = []
    if asset.topic != name.topic:
        errors.append(f"{path.name}: topic '{asset.topic}' does not match file name")
    if asset.lang != name.lang:
        errors.append(f"{path.name}: lang '{asset.lang}' does not match file name")
    return errors


def validate_asset_dir(asset_dir: Union[str, Path]) -> ValidationReport:
    """Validate every asset file in ``asset_dir``.

    Raises:
        OutputDirectoryError: If asset_dir does not exist
    """
    report = ValidationReport()

    for path in list_files(asset_dir, "*.json"):
        if parse_asset_filename(path.name) is None:
            continue
        report.checked += 1
        report.errors.extend(validate_asset_file(path))

    logger.info(
        f"Validated {report.checked} assets, {len(report.errors)} errors",
        extra={"asset_dir": str(asset_dir)},
    )
    return report
