"""
Copyright 2026 optical-flat authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

===============================================================================
Data export utilities
===============================================================================
Export engine results to files:

- CSV: ray segments, parameter sweeps
- JSON: a full RayPath
===============================================================================
"""

import csv
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from ..core.ray import Ray
from ..core.simulator import RayPath

logger = logging.getLogger(__name__)


def ray_path_to_dict(ray_path: RayPath) -> Dict[str, Any]:
    """
    JSON-serializable description of a RayPath.

    Example:
        >>> d = ray_path_to_dict(compute_ray_path(1.5, 5.0))
        >>> round(d['lateral_shift_mm'], 3)
        1.646
    """
    return {
        'refractive_index': ray_path.config.refractive_index,
        'thickness_mm': ray_path.config.thickness_mm,
        'refraction_angle_deg': ray_path.refraction_angle_deg,
        'lateral_shift_mm': ray_path.lateral_shift_mm,
        'placement': ray_path.placement,
        'surfaces': {
            'c1': ray_path.surfaces.c1,
            'c2': ray_path.surfaces.c2,
            'thickness_px': ray_path.surfaces.thickness_px,
        },
        'top_point': ray_path.top_point.to_dict(),
        'entry_point': ray_path.entry_point.to_dict(),
        'exit_point': ray_path.exit_point.to_dict(),
        'bottom_point': ray_path.bottom_point.to_dict(),
        'internal_direction': ray_path.internal_direction.to_dict(),
    }


def save_ray_path_json(
    ray_path: RayPath,
    output_path: Union[str, Path],
    filename: str = "ray_path.json",
) -> Path:
    """
    Write ray_path_to_dict(ray_path) as JSON.

    Returns:
        Path: Full path to the created file.

    Raises:
        OSError: If the directory cannot be created or the file cannot be written.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    json_file = output_dir / filename
    json_file.write_text(json.dumps(ray_path_to_dict(ray_path), indent=2), encoding='utf-8')
    logger.info(f"Saved ray path to {json_file}")
    return json_file


def save_rays_csv(
    ray_segments: List[Ray],
    output_path: Union[str, Path],
    filename: str = "rays.csv",
    precision_coords: int = 4,
) -> Path:
    """
    Export ray segments to a CSV file.

    Args:
        ray_segments: List of Ray objects to export.
        output_path: Directory where the CSV file will be saved.
        filename: Name of the output CSV file (default: "rays.csv").
        precision_coords: Decimal places for coordinate values (default: 4).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename
    coord_fmt = f"{{:.{precision_coords}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([
            'ray_index',
            'segment_type',
            'p1_x',
            'p1_y',
            'p2_x',
            'p2_y',
            'length',
            'uuid',
            'parent_uuid',
        ])
        for i, ray in enumerate(ray_segments):
            writer.writerow([
                i,
                ray.segment_type,
                coord_fmt.format(ray.p1.x),
                coord_fmt.format(ray.p1.y),
                coord_fmt.format(ray.p2.x),
                coord_fmt.format(ray.p2.y),
                coord_fmt.format(ray.length),
                ray.uuid,
                ray.parent_uuid or '',
            ])

    logger.info(f"Saved {len(ray_segments)} ray segments to {csv_file}")
    return csv_file


def save_sweep_csv(
    parameter_name: str,
    parameter_values: Iterable[float],
    shifts_mm: Iterable[float],
    output_path: Union[str, Path],
    filename: str = "sweep.csv",
    precision: int = 6,
) -> Path:
    """
    Export a one-parameter sweep (e.g. from shift_vs_thickness) to CSV.

    Args:
        parameter_name: Header of the first column (e.g. 'thickness_mm').
        parameter_values: Swept input values.
        shifts_mm: Lateral shift for each input value.
        output_path: Directory where the CSV file will be saved.
        filename: Name of the output CSV file.
        precision: Decimal places written.

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        ValueError: If the two sequences differ in length.
    """
    values = list(parameter_values)
    shifts = list(shifts_mm)
    if len(values) != len(shifts):
        raise ValueError(
            f"Sweep length mismatch: {len(values)} {parameter_name} values, "
            f"{len(shifts)} shifts"
        )

    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_file = output_dir / filename
    fmt = f"{{:.{precision}f}}"

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)
        writer.writerow([parameter_name, 'lateral_shift_mm'])
        for value, shift in zip(values, shifts):
            writer.writerow([fmt.format(value), fmt.format(shift)])

    logger.info(f"Saved {len(values)}-point {parameter_name} sweep to {csv_file}")
    return csv_file
