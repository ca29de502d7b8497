"""
JSON input/output for smeared-concrete.

The JSON format is designed for inclusion in automated workflows
(parameter studies, calibration loops, regression checks).

Input JSON schema:
==================
{
  "units": "SI",
  "concrete": {
    "fc": 30, "model": "mc2010", "aggregate_type": "quartzite"
  },
  "constitutive_model": "mcft",
  "consider_crack_slip": true,
  "reinforcement": {
    "uniaxial": {"n_bars": 4, "diameter": 16, "fy": 500, "stress": 0}
  },
  "analysis": {
    "type": "uniaxial",
    "area": 40000,
    "strains": [0.0001, 0.0005, -0.001]
  }
}

Biaxial analyses use "type": "biaxial" with either
  "principal_strains": [[e1, e2, theta1], ...]   or
  "strains_xy": [[eps_x, eps_y, gamma_xy], ...]
and an optional "reference_length" (mm).  Web reinforcement is given as
  "reinforcement": {"web": {"width": 200, "x": {...}, "y": {...}}}

Output JSON schema:
===================
{
  "metadata": { "generator": "...", "analysis_type": "...", ... },
  "units": { ... },
  "material": { ... },
  "results": { ... }   // from HistoryResult.to_dict()
}
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any, Dict, Optional

from smeared_concrete.materials.parameters import ConcreteParameters
from smeared_concrete.materials.reinforcement import (
    ReinforcementContext,
    UniaxialReinforcement,
    WebReinforcement,
    WebReinforcementDirection,
)


def load_json_input(filepath: str | Path) -> Dict[str, Any]:
    """Load a JSON input file and return a configuration dictionary.

    Returns dict with keys:
      "parameters", "model", "consider_crack_slip", "reinforcement",
      "analysis_type", "analysis_params", "history", "xy", "units", "metadata"
    """
    filepath = Path(filepath)
    with open(filepath) as f:
        data = json.load(f)

    parameters = ConcreteParameters.from_dict(data.get("concrete", {"fc": 30.0}))

    analysis = data.get("analysis", {})
    analysis_type = analysis.get("type", "uniaxial").lower()

    xy = False
    if analysis_type == "uniaxial":
        history = list(analysis.get("strains", []))
    elif "strains_xy" in analysis:
        history = [tuple(s) for s in analysis["strains_xy"]]
        xy = True
    else:
        history = [tuple(s) for s in analysis.get("principal_strains", [])]

    reinforcement = parse_reinforcement(data.get("reinforcement"), analysis.get("area", 0.0))

    return {
        "parameters": parameters,
        "model": data.get("constitutive_model", "mcft").lower(),
        "consider_crack_slip": data.get("consider_crack_slip", True),
        "reinforcement": reinforcement,
        "analysis_type": analysis_type,
        "analysis_params": analysis,
        "history": history,
        "xy": xy,
        "units": data.get("units", "SI"),
        "metadata": {"source_file": str(filepath)},
    }


def parse_reinforcement(
    data: Optional[Dict[str, Any]],
    concrete_area: float = 0.0,
) -> Optional[ReinforcementContext]:
    """Build the reinforcement context from its JSON block (or None)."""
    if not data:
        return None

    if "uniaxial" in data:
        ud = data["uniaxial"]
        return UniaxialReinforcement(
            n_bars=ud.get("n_bars", 0),
            bar_diameter=ud.get("diameter", 0.0),
            concrete_area=ud.get("concrete_area", concrete_area),
            yield_stress=ud.get("fy", 500.0),
            stress=ud.get("stress", 0.0),
        )

    if "web" in data:
        wd = data["web"]
        width = wd.get("width", 0.0)

        def _direction(dd: Optional[Dict[str, Any]], angle: float):
            if dd is None:
                return None
            return WebReinforcementDirection(
                bar_diameter=dd["diameter"],
                bar_spacing=dd["spacing"],
                width=dd.get("width", width),
                yield_stress=dd.get("fy", 500.0),
                angle=dd.get("angle", angle),
                n_legs=dd.get("n_legs", 2),
                stress=dd.get("stress", 0.0),
            )

        return WebReinforcement(
            x=_direction(wd.get("x"), 0.0),
            y=_direction(wd.get("y"), math.pi / 2.0),
        )

    raise ValueError(f"Unknown reinforcement block: {sorted(data)}")


def save_json_output(
    result_dict: Dict[str, Any],
    filepath: str | Path,
    input_file: str = "",
    analysis_type: str = "uniaxial",
    material: Dict[str, Any] | None = None,
    computation_time: float | None = None,
) -> None:
    """Save analysis results to a JSON file.

    Produces the output envelope with metadata, units, material, and results.
    """
    import datetime
    from smeared_concrete import __version__

    output = {
        "metadata": {
            "version": "1.0.0",
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
            "generator": f"smeared-concrete v{__version__}",
            "analysis_type": analysis_type,
            "input_source": {
                "format": "smeared_concrete_json",
                "file": input_file,
            },
        },
        "units": {
            "length": "mm",
            "force": "N",
            "stress": "MPa",
            "strain": "-",
            "angle": "rad",
        },
        "material": material or {},
        "results": result_dict,
    }

    if computation_time is not None:
        output["metadata"]["computation_time"] = computation_time

    filepath = Path(filepath)
    with open(filepath, "w") as f:
        json.dump(output, f, indent=2, default=_json_default)


def write_csv(result, filepath: str | Path) -> None:
    """Write the step table of a HistoryResult as CSV."""
    columns = result.columns
    with open(filepath, "w") as f:
        f.write("step," + ",".join(columns) + ",cracked,yielded,crushed\n")
        for p in result.points:
            values = ",".join(f"{v:.10e}" for v in p.values)
            f.write(f"{p.step},{values},{int(p.cracked)},{int(p.yielded)},{int(p.crushed)}\n")


def _json_default(obj):
    """Handle non-serializable types."""
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, float) and (math.isnan(obj) or math.isinf(obj)):
        return str(obj)
    raise TypeError(f"Object of type {type(obj)} is not JSON serializable")
