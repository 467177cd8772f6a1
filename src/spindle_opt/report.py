"""Text report of the Pareto-optimal spindle designs."""

from spindle_opt.oracle import from_objectives
from spindle_opt.parameters import ParameterSpace
from spindle_opt.results import OptimizationResult

# (header, width, format) per column
COLUMNS = [
    ("Vibration", 12, ".2f"),
    ("Bearing Life", 14, ".2f"),
    ("Temp Rise", 12, ".2f"),
    ("Power", 10, ".2f"),
    ("Speed", 10, "d"),
    ("Wheel Diam", 12, ".2f"),
    ("Preload", 10, ".2f"),
    ("Align Tol", 12, ".4f"),
    ("Spindle Type", 15, "s"),
    ("Bearing Type", 17, "s"),
    ("Cooling", 10, "s"),
    ("Lubrication", 13, "s"),
    ("Tool Interface", 16, "s"),
]


def format_pareto_report(result: OptimizationResult, space: ParameterSpace) -> str:
    """Format the rank-1 designs of a run as a fixed-width table.

    Each row lists vibration (mm/s), bearing life (hours, de-negated) and
    temperature rise (degrees Celsius) followed by the full parameter set.

    Args:
        result: Finished optimization run.
        space: Parameter space used to decode the designs.

    Returns:
        The report text, ending with the number of Pareto-optimal solutions.
    """
    front = result.pareto_front
    lines = [
        "=== Pareto-Optimal Spindle Arrangements ===",
        "",
        "Objectives: Minimize Vibration (mm/s), Maximize Bearing Life (hours), Minimize Temperature Rise (°C)",
        "",
        "".join(f"{header:<{width}}" for header, width, _ in COLUMNS).rstrip(),
    ]

    for i in range(len(front)):
        params = space.decode(front.x[i])
        vibration, bearing_life, temperature_rise = from_objectives(front.objectives[i])
        row = (
            vibration,
            bearing_life,
            temperature_rise,
            params.power_rating,
            params.max_speed,
            params.wheel_diameter,
            params.bearing_preload,
            params.alignment_tolerance,
            params.spindle_type,
            params.bearing_type,
            params.cooling_type,
            params.lubrication_type,
            params.tool_interface,
        )
        lines.append("".join(f"{value:<{width}{fmt}}" for value, (_, width, fmt) in zip(row, COLUMNS)).rstrip())

    lines.append("")
    lines.append(f"Total Pareto-optimal solutions found: {len(front)}")
    return "\n".join(lines) + "\n"
