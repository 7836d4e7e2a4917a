# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "geomagjax"]
#
# [tool.uv.sources]
# geomagjax = { path = ".." }
# ///
"""Evaluate the IGRF main field on a latitude/longitude grid.

Selects the coefficient rows for one date on the host, then evaluates the
whole grid with a single JIT-compiled, vmap'd call to ``evaluate_field``.
Writes ``colatitude,longitude,X,Y,Z,F`` rows to a CSV file.

Usage:
    uv run examples/field_grid.py [OPTIONS]

Examples:
    # 5 degree global grid at sea level for 2020
    uv run examples/field_grid.py --date 2020.0 --step 5

    # Secular variation at 400 km
    uv run examples/field_grid.py --date 2022.5 --altitude 400 --rate
"""

import csv
import math
import time
from typing import Annotated

import jax
import jax.numpy as jnp
import numpy as np
import typer

from geomagjax import set_dtype
from geomagjax.coefficients import load_default_coefficients
from geomagjax.igrf import SynthesisMode, evaluate_field, select_epoch

set_dtype(jnp.float64)  # Must be before any JIT compilation


def main(
    date: Annotated[float, typer.Option(help="Decimal year")] = 2020.0,
    altitude: Annotated[float, typer.Option(help="Geodetic altitude [km]")] = 0.0,
    step: Annotated[float, typer.Option(help="Grid spacing [deg]")] = 5.0,
    rate: Annotated[bool, typer.Option("--rate", help="Secular variation [nT/yr]")] = False,
    output: Annotated[str, typer.Option(help="CSV output path")] = "field_grid.csv",
) -> None:
    """Evaluate the field on a regular geodetic grid."""
    table = load_default_coefficients()
    mode = SynthesisMode.RATE if rate else SynthesisMode.VALUE
    sel = select_epoch(table, date, mode)
    low = jnp.asarray(table.data[sel.index_low, : sel.n_coefficients])
    high = jnp.asarray(table.data[sel.index_high, : sel.n_coefficients])

    colat = np.arange(0.0, 180.0 + 0.5 * step, step)
    lon = np.arange(0.0, 360.0, step)
    cc, ll = np.meshgrid(colat, lon, indexing="ij")
    theta = np.radians(cc.ravel())
    lam = np.radians(ll.ravel())

    def point(ct, st, cl, sl):
        return evaluate_field(
            low, high, sel.weight_low, sel.weight_high, altitude,
            ct, st, cl, sl, table.reference_radius, sel.max_degree, True,
        )

    grid = jax.jit(jax.vmap(point))
    t0 = time.perf_counter()
    b = grid(np.cos(theta), np.sin(theta), np.cos(lam), np.sin(lam))
    jax.block_until_ready(b)
    print(f"Evaluated {theta.size} points (degree {sel.max_degree}) in {time.perf_counter() - t0:.2f}s")

    with open(output, "w", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(["colatitude", "longitude", "X", "Y", "Z", "F"])
        for i in range(theta.size):
            writer.writerow(
                [
                    f"{math.degrees(theta[i]):.3f}",
                    f"{math.degrees(lam[i]):.3f}",
                    f"{float(b.north[i]):.2f}",
                    f"{float(b.east[i]):.2f}",
                    f"{float(b.vertical[i]):.2f}",
                    f"{float(b.total_intensity[i]):.2f}",
                ]
            )
    print(f"Wrote {output}")


if __name__ == "__main__":
    typer.run(main)
