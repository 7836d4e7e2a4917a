"""Command line interface.

Usage:
    geomagjax field DATE COLATITUDE LONGITUDE [OPTIONS]
    geomagjax range

Examples:
    # Main field at sea level, 50N 5E, mid 2021
    geomagjax field 2021.5 40 5

    # Secular variation 500 km above the geocentric sphere
    geomagjax field 2022.0 90 180 --radius 6871.2 --rate
"""

from __future__ import annotations

import logging
from typing import Annotated

import typer

from geomagjax.coefficients import load_coefficients_from_file
from geomagjax.errors import GeomagError
from geomagjax.igrf import PointType, SynthesisMode, synthesize, valid_date_range

app = typer.Typer(help="Evaluate the International Geomagnetic Reference Field.")


def _table(coefficients: str | None):
    if coefficients is None:
        return None
    return load_coefficients_from_file(coefficients)


@app.command()
def field(
    date: Annotated[float, typer.Argument(help="Decimal year, e.g. 2021.5")],
    colatitude: Annotated[float, typer.Argument(help="Colatitude [deg], 0-180")],
    longitude: Annotated[float, typer.Argument(help="East longitude [deg], 0-360")],
    altitude: Annotated[
        float, typer.Option(help="Altitude above the WGS84 ellipsoid [km] (geodetic)")
    ] = 0.0,
    radius: Annotated[
        float | None,
        typer.Option(help="Geocentric radius [km]; implies a geocentric point"),
    ] = None,
    rate: Annotated[bool, typer.Option("--rate", help="Secular variation [nT/yr]")] = False,
    quiet: Annotated[
        bool, typer.Option("--quiet", help="Suppress the extrapolation advisory")
    ] = False,
    coefficients: Annotated[
        str | None, typer.Option(help="IAGA coefficient file to use instead of the bundled table")
    ] = None,
) -> None:
    """Print the field components at one point."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if radius is not None:
        point_type, alt_or_r = PointType.GEOCENTRIC, radius
    else:
        point_type, alt_or_r = PointType.GEODETIC, altitude
    mode = SynthesisMode.RATE if rate else SynthesisMode.VALUE
    unit = "nT/yr" if rate else "nT"

    try:
        b = synthesize(
            mode,
            date,
            point_type,
            alt_or_r,
            colatitude,
            longitude,
            show_warnings=not quiet,
            table=_table(coefficients),
        )
    except (GeomagError, FileNotFoundError) as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(code=1) from err

    typer.echo(f"X (north)    {float(b.north):12.2f} {unit}")
    typer.echo(f"Y (east)     {float(b.east):12.2f} {unit}")
    typer.echo(f"Z (down)     {float(b.vertical):12.2f} {unit}")
    typer.echo(f"F (total)    {float(b.total_intensity):12.2f} {unit}")


@app.command("range")
def date_range(
    coefficients: Annotated[
        str | None, typer.Option(help="IAGA coefficient file to use instead of the bundled table")
    ] = None,
) -> None:
    """Print the accepted date window."""
    try:
        first, end = valid_date_range(_table(coefficients))
    except (ValueError, FileNotFoundError) as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(code=1) from err
    typer.echo(f"{first:.1f} <= date < {end:.1f}")


if __name__ == "__main__":
    app()
