# /// script
# requires-python = ">=3.11"
# dependencies = ["typer>=0.9.0", "orbitcore"]
#
# [tool.uv.sources]
# orbitcore = { path = ".." }
# ///
"""Propagate a catalog of element sets and report Earth-fixed states.

Reads a catalog file of two- or three-line element sets, builds one SGP4
propagator per object and prints, for a chosen instant, every object's
WGS84 position together with its look angles from an observer.  With
``--track`` the ground track of a single object is printed instead.

Requires orbitcore to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/propagate.py CATALOG [OPTIONS]

Examples:
    # States of every object at the catalog's first epoch
    uv run examples/propagate.py stations.txt

    # States at a given UTC instant, seen from Paris
    uv run examples/propagate.py stations.txt --when 2024-03-01T12:00:00 \\
        --lat 48.85 --lon 2.35

    # Ground track of one object over one orbit, every minute
    uv run examples/propagate.py stations.txt --track "ISS (ZARYA)" --step 60
"""

import datetime
import time
from pathlib import Path
from typing import Annotated

import jax.numpy as jnp
import typer

from orbitcore import set_dtype
from orbitcore.coordinates import EarthPosition, coord_efi_wgs84
from orbitcore.frames import Frame, enu_to_az_el, transform
from orbitcore.nutation import nutation
from orbitcore.propagation import CatalogPropagator
from orbitcore.sgp4 import parse_tle_catalog
from orbitcore.time import time_gregorian, time_julian_datetime
from orbitcore.timecorr import default_time_correlation, time_stamp

set_dtype(jnp.float64)


def _print_states(catalog: CatalogPropagator, jt: float, observer: EarthPosition) -> None:
    tcorr = catalog.time_correlation
    timestamp = time_stamp(tcorr, jt)
    nut = nutation(timestamp)

    t0 = time.perf_counter()
    states = catalog.propagate_all(jt, nutation=nut)
    print(f"  Propagated {len(states)}/{len(catalog)} objects in {time.perf_counter() - t0:.2f}s")
    print(f"\n{'name':<24} {'lat':>9} {'lon':>10} {'h [km]':>10} {'az':>8} {'el':>8} {'range [km]':>11}")

    for name, osv in states.items():
        ground = coord_efi_wgs84(osv.position)
        enu = transform(osv, Frame.ENU, nutation=nut, observer=observer)
        look = enu_to_az_el(enu)
        print(
            f"{name:<24} {float(ground.lat):9.4f} {float(ground.lon):10.4f} "
            f"{float(ground.h) / 1e3:10.1f} {float(look.az):8.2f} {float(look.el):8.2f} "
            f"{float(look.dist) / 1e3:11.1f}"
        )


def _print_track(catalog: CatalogPropagator, name: str, jt: float, step: float) -> None:
    period = catalog.orbital_period(name)
    track = catalog.propagate_one_range(name, jt, jt + period, step / 86400.0)
    print(f"  {name}: period {period * 1440.0:.1f} min, {len(track)} points")
    print(f"\n{'time (UTC)':<26} {'lat':>9} {'lon':>10} {'h [km]':>10}")
    for i, point in enumerate(track):
        when = time_gregorian(jt + i * step / 86400.0).isoformat()
        print(f"{when:<26} {float(point.lat):9.4f} {float(point.lon):10.4f} {float(point.h) / 1e3:10.1f}")


def main(
    catalog_file: Annotated[Path, typer.Argument(help="Two- or three-line element catalog")],
    when: Annotated[
        datetime.datetime | None,
        typer.Option(help="UTC instant (defaults to the first record's epoch)"),
    ] = None,
    lat: Annotated[float, typer.Option(help="Observer geodetic latitude [deg]")] = 0.0,
    lon: Annotated[float, typer.Option(help="Observer longitude [deg]")] = 0.0,
    height: Annotated[float, typer.Option(help="Observer height above the ellipsoid [m]")] = 0.0,
    track: Annotated[
        str | None, typer.Option(help="Print the ground track of this object over one orbit")
    ] = None,
    step: Annotated[float, typer.Option(help="Ground track step in seconds")] = 60.0,
) -> None:
    """Propagate an element-set catalog with SGP4."""
    # ── Stage 1: Parse the catalog ───────────────────────────────────────
    print(f"── Stage 1: Parsing {catalog_file} ──")
    records = parse_tle_catalog(catalog_file.read_text())
    n_bad = sum(1 for r in records if not r.checksum_valid)
    print(f"  Parsed {len(records)} element sets ({n_bad} with checksum mismatches)")
    if not records:
        print("ERROR: No element sets found. Exiting.")
        raise typer.Exit(code=1)

    # ── Stage 2: Initialize propagators ──────────────────────────────────
    print("\n── Stage 2: Initializing SGP4 propagators ──")
    t0 = time.perf_counter()
    catalog = CatalogPropagator(records, default_time_correlation())
    print(f"  Initialized {len(catalog)} propagators in {time.perf_counter() - t0:.2f}s")

    jt = time_julian_datetime(when) if when is not None else records[0].jt_epoch
    print(f"  Instant: {time_gregorian(jt).isoformat()} UTC")

    # ── Stage 3: Propagate ───────────────────────────────────────────────
    print("\n── Stage 3: Propagating ──")
    if track is not None:
        if track not in catalog:
            print(f"ERROR: No object named {track!r}. Exiting.")
            raise typer.Exit(code=1)
        _print_track(catalog, track, jt, step)
    else:
        _print_states(catalog, jt, EarthPosition(lat=lat, lon=lon, h=height))

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
